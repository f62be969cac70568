"""Unit conversion, icon mapping and air-quality derivation for display."""
from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

from skycast.domain import (
    DisplayPollutant,
    NormalizedAqi,
    NormalizedCurrent,
    NormalizedDay,
    NormalizedHour,
)
from skycast.grouping import DayGroup, date_label, hour_label, pick_representative
from skycast.lookup_tables import (
    AQI_CATEGORY_BY_CLASS,
    AQI_SCALED_VALUE_BY_CLASS,
    CO_DISPLAY_DIVISOR,
    CO_DISPLAY_UNIT,
    DEFAULT_ICON,
    DOMINANT_POLLUTANT_MIN_CLASS,
    ICON_BY_PROVIDER_CODE,
    MODERATE_THRESHOLDS,
    POLLUTANT_ORDER,
    UNKNOWN_AQI_CATEGORY,
    UNKNOWN_AQI_SCALED_VALUE,
)
from skycast.providers.base import AirQualitySample, PollutantReading, RawCurrentSample, RawForecastSample

MS_TO_KMH = 3.6


def round_half_up(value: float) -> int:
    """Nearest integer, halves away from negative infinity (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def round_one_decimal(value: float) -> float:
    """One decimal place, halves rounded up on the decimal representation."""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def map_icon(icon_code: Optional[str]) -> str:
    return ICON_BY_PROVIDER_CODE.get(icon_code or "", DEFAULT_ICON)


def wind_kmh(speed_ms: float) -> int:
    return round_half_up(speed_ms * MS_TO_KMH)


def aqi_category(class_value: int) -> str:
    return AQI_CATEGORY_BY_CLASS.get(class_value, UNKNOWN_AQI_CATEGORY)


def aqi_scaled_value(class_value: int) -> int:
    return AQI_SCALED_VALUE_BY_CLASS.get(class_value, UNKNOWN_AQI_SCALED_VALUE)


def dominant_pollutant(class_value: int, pollutants: List[PollutantReading]) -> Optional[str]:
    """Pollutant with the highest concentration/threshold ratio above 1.

    Only evaluated for Moderate-or-worse classes. Pollutants are walked in the
    fixed POLLUTANT_ORDER and only a strictly greater ratio replaces the
    current best, so ties go to the earlier pollutant.
    """
    if not DOMINANT_POLLUTANT_MIN_CLASS <= class_value <= max(AQI_CATEGORY_BY_CLASS):
        return None
    by_name = {p.name: p for p in pollutants}
    best_name: Optional[str] = None
    best_ratio = 1.0
    for name in POLLUTANT_ORDER:
        reading = by_name.get(name)
        if reading is None:
            continue
        ratio = reading.concentration / MODERATE_THRESHOLDS[name]
        if ratio > best_ratio:
            best_name, best_ratio = name, ratio
    return best_name


def display_pollutants(pollutants: List[PollutantReading]) -> List[DisplayPollutant]:
    """Convert CO to mg/m³, round to one decimal, keep non-negative values in fixed order."""
    by_name = {p.name: p for p in pollutants}
    out: List[DisplayPollutant] = []
    for name in POLLUTANT_ORDER:
        reading = by_name.get(name)
        if reading is None or reading.concentration < 0:
            continue
        if name == "CO":
            value, unit = reading.concentration / CO_DISPLAY_DIVISOR, CO_DISPLAY_UNIT
        else:
            value, unit = reading.concentration, reading.unit
        out.append(DisplayPollutant(name=name, value=round_one_decimal(value), unit=unit))
    return out


def normalize_aqi(sample: AirQualitySample) -> NormalizedAqi:
    return NormalizedAqi(
        scaled_value=aqi_scaled_value(sample.class_value),
        category=aqi_category(sample.class_value),
        dominant_pollutant=dominant_pollutant(sample.class_value, sample.pollutants),
        pollutants=display_pollutants(sample.pollutants),
    )


def normalize_current(sample: RawCurrentSample, location_name: str) -> NormalizedCurrent:
    return NormalizedCurrent(
        location_name=location_name,
        temperature=round_half_up(sample.temperature),
        feels_like=round_half_up(sample.feels_like),
        humidity=int(sample.humidity),
        wind_speed_kmh=wind_kmh(sample.wind_speed),
        description=sample.description,
        icon=map_icon(sample.icon_code),
        epoch_seconds=int(sample.epoch_seconds),
    )


def normalize_hour(sample: RawForecastSample, utc_offset_seconds: int) -> NormalizedHour:
    return NormalizedHour(
        time_label=hour_label(sample.epoch_seconds, utc_offset_seconds),
        temperature=round_half_up(sample.temperature),
        description=sample.description,
        icon=map_icon(sample.icon_code),
    )


def normalize_day(group: DayGroup, utc_offset_seconds: int, aqi: Optional[NormalizedAqi] = None) -> NormalizedDay:
    """Headline from the representative sample, extrema from the whole day."""
    headline = pick_representative(group, utc_offset_seconds)
    return NormalizedDay(
        date_key=group.date_key,
        date_label=date_label(group.date_key),
        temp_high=round_half_up(group.temp_high),
        temp_low=round_half_up(group.temp_low),
        description=headline.description,
        icon=map_icon(headline.icon_code),
        aqi=aqi,
        hourly=[normalize_hour(s, utc_offset_seconds) for s in group.samples],
    )


def format_utc_offset(utc_offset_seconds: int) -> str:
    """7200 -> "UTC+02:00", -16200 -> "UTC-04:30"."""
    sign = "+" if utc_offset_seconds >= 0 else "-"
    minutes = abs(utc_offset_seconds) // 60
    return f"UTC{sign}{minutes // 60:02d}:{minutes % 60:02d}"
