"""Static lookup tables: icons, air-quality categories, scaled values and thresholds."""

from __future__ import annotations

from typing import Dict, Tuple

# Closed set of display icon identifiers the presentation layer understands.
ICON_SUN = "sun"
ICON_MOON = "moon"
ICON_CLOUD = "cloud"
ICON_CLOUD_SUN = "cloud-sun"
ICON_CLOUD_MOON = "cloud-moon"
ICON_RAIN = "rain"
ICON_DRIZZLE = "drizzle"
ICON_LIGHTNING = "lightning"
ICON_SNOW = "snow"
ICON_FOG = "fog"

DISPLAY_ICONS = frozenset({
    ICON_SUN,
    ICON_MOON,
    ICON_CLOUD,
    ICON_CLOUD_SUN,
    ICON_CLOUD_MOON,
    ICON_RAIN,
    ICON_DRIZZLE,
    ICON_LIGHTNING,
    ICON_SNOW,
    ICON_FOG,
})

DEFAULT_ICON = ICON_SUN

# OpenWeatherMap icon codes ("<group><d|n>"), see
# https://openweathermap.org/weather-conditions#Icon-list
ICON_BY_PROVIDER_CODE: Dict[str, str] = {
    "01d": ICON_SUN,
    "01n": ICON_MOON,
    "02d": ICON_CLOUD_SUN,
    "02n": ICON_CLOUD_MOON,
    "03d": ICON_CLOUD,
    "03n": ICON_CLOUD,
    "04d": ICON_CLOUD,
    "04n": ICON_CLOUD,
    "09d": ICON_RAIN,
    "09n": ICON_RAIN,
    "10d": ICON_DRIZZLE,
    "10n": ICON_DRIZZLE,
    "11d": ICON_LIGHTNING,
    "11n": ICON_LIGHTNING,
    "13d": ICON_SNOW,
    "13n": ICON_SNOW,
    "50d": ICON_FOG,
    "50n": ICON_FOG,
}

# Upstream air-quality class (1 = best .. 5 = worst) -> category label.
AQI_CATEGORY_BY_CLASS: Dict[int, str] = {
    1: "Good",
    2: "Fair",
    3: "Moderate",
    4: "Unhealthy",
    5: "Very Unhealthy",
}
UNKNOWN_AQI_CATEGORY = "Unknown"

# Upstream class -> representative value on the familiar 0-500 scale.
AQI_SCALED_VALUE_BY_CLASS: Dict[int, int] = {
    1: 25,
    2: 75,
    3: 125,
    4: 175,
    5: 250,
}
UNKNOWN_AQI_SCALED_VALUE = 0

# Dominant pollutant is only reported from this class upward.
DOMINANT_POLLUTANT_MIN_CLASS = 3

# Display names in fixed iteration order (ties resolve to the earliest entry).
POLLUTANT_ORDER: Tuple[str, ...] = ("PM2.5", "PM10", "O3", "NO2", "SO2", "CO")

# "Moderate" concentration thresholds in the upstream unit (µg/m³).
MODERATE_THRESHOLDS: Dict[str, float] = {
    "PM2.5": 35.4,
    "PM10": 154.0,
    "O3": 100.0,
    "NO2": 100.0,
    "SO2": 75.0,
    "CO": 9000.0,
}

# Upstream component key -> display name.
POLLUTANT_BY_COMPONENT: Dict[str, str] = {
    "pm2_5": "PM2.5",
    "pm10": "PM10",
    "o3": "O3",
    "no2": "NO2",
    "so2": "SO2",
    "co": "CO",
}

UPSTREAM_POLLUTANT_UNIT = "µg/m³"
CO_DISPLAY_UNIT = "mg/m³"
CO_DISPLAY_DIVISOR = 1000.0
