import unittest

from skycast.grouping import DayGroup
from skycast.normalizer import (
    aqi_category,
    aqi_scaled_value,
    display_pollutants,
    dominant_pollutant,
    format_utc_offset,
    map_icon,
    normalize_aqi,
    normalize_current,
    normalize_day,
    round_half_up,
    round_one_decimal,
    wind_kmh,
)
from skycast.providers.base import AirQualitySample, PollutantReading, RawCurrentSample, RawForecastSample

BASE = 1721606400  # 2024-07-22T00:00:00Z
HOUR = 3600


def _reading(name, value):
    return PollutantReading(name=name, concentration=value, unit="µg/m³")


def _forecast(epoch, temp, temp_min, temp_max, description, icon):
    return RawForecastSample(
        epoch_seconds=epoch,
        temperature=temp,
        temp_min=temp_min,
        temp_max=temp_max,
        feels_like=temp,
        humidity=40,
        wind_speed=2.0,
        condition_code=None,
        icon_code=icon,
        description=description,
    )


class TestConversions(unittest.TestCase):
    def test_wind_speed_ms_to_kmh(self):
        self.assertEqual(wind_kmh(10), 36)
        self.assertEqual(wind_kmh(0), 0)

    def test_round_half_up(self):
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(21.4), 21)
        self.assertEqual(round_half_up(-2.5), -2)
        self.assertEqual(round_half_up(-2.6), -3)

    def test_round_one_decimal(self):
        self.assertEqual(round_one_decimal(12.345), 12.3)
        self.assertEqual(round_one_decimal(0.25), 0.3)

    def test_icon_mapping(self):
        self.assertEqual(map_icon("01n"), "moon")
        self.assertEqual(map_icon("10d"), "drizzle")
        self.assertEqual(map_icon("50n"), "fog")
        self.assertEqual(map_icon("99x"), "sun")
        self.assertEqual(map_icon(None), "sun")

    def test_aqi_lookup_tables(self):
        self.assertEqual([aqi_scaled_value(c) for c in range(1, 6)], [25, 75, 125, 175, 250])
        self.assertEqual(aqi_category(1), "Good")
        self.assertEqual(aqi_category(5), "Very Unhealthy")
        self.assertEqual(aqi_category(0), "Unknown")
        self.assertEqual(aqi_scaled_value(9), 0)

    def test_format_utc_offset(self):
        self.assertEqual(format_utc_offset(0), "UTC+00:00")
        self.assertEqual(format_utc_offset(7200), "UTC+02:00")
        self.assertEqual(format_utc_offset(-16200), "UTC-04:30")


class TestAirQuality(unittest.TestCase):
    def test_unhealthy_pm25_dominates(self):
        sample = AirQualitySample(
            class_value=4,
            epoch_seconds=BASE,
            pollutants=[_reading("PM2.5", 50.0), _reading("PM10", 40.0), _reading("O3", 60.0), _reading("CO", 400.0)],
        )
        aqi = normalize_aqi(sample)
        self.assertEqual(aqi.dominant_pollutant, "PM2.5")
        self.assertEqual(aqi.category, "Unhealthy")
        self.assertEqual(aqi.scaled_value, 175)

    def test_ties_resolve_to_fixed_order(self):
        readings = [_reading("NO2", 200.0), _reading("O3", 200.0)]
        self.assertEqual(dominant_pollutant(3, readings), "O3")
        readings = [_reading("PM10", 308.0), _reading("PM2.5", 70.8)]
        self.assertEqual(dominant_pollutant(5, readings), "PM2.5")

    def test_no_dominant_pollutant_below_moderate(self):
        self.assertIsNone(dominant_pollutant(2, [_reading("PM2.5", 500.0)]))

    def test_ratio_must_exceed_one(self):
        self.assertIsNone(dominant_pollutant(3, [_reading("PM2.5", 35.4), _reading("SO2", 10.0)]))

    def test_co_is_shown_in_milligrams(self):
        pollutants = display_pollutants([_reading("CO", 1500.0)])
        self.assertEqual(len(pollutants), 1)
        self.assertEqual(pollutants[0].value, 1.5)
        self.assertEqual(pollutants[0].unit, "mg/m³")

    def test_display_order_and_negative_values(self):
        pollutants = display_pollutants(
            [_reading("SO2", 1.04), _reading("PM10", -1.0), _reading("PM2.5", 8.26)]
        )
        self.assertEqual([p.name for p in pollutants], ["PM2.5", "SO2"])
        self.assertEqual([p.value for p in pollutants], [8.3, 1.0])


class TestNormalizeSamples(unittest.TestCase):
    def test_normalize_current(self):
        sample = RawCurrentSample(
            epoch_seconds=BASE,
            temperature=21.5,
            feels_like=20.49,
            humidity=48,
            wind_speed=10.0,
            condition_code=800,
            icon_code="01d",
            description="clear sky",
        )
        current = normalize_current(sample, "Paris, FR")
        self.assertEqual(current.location_name, "Paris, FR")
        self.assertEqual(current.temperature, 22)
        self.assertEqual(current.feels_like, 20)
        self.assertEqual(current.wind_speed_kmh, 36)
        self.assertEqual(current.icon, "sun")

    def test_normalize_day_uses_representative_and_day_extrema(self):
        group = DayGroup(
            date_key="2024-07-22",
            samples=[
                _forecast(BASE + 9 * HOUR, 15.0, 11.6, 15.0, "mist", "50d"),
                _forecast(BASE + 15 * HOUR, 24.0, 22.0, 26.5, "light rain", "10d"),
                _forecast(BASE + 21 * HOUR, 18.0, 17.0, 18.0, "clear sky", "01n"),
            ],
        )
        day = normalize_day(group, 0)
        self.assertEqual(day.date_label, "Mon, Jul 22")
        self.assertEqual(day.temp_high, 27)
        self.assertEqual(day.temp_low, 12)
        self.assertEqual(day.description, "light rain")
        self.assertEqual(day.icon, "drizzle")
        self.assertEqual([h.time_label for h in day.hourly], ["9 AM", "3 PM", "9 PM"])
        self.assertIsNone(day.aqi)


if __name__ == "__main__":
    unittest.main()
