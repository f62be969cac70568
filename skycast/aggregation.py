"""Aggregate location, weather, forecast and air quality into one typed result."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional

import requests

from skycast.config import Settings
from skycast.domain import AggregateFailure, AggregateSuccess, DegradedData, FailureKind, failure
from skycast.fetchers import AirQualityFetcher, WeatherBundle, WeatherFetcher
from skycast.grouping import group_by_local_day
from skycast.location_resolver import (
    LocationQuery,
    LocationResolver,
    LocationValidationError,
    ResolvedLocation,
    build_strategies,
)
from skycast.normalizer import (
    format_utc_offset,
    normalize_aqi,
    normalize_current,
    normalize_day,
    normalize_hour,
)
from skycast.providers.base import AirQualitySample
from skycast.providers.factory import ProviderSet, build_providers
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="aggregation")

ProviderBuilder = Callable[[Settings, requests.Session], ProviderSet]


class AggregationPipeline:
    """
    One query in, one AggregateResult out.

    States: resolving location -> fetching weather and AQI -> grouping ->
    normalizing -> done. Location resolution is sequential. The current,
    forecast and air-quality calls are independent and run on a small thread
    pool that is joined before grouping starts. Expected upstream problems
    come back as AggregateFailure; only programmer defects raise.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        session: requests.Session | None = None,
        provider_builder: ProviderBuilder = build_providers,
    ) -> None:
        self.settings = settings
        self._session = session
        self._provider_builder = provider_builder

    def run(self, raw_location: str) -> AggregateSuccess | AggregateFailure:
        """Parse user input ("Paris", "coords:48.85,2.35", "48.85,2.35") and aggregate."""
        if not self.settings.openweather_api_key:
            return self._configuration_failure()
        try:
            query = LocationQuery.parse(raw_location)
        except LocationValidationError as exc:
            return failure(FailureKind.VALIDATION, str(exc))
        return self.run_query(query)

    def run_query(self, query: LocationQuery) -> AggregateSuccess | AggregateFailure:
        if not self.settings.openweather_api_key:
            return self._configuration_failure()

        owns_session = self._session is None
        session = self._session or requests.Session()
        try:
            providers = self._provider_builder(self.settings, session)
            return self._aggregate(query, providers)
        finally:
            if owns_session:
                session.close()

    def _configuration_failure(self) -> AggregateFailure:
        logger.error("OpenWeatherMap API key is missing (SKYCAST_OPENWEATHER_API_KEY)")
        return failure(
            FailureKind.CONFIGURATION,
            "Weather API key is not configured. Set SKYCAST_OPENWEATHER_API_KEY.",
        )

    def _aggregate(self, query: LocationQuery, providers: ProviderSet) -> AggregateSuccess | AggregateFailure:
        resolver = LocationResolver(
            build_strategies(providers.primary_geocoder, providers.reverse_geocoder, providers.secondary_geocoder)
        )
        location = resolver.resolve(query)
        if isinstance(location, AggregateFailure):
            return location

        weather_fetcher = WeatherFetcher(providers.weather)
        aqi_fetcher = AirQualityFetcher(providers.air_quality)

        # Leaving the executor block joins every worker, so no call outlives this run.
        with ThreadPoolExecutor(max_workers=3, thread_name_prefix="skycast-fetch") as executor:
            aqi_future = executor.submit(aqi_fetcher.fetch, location)
            weather = weather_fetcher.fetch(location, executor=executor)
            aqi_sample = aqi_future.result()

        if isinstance(weather, AggregateFailure):
            return weather

        return self._normalize(location, weather, aqi_sample)

    def _normalize(
        self,
        location: ResolvedLocation,
        weather: WeatherBundle,
        aqi_sample: Optional[AirQualitySample],
    ) -> AggregateSuccess:
        offset = weather.utc_offset_seconds
        groups = group_by_local_day(weather.forecast, offset, max_days=self.settings.forecast_days)

        aqi = normalize_aqi(aqi_sample) if aqi_sample is not None else None
        degraded = [] if aqi is not None else [DegradedData.AIR_QUALITY]

        days = [normalize_day(group, offset, aqi) for group in groups]
        preview = [normalize_hour(s, offset) for s in weather.forecast[: self.settings.hourly_preview_count]]

        logger.info(
            "Aggregated weather",
            extra={"location": location.display_name, "days": len(days), "aqi": aqi is not None},
        )
        return AggregateSuccess(
            current=normalize_current(weather.current, location.display_name),
            days=days,
            aqi=aqi,
            hourly=preview or None,
            resolved_lat=location.latitude,
            resolved_lon=location.longitude,
            time_zone=format_utc_offset(offset),
            degraded=degraded,
        )


def get_weather_for_location(
    raw_location: str,
    settings: Settings,
    *,
    session: requests.Session | None = None,
) -> AggregateSuccess | AggregateFailure:
    """Convenience entry point used by the HTTP layer."""
    return AggregationPipeline(settings, session=session).run(raw_location)


def main():
    """Manual test helper: python -m skycast.aggregation "Paris"."""
    import sys

    from skycast.config import settings

    location = sys.argv[1] if len(sys.argv) > 1 else "coords:48.85,2.35"
    result = get_weather_for_location(location, settings)
    print(result.model_dump_json(indent=2))


if __name__ == "__main__":
    main()
