"""Weather and air-quality retrieval for a resolved location."""
from __future__ import annotations

from concurrent.futures import Executor
from dataclasses import dataclass
from typing import List, Optional

from skycast.domain import AggregateFailure, FailureKind, failure
from skycast.location_resolver import ResolvedLocation
from skycast.providers.base import (
    AirQualityClient,
    AirQualitySample,
    ProviderError,
    RawCurrentSample,
    RawForecastSample,
    WeatherClient,
)
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="fetchers")


@dataclass
class WeatherBundle:
    """Current sample, forecast samples and the offset used for day grouping."""
    current: RawCurrentSample
    forecast: List[RawForecastSample]
    utc_offset_seconds: int


class WeatherFetcher:
    """Current conditions + 3-hour forecast. Any failure is terminal for the query."""

    def __init__(self, client: WeatherClient) -> None:
        self.client = client

    def fetch(self, location: ResolvedLocation, *, executor: Executor | None = None) -> WeatherBundle | AggregateFailure:
        """Fetch both endpoints, concurrently when an executor is given."""
        lat, lon = location.latitude, location.longitude
        try:
            if executor is not None:
                current_future = executor.submit(self.client.fetch_current, lat, lon)
                forecast_future = executor.submit(self.client.fetch_forecast, lat, lon)
                # Wait on both before reading either so neither call outlives this fetch.
                current_exc = current_future.exception()
                forecast_exc = forecast_future.exception()
                if current_exc is not None:
                    raise current_exc
                if forecast_exc is not None:
                    raise forecast_exc
                current, current_offset = current_future.result()
                forecast, forecast_offset = forecast_future.result()
            else:
                current, current_offset = self.client.fetch_current(lat, lon)
                forecast, forecast_offset = self.client.fetch_forecast(lat, lon)
        except ProviderError as exc:
            logger.error("Weather fetch failed: %s", exc.describe())
            return failure(FailureKind.UPSTREAM_ERROR, f"Weather fetch failed: {exc.describe()}")

        # The forecast's offset is authoritative for the grouping horizon.
        if forecast_offset is not None:
            offset = forecast_offset
        elif current_offset is not None:
            offset = current_offset
        else:
            offset = location.utc_offset_seconds or 0

        logger.info(
            "Fetched weather",
            extra={"forecast_steps": len(forecast), "utc_offset_seconds": offset},
        )
        return WeatherBundle(current=current, forecast=forecast, utc_offset_seconds=offset)


class AirQualityFetcher:
    """Latest air-quality reading. Never fails the pipeline: errors become None."""

    def __init__(self, client: AirQualityClient) -> None:
        self.client = client

    def fetch(self, location: ResolvedLocation) -> Optional[AirQualitySample]:
        try:
            sample = self.client.fetch_air_quality(location.latitude, location.longitude)
        except ProviderError as exc:
            logger.warning("Air-quality data unavailable; continuing without it: %s", exc.describe())
            return None
        except Exception as exc:
            logger.warning("Air-quality fetch raised unexpectedly; continuing without it: %r", exc)
            return None
        if sample is None:
            logger.warning("Air-quality provider returned no readings for %s", location.display_name)
        return sample
