"""Factory helpers for wiring provider clients from settings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import requests

from skycast import config
from skycast.providers.base import AirQualityClient, ForwardGeocoder, ReverseGeocoder, WeatherClient
from skycast.providers.google_geocoding import GoogleGeocodingClient
from skycast.providers.openweather import OpenWeatherClient
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="providers/factory")


@dataclass
class ProviderSet:
    """The upstream collaborators one pipeline invocation talks to."""

    primary_geocoder: ForwardGeocoder
    reverse_geocoder: ReverseGeocoder
    weather: WeatherClient
    air_quality: AirQualityClient
    secondary_geocoder: Optional[ForwardGeocoder] = None


def build_providers(settings: config.Settings, session: requests.Session) -> ProviderSet:
    """Instantiate provider clients sharing one HTTP session.

    The OpenWeatherMap key must already have been checked by the caller.
    """
    if not settings.openweather_api_key:
        raise ValueError("openweather_api_key must be set before building providers")

    owm = OpenWeatherClient(
        settings.openweather_api_key,
        base_url=settings.openweather_base_url,
        timeout=settings.request_timeout_seconds,
        session=session,
    )

    secondary = None
    if settings.google_geocoding_api_key:
        secondary = GoogleGeocodingClient(
            settings.google_geocoding_api_key,
            url=settings.google_geocoding_url,
            timeout=settings.request_timeout_seconds,
            session=session,
        )
    else:
        logger.debug("No Google Geocoding key configured; geocoding fallback disabled")

    return ProviderSet(
        primary_geocoder=owm,
        reverse_geocoder=owm,
        weather=owm,
        air_quality=owm,
        secondary_geocoder=secondary,
    )
