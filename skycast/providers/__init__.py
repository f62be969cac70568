"""Upstream provider clients and the provider-neutral sample types."""

from .base import (
    AirQualityClient,
    AirQualitySample,
    ForwardGeocoder,
    GeocodeCandidate,
    PollutantReading,
    ProviderError,
    ProviderSchemaError,
    ProviderStatusError,
    ProviderTransportError,
    RawCurrentSample,
    RawForecastSample,
    ReverseGeocoder,
    WeatherClient,
)
from .factory import ProviderSet, build_providers
from .google_geocoding import GoogleGeocodingClient
from .openweather import OpenWeatherClient

__all__ = [
    "AirQualityClient",
    "AirQualitySample",
    "ForwardGeocoder",
    "GeocodeCandidate",
    "GoogleGeocodingClient",
    "OpenWeatherClient",
    "PollutantReading",
    "ProviderError",
    "ProviderSchemaError",
    "ProviderSet",
    "ProviderStatusError",
    "ProviderTransportError",
    "RawCurrentSample",
    "RawForecastSample",
    "ReverseGeocoder",
    "WeatherClient",
    "build_providers",
]
