"""Provider-neutral sample types, provider errors and client interfaces."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Tuple

# Upstream bodies are truncated to this many characters in error messages.
BODY_PREVIEW_CHARS = 200


@dataclass(frozen=True)
class GeocodeCandidate:
    """One geocoding match, normalized across providers."""
    name: str
    latitude: float
    longitude: float
    country: Optional[str] = None
    region: Optional[str] = None
    formatted_address: Optional[str] = None

    def display_name(self) -> str:
        """`city, region, country`; region omitted when absent."""
        parts = [p for p in (self.name, self.region, self.country) if p]
        return ", ".join(parts)


@dataclass
class RawCurrentSample:
    """Current conditions as reported upstream (metric units)."""
    epoch_seconds: int
    temperature: float
    feels_like: float
    humidity: int
    wind_speed: float  # m/s
    condition_code: Optional[int]
    icon_code: Optional[str]
    description: str


@dataclass
class RawForecastSample:
    """One 3-hour forecast step as reported upstream (metric units)."""
    epoch_seconds: int
    temperature: float
    temp_min: float
    temp_max: float
    feels_like: float
    humidity: int
    wind_speed: float  # m/s
    condition_code: Optional[int]
    icon_code: Optional[str]
    description: str


@dataclass
class PollutantReading:
    """Concentration of one pollutant in the upstream unit."""
    name: str
    concentration: float
    unit: str


@dataclass
class AirQualitySample:
    """Latest air-quality reading: 1-5 class plus pollutant components."""
    class_value: int
    epoch_seconds: int
    pollutants: List[PollutantReading] = field(default_factory=list)


class ProviderError(Exception):
    """An upstream call failed; never escapes the pipeline boundary."""

    def __init__(self, provider: str, detail: str, *, status: Optional[object] = None, body: Optional[str] = None):
        self.provider = provider
        self.detail = detail
        self.status = status
        self.body = (body or "")[:BODY_PREVIEW_CHARS] or None
        super().__init__(self.describe())

    def describe(self) -> str:
        """Human-readable diagnostic including provider, status and body preview."""
        parts = [f"{self.provider}: {self.detail}"]
        if self.status is not None:
            parts.append(f"status={self.status}")
        if self.body:
            parts.append(f"body={self.body}")
        return " | ".join(parts)


class ProviderStatusError(ProviderError):
    """Non-success HTTP status or provider status code (auth, quota, bad request)."""


class ProviderTransportError(ProviderError):
    """Connection failure or timeout."""


class ProviderSchemaError(ProviderError):
    """Body could not be parsed into the expected response shape."""


class ForwardGeocoder(Protocol):
    """Anything that can turn free text into geocoding candidates."""

    name: str

    def geocode(self, query: str) -> List[GeocodeCandidate]:
        """Return candidates (empty on a definitive zero-result answer); raise ProviderError otherwise."""
        ...


class ReverseGeocoder(Protocol):
    """Anything that can name a coordinate pair."""

    def reverse_geocode(self, latitude: float, longitude: float) -> List[GeocodeCandidate]:
        """Return candidates for the coordinates; raise ProviderError on failure."""
        ...


class WeatherClient(Protocol):
    """Current-conditions and 3-hour forecast provider."""

    def fetch_current(self, latitude: float, longitude: float) -> Tuple[RawCurrentSample, Optional[int]]:
        """Return the current sample and the UTC offset (seconds) if reported."""
        ...

    def fetch_forecast(self, latitude: float, longitude: float) -> Tuple[List[RawForecastSample], Optional[int]]:
        """Return forecast samples in upstream order and the UTC offset if reported."""
        ...


class AirQualityClient(Protocol):
    """Latest air-quality reading provider."""

    def fetch_air_quality(self, latitude: float, longitude: float) -> Optional[AirQualitySample]:
        """Return the latest sample, None when the provider has none; raise ProviderError on failure."""
        ...
