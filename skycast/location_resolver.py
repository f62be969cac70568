"""Resolve a free-text place name or a coordinate pair into a ResolvedLocation.

Resolution walks an explicit, ordered list of strategies:

    [CoordinatePassthrough, PrimaryGeocoder, SecondaryGeocoder]

Each strategy either does not apply to the query, resolves it, or reports
zero results (the loop moves on). A provider error from any strategy stops
the walk with an upstream failure; quota and auth problems are configuration
issues, not data gaps, so they never trigger the next geocoder.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence, Tuple

from skycast.domain import AggregateFailure, FailureKind, failure
from skycast.providers.base import ForwardGeocoder, ProviderError, ReverseGeocoder
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="location_resolver")

COORDS_PREFIX = "coords:"
_NUMBER = r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)"
_BARE_PAIR_RE = re.compile(rf"^\s*({_NUMBER})\s*,\s*({_NUMBER})\s*$")


class LocationValidationError(ValueError):
    """Coordinate input that is malformed or out of range."""


def _validate_range(latitude: float, longitude: float) -> None:
    if not -90.0 <= latitude <= 90.0:
        raise LocationValidationError(f"Latitude {latitude} is outside [-90, 90].")
    if not -180.0 <= longitude <= 180.0:
        raise LocationValidationError(f"Longitude {longitude} is outside [-180, 180].")


def parse_coordinates(text: str) -> Tuple[float, float]:
    """Parse "lat,lon" into floats, validating ranges."""
    match = _BARE_PAIR_RE.match(text)
    if not match:
        raise LocationValidationError(f"Could not read coordinates from '{text}'; expected 'lat,lon'.")
    latitude, longitude = float(match.group(1)), float(match.group(2))
    _validate_range(latitude, longitude)
    return latitude, longitude


@dataclass(frozen=True)
class LocationQuery:
    """Either free text or an explicit coordinate pair, never both."""

    text: Optional[str] = None
    coordinates: Optional[Tuple[float, float]] = None

    def __post_init__(self) -> None:
        if (self.text is None) == (self.coordinates is None):
            raise ValueError("LocationQuery needs exactly one of text or coordinates")

    @property
    def is_coordinates(self) -> bool:
        return self.coordinates is not None

    @classmethod
    def parse(cls, raw: str) -> "LocationQuery":
        """Build a query from user input.

        "coords:48.85,2.35" and "48.85,2.35" are coordinate queries; anything
        else is free text. Raises LocationValidationError for empty input, a
        malformed "coords:" pair or out-of-range numbers.
        """
        value = (raw or "").strip()
        if not value:
            raise LocationValidationError("Please enter a location.")
        if value.lower().startswith(COORDS_PREFIX):
            return cls(coordinates=parse_coordinates(value[len(COORDS_PREFIX):]))
        if _BARE_PAIR_RE.match(value):
            return cls(coordinates=parse_coordinates(value))
        return cls(text=value)

    @classmethod
    def from_coordinates(cls, latitude: float, longitude: float) -> "LocationQuery":
        _validate_range(latitude, longitude)
        return cls(coordinates=(float(latitude), float(longitude)))


@dataclass(frozen=True)
class ResolvedLocation:
    """A place every downstream fetch is keyed on; immutable once resolved."""

    latitude: float
    longitude: float
    display_name: str
    utc_offset_seconds: Optional[int] = None


def synthesize_display_name(latitude: float, longitude: float) -> str:
    """Fallback display name when reverse geocoding cannot name the point."""
    return f"{latitude:.4f}, {longitude:.4f}"


class GeocodingStrategy(Protocol):
    """One step in the resolution order."""

    name: str

    def applies_to(self, query: LocationQuery) -> bool:
        ...

    def resolve(self, query: LocationQuery) -> Optional[ResolvedLocation]:
        """Return a location, or None for zero results; raise ProviderError on fatal upstream status."""
        ...


class CoordinatePassthrough:
    """Use the given coordinates as-is; reverse geocode only for a display name."""

    name = "coordinates"

    def __init__(self, reverse_geocoder: Optional[ReverseGeocoder]) -> None:
        self.reverse_geocoder = reverse_geocoder

    def applies_to(self, query: LocationQuery) -> bool:
        return query.is_coordinates

    def resolve(self, query: LocationQuery) -> Optional[ResolvedLocation]:
        latitude, longitude = query.coordinates
        display_name = None
        if self.reverse_geocoder is not None:
            try:
                candidates = self.reverse_geocoder.reverse_geocode(latitude, longitude)
                if candidates:
                    display_name = candidates[0].display_name() or None
            except ProviderError as exc:
                logger.warning("Reverse geocoding failed; using raw coordinates as the name: %s", exc.describe())
        if display_name is None:
            display_name = synthesize_display_name(latitude, longitude)
        return ResolvedLocation(latitude=latitude, longitude=longitude, display_name=display_name)


class ForwardGeocodingStrategy:
    """Free-text lookup through one forward geocoder, first candidate wins."""

    def __init__(self, geocoder: ForwardGeocoder, *, name: str) -> None:
        self.geocoder = geocoder
        self.name = name

    def applies_to(self, query: LocationQuery) -> bool:
        return query.text is not None

    def resolve(self, query: LocationQuery) -> Optional[ResolvedLocation]:
        candidates = self.geocoder.geocode(query.text)
        if not candidates:
            return None
        best = candidates[0]
        return ResolvedLocation(
            latitude=best.latitude,
            longitude=best.longitude,
            display_name=best.display_name(),
        )


def build_strategies(
    primary: ForwardGeocoder,
    reverse: Optional[ReverseGeocoder],
    secondary: Optional[ForwardGeocoder] = None,
) -> List[GeocodingStrategy]:
    """The resolution order; the secondary step exists only when configured."""
    strategies: List[GeocodingStrategy] = [
        CoordinatePassthrough(reverse),
        ForwardGeocodingStrategy(primary, name="primary"),
    ]
    if secondary is not None:
        strategies.append(ForwardGeocodingStrategy(secondary, name="secondary"))
    return strategies


class LocationResolver:
    """Evaluate strategies in order; see the module docstring for the rules."""

    def __init__(self, strategies: Sequence[GeocodingStrategy]) -> None:
        self.strategies = list(strategies)

    def resolve(self, query: LocationQuery) -> ResolvedLocation | AggregateFailure:
        for strategy in self.strategies:
            if not strategy.applies_to(query):
                continue
            try:
                location = strategy.resolve(query)
            except ProviderError as exc:
                logger.error(
                    "Geocoding strategy '%s' failed; not falling back: %s", strategy.name, exc.describe()
                )
                return failure(FailureKind.UPSTREAM_ERROR, f"Geocoding failed: {exc.describe()}")
            if location is not None:
                logger.info("Resolved location via %s strategy: %s", strategy.name, location.display_name)
                return location
            logger.info("Strategy '%s' found no results for %r", strategy.name, query.text)

        return failure(
            FailureKind.NOT_FOUND,
            "Location not found. Please try a different search term.",
        )
