"""Normalized result vocabulary returned by the aggregation pipeline.

These are the payloads handed to the presentation layer and stored verbatim
by the saved-search backends. No fetching or conversion logic lives here.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _StrictBaseModel(BaseModel):
    """Base model with strict extra handling."""

    model_config = ConfigDict(extra="forbid")


class FailureKind(str, Enum):
    """Why an aggregation did not produce a result."""
    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    UPSTREAM_ERROR = "upstream_error"


class DegradedData(str, Enum):
    """Optional sections that were absent from an otherwise successful result."""
    AIR_QUALITY = "air_quality"


class NormalizedCurrent(_StrictBaseModel):
    """Current conditions in display units."""
    location_name: str
    temperature: int
    feels_like: int
    humidity: int
    wind_speed_kmh: int
    description: str
    icon: str
    epoch_seconds: int


class NormalizedHour(_StrictBaseModel):
    """One 3-hour forecast step labelled with local wall-clock time."""
    time_label: str
    temperature: int
    description: str
    icon: str


class DisplayPollutant(_StrictBaseModel):
    """Pollutant concentration rounded for display."""
    name: str
    value: float
    unit: str


class NormalizedAqi(_StrictBaseModel):
    """Air-quality summary derived from the upstream 1-5 class."""
    scaled_value: int
    category: str
    dominant_pollutant: Optional[str] = None
    pollutants: List[DisplayPollutant] = Field(default_factory=list)


class NormalizedDay(_StrictBaseModel):
    """Summary of one local calendar day."""
    date_key: str
    date_label: str
    temp_high: int
    temp_low: int
    description: str
    icon: str
    aqi: Optional[NormalizedAqi] = None
    hourly: List[NormalizedHour] = Field(default_factory=list)


class AggregateSuccess(_StrictBaseModel):
    """Complete aggregation for a single place."""
    status: Literal["success"] = "success"
    current: NormalizedCurrent
    days: List[NormalizedDay] = Field(default_factory=list)
    aqi: Optional[NormalizedAqi] = None
    hourly: Optional[List[NormalizedHour]] = None
    resolved_lat: float
    resolved_lon: float
    time_zone: Optional[str] = None
    degraded: List[DegradedData] = Field(default_factory=list)


class AggregateFailure(_StrictBaseModel):
    """Typed failure; `message` is safe to show for every kind except upstream_error."""
    status: Literal["failure"] = "failure"
    kind: FailureKind
    message: str


AggregateResult = Annotated[Union[AggregateSuccess, AggregateFailure], Field(discriminator="status")]


def failure(kind: FailureKind, message: str) -> AggregateFailure:
    """Shorthand used at stage boundaries."""
    return AggregateFailure(kind=kind, message=message)
