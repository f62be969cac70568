"""
Response shapes of the upstream REST APIs.

Only the fields SkyCast reads are listed. Payloads are typed with these
TypedDicts inside the provider modules and mapped into the dataclasses in
`providers.base`; no provider JSON travels past the fetch boundary.
"""

from typing import List, Optional, TypedDict


# ---------------------------------------------------------------------------
# OpenWeatherMap geocoding  (/geo/1.0/direct, /geo/1.0/reverse)
# ---------------------------------------------------------------------------

class OWMGeocodingEntry(TypedDict, total=False):
    """One element of the geocoding array."""

    name: str  # City name (English)
    lat: float
    lon: float
    country: str  # ISO 3166 code, e.g. "FR"
    state: Optional[str]  # Region, absent for many countries


# ---------------------------------------------------------------------------
# OpenWeatherMap weather  (/data/2.5/weather, /data/2.5/forecast)
# ---------------------------------------------------------------------------

class OWMCondition(TypedDict):
    """Weather condition entry; see https://openweathermap.org/weather-conditions"""

    id: int  # Condition code, e.g. 800 = clear sky
    main: str  # Group (Rain, Snow, Clear, ...)
    description: str
    icon: str  # Icon code, e.g. "01d"


class OWMMain(TypedDict, total=False):
    temp: float  # Celsius with units=metric
    feels_like: float
    temp_min: float
    temp_max: float
    humidity: int  # percent


class OWMWind(TypedDict, total=False):
    speed: float  # m/s with units=metric
    deg: int


class OWMCurrentResponse(TypedDict, total=False):
    """Body of /data/2.5/weather."""

    dt: int  # Unix timestamp, UTC
    timezone: int  # Shift from UTC in seconds
    main: OWMMain
    wind: OWMWind
    weather: List[OWMCondition]
    name: str


class OWMForecastStep(TypedDict, total=False):
    """One 3-hour step of /data/2.5/forecast."""

    dt: int
    main: OWMMain
    wind: OWMWind
    weather: List[OWMCondition]
    dt_txt: str


class OWMForecastCity(TypedDict, total=False):
    name: str
    country: str
    timezone: int  # Shift from UTC in seconds


class OWMForecastResponse(TypedDict, total=False):
    """Body of /data/2.5/forecast."""

    cod: str
    cnt: int
    list: List[OWMForecastStep]
    city: OWMForecastCity


# ---------------------------------------------------------------------------
# OpenWeatherMap air pollution  (/data/2.5/air_pollution)
# ---------------------------------------------------------------------------

class OWMAirPollutionMain(TypedDict):
    aqi: int  # 1 = Good, 2 = Fair, 3 = Moderate, 4 = Poor, 5 = Very Poor


class OWMAirPollutionComponents(TypedDict, total=False):
    """Concentrations in µg/m³."""

    co: float
    no: float
    no2: float
    o3: float
    so2: float
    pm2_5: float
    pm10: float
    nh3: float


class OWMAirPollutionEntry(TypedDict):
    dt: int
    main: OWMAirPollutionMain
    components: OWMAirPollutionComponents


class OWMAirPollutionResponse(TypedDict, total=False):
    coord: dict
    list: List[OWMAirPollutionEntry]


# ---------------------------------------------------------------------------
# Google Geocoding API  (/maps/api/geocode/json)
# ---------------------------------------------------------------------------

class GoogleLatLng(TypedDict):
    lat: float
    lng: float


class GoogleGeometry(TypedDict, total=False):
    location: GoogleLatLng


class GoogleAddressComponent(TypedDict, total=False):
    long_name: str
    short_name: str
    types: List[str]


class GoogleGeocodeResult(TypedDict, total=False):
    formatted_address: str
    geometry: GoogleGeometry
    address_components: List[GoogleAddressComponent]


class GoogleGeocodeResponse(TypedDict, total=False):
    """Single status code plus results; status "OK" or "ZERO_RESULTS" on success."""

    status: str
    error_message: str
    results: List[GoogleGeocodeResult]
