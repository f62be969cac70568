"""Client for the OpenWeatherMap geocoding, weather and air-pollution APIs."""
from __future__ import annotations

from typing import Any, List, Optional, Tuple

import requests

from skycast.lookup_tables import POLLUTANT_BY_COMPONENT, UPSTREAM_POLLUTANT_UNIT
from skycast.providers.base import (
    AirQualitySample,
    GeocodeCandidate,
    PollutantReading,
    ProviderSchemaError,
    ProviderStatusError,
    ProviderTransportError,
    RawCurrentSample,
    RawForecastSample,
)
from skycast.providers.schemas import (
    OWMAirPollutionResponse,
    OWMCondition,
    OWMCurrentResponse,
    OWMForecastResponse,
    OWMGeocodingEntry,
)
from utils.logging_utils import get_tagged_logger, mask_url_secrets

logger = get_tagged_logger(__name__, tag="providers/openweather")

PROVIDER_NAME = "OpenWeatherMap"

GEOCODE_DIRECT_PATH = "/geo/1.0/direct"
GEOCODE_REVERSE_PATH = "/geo/1.0/reverse"
CURRENT_WEATHER_PATH = "/data/2.5/weather"
FORECAST_PATH = "/data/2.5/forecast"
AIR_POLLUTION_PATH = "/data/2.5/air_pollution"

# Five days of 3-hour steps.
MAX_FORECAST_STEPS = 40


def _first_condition(weather: List[OWMCondition] | None) -> Tuple[Optional[int], Optional[str], str]:
    """Return (condition id, icon code, description) of the first condition entry."""
    if not weather:
        return None, None, "N/A"
    cond = weather[0]
    return cond.get("id"), cond.get("icon"), cond.get("description") or "N/A"


def parse_geocoding(payload: Any) -> List[GeocodeCandidate]:
    """Map a /geo/1.0 array into candidates."""
    if not isinstance(payload, list):
        raise ProviderSchemaError(PROVIDER_NAME, "geocoding response is not a list", body=str(payload))
    entries: List[OWMGeocodingEntry] = payload
    out: List[GeocodeCandidate] = []
    for entry in entries:
        out.append(
            GeocodeCandidate(
                name=entry["name"],
                latitude=float(entry["lat"]),
                longitude=float(entry["lon"]),
                country=entry.get("country") or None,
                region=entry.get("state") or None,
            )
        )
    return out


def parse_current(payload: OWMCurrentResponse) -> Tuple[RawCurrentSample, Optional[int]]:
    """Map a /data/2.5/weather body into a current sample and its UTC offset."""
    main = payload["main"]
    wind = payload.get("wind") or {}
    condition_code, icon_code, description = _first_condition(payload.get("weather"))
    sample = RawCurrentSample(
        epoch_seconds=int(payload["dt"]),
        temperature=float(main["temp"]),
        feels_like=float(main.get("feels_like", main["temp"])),
        humidity=int(main.get("humidity", 0)),
        wind_speed=float(wind.get("speed", 0.0)),
        condition_code=condition_code,
        icon_code=icon_code,
        description=description,
    )
    offset = payload.get("timezone")
    return sample, int(offset) if offset is not None else None


def parse_forecast(payload: OWMForecastResponse) -> Tuple[List[RawForecastSample], Optional[int]]:
    """Map a /data/2.5/forecast body into samples (upstream order) and its UTC offset."""
    steps = payload["list"]
    out: List[RawForecastSample] = []
    for step in steps[:MAX_FORECAST_STEPS]:
        main = step["main"]
        wind = step.get("wind") or {}
        condition_code, icon_code, description = _first_condition(step.get("weather"))
        temp = float(main["temp"])
        out.append(
            RawForecastSample(
                epoch_seconds=int(step["dt"]),
                temperature=temp,
                temp_min=float(main.get("temp_min", temp)),
                temp_max=float(main.get("temp_max", temp)),
                feels_like=float(main.get("feels_like", temp)),
                humidity=int(main.get("humidity", 0)),
                wind_speed=float(wind.get("speed", 0.0)),
                condition_code=condition_code,
                icon_code=icon_code,
                description=description,
            )
        )
    city = payload.get("city") or {}
    offset = city.get("timezone")
    return out, int(offset) if offset is not None else None


def parse_air_pollution(payload: OWMAirPollutionResponse) -> Optional[AirQualitySample]:
    """Map the first /data/2.5/air_pollution entry; None when the list is empty."""
    entries = payload.get("list") or []
    if not entries:
        return None
    entry = entries[0]
    components = entry.get("components") or {}
    pollutants = [
        PollutantReading(name=name, concentration=float(components[key]), unit=UPSTREAM_POLLUTANT_UNIT)
        for key, name in POLLUTANT_BY_COMPONENT.items()
        if components.get(key) is not None
    ]
    return AirQualitySample(
        class_value=int(entry["main"]["aqi"]),
        epoch_seconds=int(entry["dt"]),
        pollutants=pollutants,
    )


class OpenWeatherClient:
    """Single-attempt, timeout-bounded calls against api.openweathermap.org.

    Implements the ForwardGeocoder, ReverseGeocoder, WeatherClient and
    AirQualityClient interfaces. Raises ProviderError subclasses; callers
    decide whether a failure is fatal.
    """

    name = PROVIDER_NAME

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = "https://api.openweathermap.org",
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get(self, path: str, params: dict) -> Any:
        """GET `path`, classify failures, return decoded JSON."""
        url = f"{self.base_url}{path}"
        query = {**params, "appid": self.api_key}
        try:
            resp = self.session.get(url, params=query, timeout=self.timeout)
        except requests.exceptions.Timeout as exc:
            raise ProviderTransportError(PROVIDER_NAME, f"timed out calling {path}") from exc
        except requests.exceptions.RequestException as exc:
            raise ProviderTransportError(PROVIDER_NAME, f"request to {path} failed: {exc}") from exc

        logger.debug(
            "OpenWeatherMap response",
            extra={"url": mask_url_secrets(getattr(resp, "url", url) or url), "status": resp.status_code},
        )
        if not 200 <= resp.status_code < 300:
            raise ProviderStatusError(
                PROVIDER_NAME,
                f"{path} returned a non-success status",
                status=resp.status_code,
                body=getattr(resp, "text", None),
            )
        try:
            return resp.json()
        except ValueError as exc:
            raise ProviderSchemaError(
                PROVIDER_NAME, f"{path} returned a non-JSON body", status=resp.status_code, body=getattr(resp, "text", None)
            ) from exc

    def _parse(self, parser, payload: Any, path: str):
        """Run a response mapper, turning shape mismatches into ProviderSchemaError."""
        try:
            return parser(payload)
        except ProviderSchemaError:
            raise
        except (KeyError, TypeError, ValueError, IndexError, AttributeError) as exc:
            raise ProviderSchemaError(
                PROVIDER_NAME, f"{path} body did not match the expected schema ({exc!r})", body=str(payload)
            ) from exc

    def geocode(self, query: str) -> List[GeocodeCandidate]:
        """Forward lookup; an empty list is a definitive zero-result answer."""
        payload = self._get(GEOCODE_DIRECT_PATH, {"q": query, "limit": 1})
        return self._parse(parse_geocoding, payload, GEOCODE_DIRECT_PATH)

    def reverse_geocode(self, latitude: float, longitude: float) -> List[GeocodeCandidate]:
        """Reverse lookup used only to name coordinate queries."""
        payload = self._get(GEOCODE_REVERSE_PATH, {"lat": latitude, "lon": longitude, "limit": 1})
        return self._parse(parse_geocoding, payload, GEOCODE_REVERSE_PATH)

    def fetch_current(self, latitude: float, longitude: float) -> Tuple[RawCurrentSample, Optional[int]]:
        payload = self._get(CURRENT_WEATHER_PATH, {"lat": latitude, "lon": longitude, "units": "metric"})
        return self._parse(parse_current, payload, CURRENT_WEATHER_PATH)

    def fetch_forecast(self, latitude: float, longitude: float) -> Tuple[List[RawForecastSample], Optional[int]]:
        payload = self._get(FORECAST_PATH, {"lat": latitude, "lon": longitude, "units": "metric"})
        return self._parse(parse_forecast, payload, FORECAST_PATH)

    def fetch_air_quality(self, latitude: float, longitude: float) -> Optional[AirQualitySample]:
        payload = self._get(AIR_POLLUTION_PATH, {"lat": latitude, "lon": longitude})
        return self._parse(parse_air_pollution, payload, AIR_POLLUTION_PATH)
