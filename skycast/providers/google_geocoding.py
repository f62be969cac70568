"""Client for the Google Geocoding API, used as the secondary geocoder."""
from __future__ import annotations

from typing import Any, List

import requests

from skycast.providers.base import (
    GeocodeCandidate,
    ProviderSchemaError,
    ProviderStatusError,
    ProviderTransportError,
)
from skycast.providers.schemas import GoogleGeocodeResponse, GoogleGeocodeResult
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="providers/google_geocoding")

PROVIDER_NAME = "Google Geocoding"

STATUS_OK = "OK"
STATUS_ZERO_RESULTS = "ZERO_RESULTS"
# Everything else (REQUEST_DENIED, OVER_QUERY_LIMIT, OVER_DAILY_LIMIT,
# INVALID_REQUEST, UNKNOWN_ERROR) is a configuration or quota problem.


def _component(result: GoogleGeocodeResult, kind: str) -> str | None:
    """Return the long name of the first address component of `kind`."""
    for comp in result.get("address_components") or []:
        if kind in (comp.get("types") or []):
            return comp.get("long_name")
    return None


def parse_geocode_response(payload: GoogleGeocodeResponse) -> List[GeocodeCandidate]:
    """Map an OK/ZERO_RESULTS body into candidates; raise on any other status."""
    status = payload.get("status")
    if status == STATUS_ZERO_RESULTS:
        return []
    if status != STATUS_OK:
        raise ProviderStatusError(
            PROVIDER_NAME,
            payload.get("error_message") or "geocoding request was rejected",
            status=status,
        )
    out: List[GeocodeCandidate] = []
    for result in payload.get("results") or []:
        location = result["geometry"]["location"]
        formatted = result.get("formatted_address")
        out.append(
            GeocodeCandidate(
                name=_component(result, "locality") or formatted or "",
                latitude=float(location["lat"]),
                longitude=float(location["lng"]),
                country=_component(result, "country"),
                region=_component(result, "administrative_area_level_1"),
                formatted_address=formatted,
            )
        )
    return out


class GoogleGeocodingClient:
    """Forward geocoder reporting zero results through its `status` field."""

    name = PROVIDER_NAME

    def __init__(
        self,
        api_key: str,
        *,
        url: str = "https://maps.googleapis.com/maps/api/geocode/json",
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def geocode(self, query: str) -> List[GeocodeCandidate]:
        """Forward lookup; [] only for an explicit ZERO_RESULTS status."""
        try:
            resp = self.session.get(self.url, params={"address": query, "key": self.api_key}, timeout=self.timeout)
        except requests.exceptions.Timeout as exc:
            raise ProviderTransportError(PROVIDER_NAME, "timed out") from exc
        except requests.exceptions.RequestException as exc:
            raise ProviderTransportError(PROVIDER_NAME, f"request failed: {exc}") from exc

        if not 200 <= resp.status_code < 300:
            raise ProviderStatusError(
                PROVIDER_NAME, "non-success HTTP status", status=resp.status_code, body=getattr(resp, "text", None)
            )
        try:
            payload: Any = resp.json()
        except ValueError as exc:
            raise ProviderSchemaError(PROVIDER_NAME, "non-JSON body", body=getattr(resp, "text", None)) from exc

        try:
            candidates = parse_geocode_response(payload)
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise ProviderSchemaError(
                PROVIDER_NAME, f"body did not match the expected schema ({exc!r})", body=str(payload)
            ) from exc
        logger.debug("Google geocoding returned %d candidate(s)", len(candidates))
        return candidates
