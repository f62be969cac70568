"""HTTP API for the SkyCast weather aggregation service."""

from typing import List

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from .aggregation import get_weather_for_location
from .config import settings
from .domain import AggregateFailure, AggregateSuccess, FailureKind
from .ollama_client import OllamaClient
from .saved_search_store import SavedSearch
from .saved_searches import (
    create_saved_search,
    delete_saved_search,
    get_saved_search,
    list_saved_searches,
    update_saved_search,
)
from .scene import SceneRequest, SceneResult, generate_scene
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="skycast/api")

router = APIRouter()

UPSTREAM_RETRY_MESSAGE = "Weather data is temporarily unavailable. Please try again in a moment."

_STATUS_BY_FAILURE = {
    FailureKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    FailureKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    FailureKind.CONFIGURATION: status.HTTP_500_INTERNAL_SERVER_ERROR,
    FailureKind.UPSTREAM_ERROR: status.HTTP_502_BAD_GATEWAY,
}


class SavedSearchCreateRequest(BaseModel):
    """Incoming payload for storing a snapshot."""
    label: str
    latitude: float
    longitude: float
    snapshot: AggregateSuccess


class SavedSearchUpdateRequest(BaseModel):
    """Rename a saved search; the snapshot is refreshed alongside."""
    label: str


class DeleteResponse(BaseModel):
    deleted: bool


def _raise_for_failure(result: AggregateFailure) -> None:
    """Translate a pipeline failure into an HTTP error."""
    code = _STATUS_BY_FAILURE[result.kind]
    if result.kind is FailureKind.UPSTREAM_ERROR:
        logger.warning(f"Upstream failure: {result.message}")
        raise HTTPException(status_code=code, detail=UPSTREAM_RETRY_MESSAGE)
    if result.kind is FailureKind.CONFIGURATION:
        logger.error(f"Configuration failure: {result.message}")
    raise HTTPException(status_code=code, detail=result.message)


def _require_label(label: str) -> str:
    cleaned = (label or "").strip()
    if not cleaned:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Label must not be blank.")
    return cleaned


def _require_saved_search(search_id: str) -> SavedSearch:
    record = get_saved_search(search_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown saved search ID")
    return record


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/weather", response_model=AggregateSuccess)
def get_weather(location: str = ""):
    """Aggregate current weather, forecast and air quality for one location."""
    logger.info(f"Weather requested for location={location!r}")
    result = get_weather_for_location(location, settings)
    if isinstance(result, AggregateFailure):
        _raise_for_failure(result)
    return result


@router.post("/saved-searches", response_model=SavedSearch, status_code=status.HTTP_201_CREATED)
def create_search(req: SavedSearchCreateRequest):
    """Store a snapshot under a user-chosen label."""
    label = _require_label(req.label)
    return create_saved_search(label, req.latitude, req.longitude, req.snapshot)


@router.get("/saved-searches", response_model=List[SavedSearch])
def list_searches():
    """All saved searches, newest first."""
    return list_saved_searches()


@router.get("/saved-searches/{search_id}", response_model=SavedSearch)
def get_search(search_id: str):
    return _require_saved_search(search_id)


@router.put("/saved-searches/{search_id}", response_model=SavedSearch)
def update_search(search_id: str, req: SavedSearchUpdateRequest):
    """Rename a saved search and refresh its snapshot from its stored coordinates."""
    label = _require_label(req.label)
    record = _require_saved_search(search_id)

    result = get_weather_for_location(f"coords:{record.latitude},{record.longitude}", settings)
    if isinstance(result, AggregateFailure):
        logger.warning(f"Refresh failed for saved search {search_id}; record left unchanged: {result.message}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=UPSTREAM_RETRY_MESSAGE)

    updated = update_saved_search(search_id, label=label, snapshot=result)
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown saved search ID")
    return updated


@router.delete("/saved-searches/{search_id}", response_model=DeleteResponse)
def delete_search(search_id: str):
    if not delete_saved_search(search_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown saved search ID")
    return DeleteResponse(deleted=True)


@router.post("/scene", response_model=SceneResult)
def create_scene(req: SceneRequest):
    """Describe an illustrative scene; failures come back as an Unavailable result."""
    client = OllamaClient(settings) if settings.scene_enabled else None
    return generate_scene(req, client, enabled=settings.scene_enabled)
