"""Saved-search facade over pluggable storage backends."""
from typing import List, Optional

import redis

from skycast.config import settings
from skycast.domain import AggregateSuccess
from skycast.saved_search_store import InMemorySavedSearchStore, RedisSavedSearchStore, SavedSearch, SavedSearchStore
from utils.logging_utils import get_tagged_logger, mask_url_secrets

logger = get_tagged_logger(__name__, tag="saved_searches")


def _init_store() -> SavedSearchStore:
    """Initialize the backing store based on configuration."""
    redis_url = settings.saved_search_redis_url
    logger.debug(f"Initializing saved-search store: redis_url='{mask_url_secrets(redis_url) if redis_url else 'None'}'")
    if redis_url:
        try:
            client = redis.Redis.from_url(redis_url)
            client.ping()
            logger.info("Using RedisSavedSearchStore", extra={"redis_url": mask_url_secrets(redis_url)})
            return RedisSavedSearchStore(client, prefix=settings.saved_search_prefix)
        except Exception as exc:  # pragma: no cover
            logger.warning("Falling back to InMemorySavedSearchStore (Redis unavailable)", extra={"error": str(exc)})
    return InMemorySavedSearchStore()


_store: SavedSearchStore = _init_store()


def use_in_memory_store_for_tests() -> None:
    """Override store for tests to ensure isolation and determinism."""
    global _store
    _store = InMemorySavedSearchStore()


def create_saved_search(label: str, latitude: float, longitude: float, snapshot: AggregateSuccess) -> SavedSearch:
    """Persist a snapshot under a user-chosen label."""
    record = _store.create(label, latitude, longitude, snapshot)
    logger.info("Saved search created", extra={"search_id": record.id})
    return record


def get_saved_search(search_id: str) -> Optional[SavedSearch]:
    return _store.get(search_id)


def list_saved_searches() -> List[SavedSearch]:
    return _store.list()


def update_saved_search(
    search_id: str,
    *,
    label: Optional[str] = None,
    snapshot: Optional[AggregateSuccess] = None,
) -> Optional[SavedSearch]:
    return _store.update(search_id, label=label, snapshot=snapshot)


def delete_saved_search(search_id: str) -> bool:
    return _store.delete(search_id)


def clear_saved_searches() -> None:
    """Clear all saved searches from the backing store (dev/testing)."""
    _store.clear()
