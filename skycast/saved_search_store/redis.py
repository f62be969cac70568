"""Redis-backed saved-search store. Records are stored as JSON strings."""

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import ValidationError

from skycast.domain import AggregateSuccess
from skycast.saved_search_store.base import SavedSearch, SavedSearchStore
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="saved_search_store/redis")


class RedisSavedSearchStore(SavedSearchStore):
    """One key per record under `prefix`; no expiry."""

    def __init__(self, client, prefix: str = "saved_search:") -> None:
        """Initialize with a Redis client (or anything with get/set/delete/scan_iter)."""
        logger.debug("Initializing RedisSavedSearchStore")
        self.client = client
        self.prefix = prefix

    def _key(self, search_id: str) -> str:
        return f"{self.prefix}{search_id}"

    def _generate_id(self) -> str:
        return str(uuid.uuid4())

    def _dump(self, record: SavedSearch) -> bytes:
        return record.model_dump_json().encode("utf-8")

    def _load(self, raw) -> Optional[SavedSearch]:
        """Deserialize a stored record; corrupt entries are logged and skipped."""
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        try:
            return SavedSearch.model_validate_json(raw)
        except ValidationError as exc:
            logger.error("Failed to deserialize saved search: %s", exc)
            return None

    def create(self, label: str, latitude: float, longitude: float, snapshot: AggregateSuccess) -> SavedSearch:
        now = datetime.now(timezone.utc)
        record = SavedSearch(
            id=self._generate_id(),
            label=label,
            latitude=latitude,
            longitude=longitude,
            snapshot=snapshot,
            created_at=now,
            updated_at=now,
        )
        try:
            self.client.set(self._key(record.id), self._dump(record))
        except Exception as exc:
            logger.error("Failed to write saved search to Redis: %s", exc)
            raise
        return record

    def get(self, search_id: str) -> Optional[SavedSearch]:
        raw = self.client.get(self._key(search_id))
        if not raw:
            return None
        return self._load(raw)

    def list(self) -> List[SavedSearch]:
        records: List[SavedSearch] = []
        for key in self.client.scan_iter(f"{self.prefix}*"):
            raw = self.client.get(key)
            record = self._load(raw) if raw else None
            if record is not None:
                records.append(record)
        return sorted(records, key=lambda r: r.created_at, reverse=True)

    def update(self, search_id: str, *, label=None, snapshot=None) -> Optional[SavedSearch]:
        record = self.get(search_id)
        if record is None:
            return None
        changes: dict = {"updated_at": datetime.now(timezone.utc)}
        if label is not None:
            changes["label"] = label
        if snapshot is not None:
            changes["snapshot"] = snapshot
        record = record.model_copy(update=changes)
        self.client.set(self._key(search_id), self._dump(record))
        return record

    def delete(self, search_id: str) -> bool:
        return bool(self.client.delete(self._key(search_id)))

    def clear(self) -> None:
        """Best-effort clear of every record under the configured prefix."""
        try:
            for key in self.client.scan_iter(f"{self.prefix}*"):
                self.client.delete(key)
        except Exception as exc:  # pragma: no cover
            logger.error("Failed to clear saved searches from Redis: %s", exc)
