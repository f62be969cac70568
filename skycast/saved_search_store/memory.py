"""In-memory saved-search store, intended for development and tests."""

import threading
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from skycast.domain import AggregateSuccess
from skycast.saved_search_store.base import SavedSearch, SavedSearchStore
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="saved_search_store/in_memory")


class InMemorySavedSearchStore(SavedSearchStore):
    """Thread-safe dict-backed store; contents vanish with the process."""

    def __init__(self) -> None:
        logger.debug("Initializing InMemorySavedSearchStore")
        self._records: dict[str, SavedSearch] = {}
        self._lock = threading.Lock()

    def _generate_id(self) -> str:
        return str(uuid.uuid4())

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
        with self._lock:
            self._records[record.id] = record
        return record.model_copy(deep=True)

    def get(self, search_id: str) -> Optional[SavedSearch]:
        with self._lock:
            record = self._records.get(search_id)
            return record.model_copy(deep=True) if record else None

    def list(self) -> List[SavedSearch]:
        with self._lock:
            records = [r.model_copy(deep=True) for r in self._records.values()]
        return sorted(records, key=lambda r: r.created_at, reverse=True)

    def update(self, search_id: str, *, label=None, snapshot=None) -> Optional[SavedSearch]:
        with self._lock:
            record = self._records.get(search_id)
            if record is None:
                return None
            changes: dict = {"updated_at": datetime.now(timezone.utc)}
            if label is not None:
                changes["label"] = label
            if snapshot is not None:
                changes["snapshot"] = snapshot
            record = record.model_copy(update=changes, deep=True)
            self._records[search_id] = record
            return record.model_copy(deep=True)

    def delete(self, search_id: str) -> bool:
        with self._lock:
            return self._records.pop(search_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
