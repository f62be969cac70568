"""Shared protocol and record type for saved-search storage backends."""

from datetime import datetime
from typing import List, Optional, Protocol

from pydantic import BaseModel

from skycast.domain import AggregateSuccess


class SavedSearch(BaseModel):
    """A stored aggregation snapshot, replayed verbatim on read."""
    id: str
    label: str
    latitude: float
    longitude: float
    snapshot: AggregateSuccess
    created_at: datetime
    updated_at: datetime


class SavedSearchStore(Protocol):
    """Protocol for saved-search storage backends."""

    def create(self, label: str, latitude: float, longitude: float, snapshot: AggregateSuccess) -> SavedSearch:
        """Persist a new record and return it with its generated id."""

    def get(self, search_id: str) -> Optional[SavedSearch]:
        """Fetch a record by id, or None if absent."""

    def list(self) -> List[SavedSearch]:
        """All records, newest first."""

    def update(
        self,
        search_id: str,
        *,
        label: Optional[str] = None,
        snapshot: Optional[AggregateSuccess] = None,
    ) -> Optional[SavedSearch]:
        """Replace label and/or snapshot; None if the id is unknown."""

    def delete(self, search_id: str) -> bool:
        """Delete a record, returning whether it existed."""

    def clear(self) -> None:
        """Remove every record."""
