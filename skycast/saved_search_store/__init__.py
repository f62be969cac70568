"""Saved-search storage backends."""

from .base import SavedSearch, SavedSearchStore
from .memory import InMemorySavedSearchStore
from .redis import RedisSavedSearchStore

__all__ = [
    "SavedSearch",
    "SavedSearchStore",
    "InMemorySavedSearchStore",
    "RedisSavedSearchStore",
]
