"""Mini README: The authoritative category store.

``DataStore`` owns every category and entry, applies the mutations invoked
by the presentation layer, and saves/loads the whole list as one blob. Build
one per process with ``DataStore.open`` and pass it to whatever needs it.
"""

from .data_store import (
    DEFAULT_STORAGE_KEY,
    CategoryNotFoundError,
    DataStore,
    PersistenceFailure,
    PersistenceOutcome,
    PersistenceResult,
)
from .factory import open_store

__all__ = [
    "DEFAULT_STORAGE_KEY",
    "CategoryNotFoundError",
    "DataStore",
    "PersistenceFailure",
    "PersistenceOutcome",
    "PersistenceResult",
    "open_store",
]
