"""Mini README: Builds the process-wide store from settings.

``open_store`` wires a ``FileBlobStore`` rooted at the configured data
directory to a ``DataStore`` and performs the one initial load.
"""

from __future__ import annotations

from typing import Optional

from ..configuration import CategorybookSettings, get_settings
from ..logging_utils import get_logger
from ..storage import FileBlobStore
from .data_store import DataStore

LOGGER = get_logger(__name__)


def open_store(settings: Optional[CategorybookSettings] = None) -> DataStore:
    """Open the file backed store described by ``settings``."""

    settings = settings or get_settings()
    store = DataStore.open(FileBlobStore(settings.data_directory), key=settings.storage_key)
    LOGGER.info(
        "Opened store at %s (initial load: %s)",
        settings.data_directory,
        store.last_load.failure or store.last_load.outcome,
    )
    return store
