"""Mini README: Core package initializer for categorybook.

categorybook is a small personal-finance categorisation app: named
categories hold dated income/expense entries, and the whole list is saved to
a local key-value blob store. This module re-exports the pieces most callers
need so they do not have to know the package layout.
"""

from .logging_utils import get_logger
from .store import DataStore, open_store

__all__ = ["DataStore", "get_logger", "open_store"]
