"""Mini README: Abstract key-value blob storage used for persistence.

Structure:
    * BlobStore - interface every storage backend implements.

Backends store opaque ``bytes`` under string keys. The data store writes its
whole category list as one blob, so backends only need whole-value reads and
writes; a write must replace the prior value as a single unit.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Optional


class BlobStore(ABC):
    """Base interface for key-value blob backends."""

    backend_name: str = "generic"

    @abstractmethod
    def read(self, key: str) -> Optional[bytes]:
        """Return the blob stored under ``key`` or ``None`` when absent.

        Any exception raised here is reported by ``DataStore.load`` as a read
        failure rather than propagated.
        """

    @abstractmethod
    def write(self, key: str, blob: bytes) -> None:
        """Replace the value under ``key``; readers never see a partial blob.

        Exceptions are reported by ``DataStore.save`` as a write failure.
        """

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove ``key`` returning whether a value existed."""

    def contains(self, key: str) -> bool:
        return self.read(key) is not None

    def metadata(self) -> Dict[str, str]:
        """Return diagnostic metadata for log lines and the CLI."""

        return {"backend": self.backend_name}
