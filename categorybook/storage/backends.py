"""Mini README: Concrete blob store backends.

Structure:
    * MemoryBlobStore - dictionary backed store for tests and previews.
    * FileBlobStore - one JSON file per key inside a data directory.

``FileBlobStore`` writes into a temporary file next to the target and swaps
it in with ``os.replace`` so a crash mid-write leaves the previous blob intact.
"""

from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path
from typing import Dict, Optional

from .base import BlobStore
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class MemoryBlobStore(BlobStore):
    """Keep blobs in a process-local dictionary."""

    backend_name = "memory"

    def __init__(self, initial: Optional[Dict[str, bytes]] = None) -> None:
        self._blobs: Dict[str, bytes] = dict(initial or {})

    def read(self, key: str) -> Optional[bytes]:
        return self._blobs.get(key)

    def write(self, key: str, blob: bytes) -> None:
        self._blobs[key] = bytes(blob)

    def delete(self, key: str) -> bool:
        return self._blobs.pop(key, None) is not None


class FileBlobStore(BlobStore):
    """Persist each key as ``<key>.json`` inside ``directory``."""

    backend_name = "file"

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory).expanduser()
        self.directory.mkdir(parents=True, exist_ok=True)
        LOGGER.debug("File blob store rooted at %s", self.directory)

    def path_for(self, key: str) -> Path:
        """Resolve the file backing ``key``, rejecting path-like keys."""

        if not _KEY_PATTERN.match(key) or key in {".", ".."}:
            raise ValueError(f"Unsupported storage key: {key!r}")
        return self.directory / f"{key}.json"

    def read(self, key: str) -> Optional[bytes]:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_bytes()

    def write(self, key: str, blob: bytes) -> None:
        path = self.path_for(key)
        handle, temp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(handle, "wb") as stream:
                stream.write(blob)
                stream.flush()
                os.fsync(stream.fileno())
            os.replace(temp_name, path)
        except BaseException:
            Path(temp_name).unlink(missing_ok=True)
            raise
        LOGGER.debug("Wrote %s bytes to %s", len(blob), path)

    def delete(self, key: str) -> bool:
        path = self.path_for(key)
        if not path.exists():
            return False
        path.unlink()
        return True

    def metadata(self) -> Dict[str, str]:
        return {"backend": self.backend_name, "directory": str(self.directory)}
