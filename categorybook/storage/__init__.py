"""Mini README: Persistence helpers for categorybook.

The package pairs a small key-value blob interface (memory and file backends)
with the JSON codec that turns the category list into a single blob and back.
The data store combines both; nothing here knows about store mutations.
"""

from .backends import FileBlobStore, MemoryBlobStore
from .base import BlobStore
from .codec import BlobDecodeError, BlobEncodeError, decode_categories, encode_categories

__all__ = [
    "BlobDecodeError",
    "BlobEncodeError",
    "BlobStore",
    "FileBlobStore",
    "MemoryBlobStore",
    "decode_categories",
    "encode_categories",
]
