"""Ports implemented by infrastructure adapters."""

from emojistore.application.ports.blob_store import BlobStore
from emojistore.application.ports.hot_index import HotIndex
from emojistore.application.ports.local_cache import LocalCache

__all__ = [
    "BlobStore",
    "HotIndex",
    "LocalCache",
]
