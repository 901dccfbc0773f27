"""In-process TTL cache in front of the hot index."""

from __future__ import annotations

import threading
import time
from typing import Callable, Optional

from cachetools import TTLCache

from emojistore.domain.models import IndexEntry


class TTLLocalCache:
    """Thread-safe memo of index entries, bounded by age and count."""

    def __init__(
        self,
        maxsize: int = 10_000,
        ttl: float = 300,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._cache: TTLCache[str, IndexEntry] = TTLCache(maxsize=maxsize, ttl=ttl, timer=timer)
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[IndexEntry]:
        with self._lock:
            return self._cache.get(key)

    def set(self, key: str, entry: IndexEntry) -> None:
        with self._lock:
            self._cache[key] = entry

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._cache.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)
