from __future__ import annotations
from typing import Optional, Protocol
from emojistore.domain.models import IndexEntry

class LocalCache(Protocol):
    def get(self, key: str) -> Optional[IndexEntry]: ...
    def set(self, key: str, entry: IndexEntry) -> None: ...
    def invalidate(self, key: str) -> None: ...
    def clear(self) -> None: ...
