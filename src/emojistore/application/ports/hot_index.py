from __future__ import annotations
from typing import Optional, Protocol
from emojistore.domain.models import IndexEntry

class HotIndex(Protocol):
    def exists(self, key: str) -> bool: ...
    def get(self, key: str) -> Optional[IndexEntry]: ...
    def put(self, key: str, entry: IndexEntry) -> None: ...
    def put_if_absent(self, key: str, entry: IndexEntry) -> bool: ...
    def delete(self, key: str) -> None: ...
    def list_keys(self, pattern: str = "*") -> list[str]: ...
