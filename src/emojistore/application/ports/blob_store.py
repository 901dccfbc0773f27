from __future__ import annotations
from typing import Iterator, Protocol

class BlobStore(Protocol):
    def put(self, bucket: str, filename: str, data: bytes) -> None: ...
    def get(self, bucket: str, filename: str) -> bytes: ...
    def delete(self, bucket: str, filename: str) -> None: ...
    def list(self, bucket: str, prefix: str = "") -> Iterator[str]: ...
