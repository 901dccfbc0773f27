"""Domain models for the emoji store."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Size(str, Enum):
    """Rendition sizes, each backed by its own bucket."""

    SMALL = "24"
    MEDIUM = "36"
    LARGE = "48"
    FULL = "full"

    @classmethod
    def ordered(cls, sizes: list[Size] | tuple[Size, ...]) -> list[Size]:
        """Return sizes smallest first, full last."""
        rank = {size: i for i, size in enumerate(cls)}
        return sorted(set(sizes), key=lambda s: rank[s])


class IndexEncoding(str, Enum):
    """Text encoding of image bytes inside the hot index."""

    HEX = "hex"
    BASE64 = "base64"


@dataclass(frozen=True)
class IndexEntry:
    """Value held in the hot index for one (name, size) key."""

    extension: str
    data: str  # encoded bytes, see IndexEncoding


@dataclass(frozen=True)
class Asset:
    name: str
    extension: str
    size: Size
    data: bytes

    @property
    def filename(self) -> str:
        return f"{self.name}.{self.extension}"

    @property
    def content_type(self) -> str:
        return f"image/{self.extension}"


@dataclass(frozen=True)
class ReconcileResult:
    """Outcome of a reconciliation pass."""

    already_initialized: bool
    created: tuple[str, ...] = ()

    @property
    def created_count(self) -> int:
        return len(self.created)
