"""Bucket and key layout shared by the asset and reconcile use cases."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

from emojistore.domain.exceptions import InvalidInput
from emojistore.domain.keys import index_key
from emojistore.domain.models import IndexEncoding, Size


@dataclass(frozen=True)
class StoreLayout:
    """Which sizes are enabled, where their bytes live and how they are keyed.

    A layout with only ``Size.FULL`` enabled runs in single-size mode: index
    keys are the bare asset name. With any other combination every key
    carries a ``:<size>`` suffix.
    """

    buckets: Mapping[Size, str]
    encoding: IndexEncoding = IndexEncoding.HEX
    sentinel_name: str = "slackbot"
    sizes: tuple[Size, ...] = field(init=False)

    def __post_init__(self) -> None:
        if not self.buckets:
            raise ValueError("At least one size bucket must be configured")
        object.__setattr__(self, "sizes", tuple(Size.ordered(list(self.buckets))))

    @property
    def multi_size(self) -> bool:
        return self.sizes != (Size.FULL,)

    @property
    def sentinel_key(self) -> str:
        return self.key(self.sentinel_name, self.sizes[0])

    def key(self, name: str, size: Size) -> str:
        return index_key(name, size, self.multi_size)

    def bucket(self, size: Size) -> str:
        return self.buckets[size]

    def resolve_size(self, size: Optional[Size | str]) -> Size:
        """Validate a requested size against the enabled ones.

        A missing size means ``full`` in single-size mode and is an error
        otherwise.
        """
        if size is None or size == "":
            if self.multi_size:
                raise InvalidInput("size parameter required")
            return Size.FULL
        try:
            resolved = Size(size)
        except ValueError as e:
            raise InvalidInput(f"Unknown size: {size}") from e
        if resolved not in self.buckets:
            raise InvalidInput(f"Size {resolved.value} is not enabled")
        return resolved
