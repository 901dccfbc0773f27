"""Domain models, keys and errors."""

from emojistore.domain.exceptions import (
    Conflict,
    EmojiStoreError,
    InvalidInput,
    NotFound,
    UpstreamFailure,
)
from emojistore.domain.models import (
    Asset,
    IndexEncoding,
    IndexEntry,
    ReconcileResult,
    Size,
)

__all__ = [
    "Asset",
    "IndexEncoding",
    "IndexEntry",
    "ReconcileResult",
    "Size",
    "EmojiStoreError",
    "InvalidInput",
    "Conflict",
    "NotFound",
    "UpstreamFailure",
]
