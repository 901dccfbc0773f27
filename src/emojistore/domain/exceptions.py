"""Error taxonomy shared by the core and its adapters."""

from __future__ import annotations


class EmojiStoreError(Exception):
    """Base class for emoji store failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInput(EmojiStoreError):
    """Missing or malformed name, extension, size or body."""


class Conflict(EmojiStoreError):
    """An asset already exists under the requested key."""


class NotFound(EmojiStoreError):
    """The requested asset or object does not exist."""


class UpstreamFailure(EmojiStoreError):
    """A blob store or hot index operation failed."""
