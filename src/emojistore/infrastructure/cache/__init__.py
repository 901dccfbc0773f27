"""Local cache implementations."""

from emojistore.infrastructure.cache.local_cache import TTLLocalCache

__all__ = ["TTLLocalCache"]
