"""Hot index adapters."""

from emojistore.infrastructure.index.redis_index import RedisHotIndex, redis_index_from_settings

__all__ = [
    "RedisHotIndex",
    "redis_index_from_settings",
]
