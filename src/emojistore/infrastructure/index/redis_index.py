"""Redis hash-backed hot index."""

from __future__ import annotations

from typing import Any, Optional

import redis
from loguru import logger

from emojistore.domain.exceptions import UpstreamFailure
from emojistore.domain.models import IndexEntry
from emojistore.infrastructure.settings import Settings

# Create-only HSET: the existence check and the write happen in one round trip.
_PUT_IF_ABSENT = """
if redis.call('EXISTS', KEYS[1]) == 1 then
    return 0
end
redis.call('HSET', KEYS[1], 'extension', ARGV[1], 'data', ARGV[2])
return 1
"""


class RedisHotIndex:
    """Each asset key maps to a hash with ``extension`` and ``data`` fields."""

    def __init__(self, client: redis.Redis) -> None:
        self.client = client
        self._put_if_absent = client.register_script(_PUT_IF_ABSENT)

    def exists(self, key: str) -> bool:
        try:
            return bool(self.client.exists(key))
        except redis.RedisError as e:
            raise UpstreamFailure(f"Index lookup for {key} failed: {e}") from e

    def get(self, key: str) -> Optional[IndexEntry]:
        try:
            fields = self.client.hgetall(key)
        except redis.RedisError as e:
            raise UpstreamFailure(f"Index read for {key} failed: {e}") from e
        if not fields or "data" not in fields:
            return None
        return IndexEntry(extension=fields.get("extension", ""), data=fields["data"])

    def put(self, key: str, entry: IndexEntry) -> None:
        try:
            self.client.hset(key, mapping={"extension": entry.extension, "data": entry.data})
        except redis.RedisError as e:
            raise UpstreamFailure(f"Index write for {key} failed: {e}") from e

    def put_if_absent(self, key: str, entry: IndexEntry) -> bool:
        try:
            created = self._put_if_absent(keys=[key], args=[entry.extension, entry.data])
        except redis.RedisError as e:
            raise UpstreamFailure(f"Index write for {key} failed: {e}") from e
        return bool(created)

    def delete(self, key: str) -> None:
        try:
            self.client.delete(key)
        except redis.RedisError as e:
            raise UpstreamFailure(f"Index delete for {key} failed: {e}") from e

    def list_keys(self, pattern: str = "*") -> list[str]:
        try:
            return list(self.client.scan_iter(match=pattern))
        except redis.RedisError as e:
            raise UpstreamFailure(f"Index scan failed: {e}") from e

    def health_check(self) -> dict[str, Any]:
        try:
            self.client.ping()
            return {"status": "healthy"}
        except redis.RedisError as e:
            logger.error(f"Redis health check failed: {e}")
            return {"status": "unhealthy", "error": str(e)}

    def close(self) -> None:
        self.client.close()


def redis_index_from_settings(settings: Settings) -> RedisHotIndex:
    client = redis.Redis.from_url(
        settings.redis_url,
        decode_responses=True,
        socket_timeout=settings.redis_socket_timeout,
    )
    return RedisHotIndex(client)
