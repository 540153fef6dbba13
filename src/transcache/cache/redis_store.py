# src/transcache/cache/redis_store.py
"""Redis-based catalog store (CACHE_BACKEND=redis).

Requires 'redis' package: pip install transcache[redis].
The store is shared by every node, so global groups need no extra work.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from transcache.cache.base_cache_store import BaseCatalogStore
from transcache.exceptions import StoreError

logger = logging.getLogger(__name__)

_KEY_PREFIX = "transcache:"


class RedisCatalogStore(BaseCatalogStore):
    """Redis-backed catalog store with native TTL."""

    def __init__(self, redis_url: str) -> None:
        super().__init__()
        try:
            import redis
        except ImportError as e:
            raise ImportError(
                "redis package required: pip install redis"
            ) from e

        self._client = redis.Redis.from_url(redis_url, decode_responses=True)
        self._errors: tuple[type[Exception], ...] = (redis.RedisError,)

    async def get(self, key: str, group: str) -> tuple[Any, bool]:
        try:
            data = self._client.get(self._redis_key(key, group))
        except self._errors as e:
            raise StoreError(f"Cannot read cache entry {key}: {e}") from e
        if data is None:
            return None, False
        try:
            return json.loads(data), True
        except json.JSONDecodeError as e:
            logger.warning("Failed to deserialize cache entry %s: %s", key, e)
            return None, False

    async def set(self, key: str, value: Any, group: str, ttl: int = 0) -> bool:
        if ttl < 0:
            return False
        try:
            payload = json.dumps(value)
            result = self._client.set(
                self._redis_key(key, group), payload, ex=ttl if ttl > 0 else None
            )
        except (TypeError, ValueError) as e:
            raise StoreError(f"Cannot serialize cache entry {key}: {e}") from e
        except self._errors as e:
            raise StoreError(f"Cannot write cache entry {key}: {e}") from e
        return bool(result)

    async def delete(self, key: str, group: str) -> bool:
        try:
            return self._client.delete(self._redis_key(key, group)) > 0
        except self._errors as e:
            raise StoreError(f"Cannot delete cache entry {key}: {e}") from e

    async def exists(self, key: str, group: str) -> bool:
        try:
            return self._client.exists(self._redis_key(key, group)) > 0
        except self._errors as e:
            raise StoreError(f"Cannot probe cache entry {key}: {e}") from e

    def close(self) -> None:
        """Close the Redis connection."""
        self._client.close()

    @staticmethod
    def _redis_key(key: str, group: str) -> str:
        return f"{_KEY_PREFIX}{group}:{key}"
