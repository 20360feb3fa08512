"""
JSON values in Redis with optional expiry.

Backs the user profile cache that resolves the caller of each request.
Redis is an optimization here, never the source of truth: every failure
is logged and reported as a miss, and callers fall back to the store.

Usage:
    cache = get_redis_cache()
    cache.set(RedisKeyPrefix.user_key(user_id), profile, expire_seconds=900)
    profile = cache.get(RedisKeyPrefix.user_key(user_id))
"""

import json
import logging
from typing import Any

import redis

from huddle.db.redis_factory import get_redis_client

logger = logging.getLogger(__name__)


class RedisCache:
    def __init__(self, client: redis.Redis | None = None):
        # None: resolve the shared client on first use
        self._client = client

    @property
    def client(self) -> redis.Redis:
        if self._client is None:
            self._client = get_redis_client()
        return self._client

    def get(self, key: str) -> Any | None:
        """Decoded value, or None on a miss, a Redis error or corrupt JSON."""
        try:
            raw = self.client.get(key)
        except redis.RedisError as e:
            logger.error(f"Redis get failed for {key}: {e}")
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.error(f"Discarding corrupt cache entry {key}")
            return None

    def set(self, key: str, value: Any, expire_seconds: int | None = None) -> bool:
        try:
            payload = json.dumps(value, default=str)
            return bool(self.client.set(key, payload, ex=expire_seconds))
        except (TypeError, ValueError) as e:
            logger.error(f"Cannot serialize value for {key}: {e}")
        except redis.RedisError as e:
            logger.error(f"Redis set failed for {key}: {e}")
        return False

    def delete(self, key: str) -> bool:
        """True if the key existed."""
        try:
            return self.client.delete(key) > 0
        except redis.RedisError as e:
            logger.error(f"Redis delete failed for {key}: {e}")
            return False


_redis_cache: RedisCache | None = None


def get_redis_cache() -> RedisCache:
    """Process-wide cache over the shared Redis client."""
    global _redis_cache
    if _redis_cache is None:
        _redis_cache = RedisCache()
    return _redis_cache
