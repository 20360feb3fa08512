"""
Redis key prefixes (single DB + key prefix pattern).

Every key starts with 'huddle:' so the backend can share a Redis instance
with other applications. Environments are isolated by Redis instance, not
by DB index.

Key format:
    {prefix}:{entity_id}

Examples:
    huddle:user:user_abc123
    huddle:lock:workspace:ws_xyz789
"""

from enum import Enum


class RedisKeyPrefix(str, Enum):
    """Redis key prefixes, one per concern."""

    USER_CACHE = "huddle:user"  # Cached user profile (String/JSON)
    WORKSPACE_LOCK = "huddle:lock:workspace"  # Per-workspace mutex (redis-py Lock)

    @classmethod
    def user_key(cls, user_id: str) -> str:
        """Key of a cached user profile."""
        return f"{cls.USER_CACHE.value}:{user_id}"

    @classmethod
    def workspace_lock_key(cls, workspace_id: str) -> str:
        """Key of the lock guarding membership and removal of a workspace."""
        return f"{cls.WORKSPACE_LOCK.value}:{workspace_id}"
