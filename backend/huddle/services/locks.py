"""Per-workspace locks.

join checks for an existing membership and then inserts one; remove reads
every dependent collection and then deletes it. Both hold the workspace
lock for their whole read-then-write sequence, so two joins by the same
user cannot both insert, and a join cannot land in a workspace that is
being swept.

The lock is a redis-py Lock, shared by all backend instances that use the
same Redis. With redis_type=in_memory it only coordinates one process.
"""

from collections.abc import Iterator
from contextlib import contextmanager

import redis
from redis.exceptions import LockError

from huddle.db.redis_db import RedisKeyPrefix
from huddle.db.redis_factory import get_redis_client
from huddle.services.errors import WorkspaceBusy
from huddle.settings import settings
from huddle.utils import get_logger

logger = get_logger(__name__)


class WorkspaceLocks:
    """Factory of per-workspace mutexes."""

    def __init__(
        self,
        client: redis.Redis,
        timeout: float = settings.workspace_lock_timeout,
        blocking_timeout: float = settings.workspace_lock_blocking_timeout,
    ):
        self.client = client
        self.timeout = timeout
        self.blocking_timeout = blocking_timeout

    @contextmanager
    def hold(self, workspace_id: str) -> Iterator[None]:
        """Hold the lock of a workspace for the duration of the block.

        Raises:
            WorkspaceBusy: If the lock is not acquired within blocking_timeout
        """
        lock = self.client.lock(
            RedisKeyPrefix.workspace_lock_key(workspace_id),
            timeout=self.timeout,
            blocking_timeout=self.blocking_timeout,
        )
        if not lock.acquire():
            logger.warning(f"Workspace lock busy: {workspace_id}")
            raise WorkspaceBusy()
        try:
            yield
        finally:
            try:
                lock.release()
            except LockError as e:
                # Expired while held; the work already ran to completion
                logger.warning(f"Workspace lock for {workspace_id} expired before release: {e}")


_workspace_locks: WorkspaceLocks | None = None


def get_workspace_locks() -> WorkspaceLocks:
    """Get singleton lock factory over the shared Redis client."""
    global _workspace_locks
    if _workspace_locks is None:
        _workspace_locks = WorkspaceLocks(get_redis_client())
    return _workspace_locks
