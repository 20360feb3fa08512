"""Workspace lifecycle.

Creates workspaces (seeded with an admin member and a default channel),
lets users join with a join code, rotates the code, renames, and removes
a workspace together with every row that belongs to it.

Removal is a resumable sweep rather than a single pass:

1. the workspace row is tombstoned (deleted_at), which hides it from every
   read and from join;
2. each workspace-scoped table is emptied in batches;
3. the workspace row is deleted.

Each step is idempotent, so if the process dies midway, calling remove
again (or resume_removal from the maintenance script) finishes the job.
Members are swept last so that the admin can still retry.
"""

from collections.abc import Callable
from contextlib import AbstractContextManager, nullcontext

from huddle.models.documents import MemberRole, Workspace
from huddle.models.views import WorkspaceInfo
from huddle.services.access import get_live_workspace, get_member, require_admin, require_user
from huddle.services.errors import AlreadyMember, InvalidJoinCode, NotFound, Unauthorized
from huddle.services.locks import WorkspaceLocks
from huddle.settings import settings
from huddle.store import WORKSPACE_SCOPED_TABLES, DocumentStore
from huddle.utils import generate_join_code, get_logger, get_timestamp_ms

logger = get_logger(__name__)


class WorkspaceService:
    def __init__(
        self,
        store: DocumentStore,
        locks: WorkspaceLocks | None = None,
        batch_size: int = settings.cascade_batch_size,
        code_generator: Callable[[], str] | None = None,
    ):
        self.store = store
        self.locks = locks
        self.batch_size = batch_size
        self.code_generator = code_generator or (lambda: generate_join_code(settings.join_code_length))

    def _hold(self, workspace_id: str) -> AbstractContextManager:
        if self.locks is None:
            return nullcontext()
        return self.locks.hold(workspace_id)

    # ==================== Mutations ====================

    def create(self, user_id: str | None, name: str) -> str:
        """Create a workspace owned by the caller.

        Seeds exactly one admin member (the caller) and one channel named
        settings.default_channel_name.
        """
        user_id = require_user(user_id)

        workspace_id = self.store.insert(
            "workspaces",
            {"name": name, "user_id": user_id, "join_code": self.code_generator()},
        )
        self.store.insert(
            "members",
            {"user_id": user_id, "workspace_id": workspace_id, "role": MemberRole.admin},
        )
        self.store.insert(
            "channels",
            {"name": settings.default_channel_name, "workspace_id": workspace_id},
        )

        logger.info(f"Workspace created: id={workspace_id}, owner={user_id}")
        return workspace_id

    def join(self, user_id: str | None, workspace_id: str, join_code: str) -> str:
        """Join a workspace as a plain member using its join code.

        The code comparison is case-insensitive: stored codes are lowercase.

        Raises:
            Unauthorized: No identity
            NotFound: Workspace missing or being removed
            InvalidJoinCode: Code mismatch
            AlreadyMember: The caller already belongs to the workspace
        """
        user_id = require_user(user_id)

        with self._hold(workspace_id):
            workspace = get_live_workspace(self.store, workspace_id)
            if workspace is None:
                raise NotFound("Workspace not found")
            if workspace.join_code != join_code.lower():
                raise InvalidJoinCode()

            existing = self.store.unique(
                "members", "by_workspace_id_user_id", workspace_id=workspace_id, user_id=user_id
            )
            if existing is not None:
                raise AlreadyMember()

            self.store.insert(
                "members",
                {"user_id": user_id, "workspace_id": workspace_id, "role": MemberRole.member},
            )

        logger.info(f"User {user_id} joined workspace {workspace_id}")
        return workspace.id

    def new_join_code(self, user_id: str | None, workspace_id: str) -> str:
        """Replace the join code. Admin only."""
        with self._hold(workspace_id):
            require_admin(self.store, user_id, workspace_id)
            self.store.patch("workspaces", workspace_id, {"join_code": self.code_generator()})

        logger.info(f"Join code rotated for workspace {workspace_id}")
        return workspace_id

    def update(self, user_id: str | None, workspace_id: str, name: str) -> str:
        """Rename a workspace. Admin only."""
        with self._hold(workspace_id):
            require_admin(self.store, user_id, workspace_id)
            self.store.patch("workspaces", workspace_id, {"name": name})
        return workspace_id

    def remove(self, user_id: str | None, workspace_id: str) -> str:
        """Remove a workspace and everything scoped to it. Admin only.

        The admin check reads the workspace row even when it is tombstoned:
        a removal that failed partway through is retried by calling remove again.
        """
        user_id = require_user(user_id)

        with self._hold(workspace_id):
            workspace = self.store.get("workspaces", workspace_id)
            if workspace is None:
                raise Unauthorized()
            member = self.store.unique(
                "members", "by_workspace_id_user_id", workspace_id=workspace_id, user_id=user_id
            )
            if member is None or member.role != MemberRole.admin:
                raise Unauthorized()

            self._tombstone(workspace)
            self._sweep(workspace_id)

        return workspace_id

    def resume_removal(self, workspace_id: str) -> bool:
        """Finish sweeping a tombstoned workspace. Maintenance entry point.

        Returns:
            False if the workspace is gone or was never marked for removal
        """
        with self._hold(workspace_id):
            workspace = self.store.get("workspaces", workspace_id)
            if workspace is None or workspace.deleted_at is None:
                return False
            self._sweep(workspace_id)
        return True

    def _tombstone(self, workspace: Workspace) -> None:
        if workspace.deleted_at is None:
            self.store.patch("workspaces", workspace.id, {"deleted_at": get_timestamp_ms()})
            logger.info(f"Workspace {workspace.id} marked for removal")
        else:
            logger.info(f"Resuming removal of workspace {workspace.id}")

    def _sweep(self, workspace_id: str) -> dict[str, int]:
        counts: dict[str, int] = {}
        for table in WORKSPACE_SCOPED_TABLES:
            deleted = 0
            while True:
                batch = self.store.query(table, "by_workspace_id", limit=self.batch_size, workspace_id=workspace_id)
                if not batch:
                    break
                for row in batch:
                    self.store.delete(table, row.id)
                deleted += len(batch)
            counts[table] = deleted

        self.store.delete("workspaces", workspace_id)
        logger.info(f"Workspace {workspace_id} removed: {counts}")
        return counts

    # ==================== Queries ====================

    def get(self, user_id: str | None) -> list[Workspace]:
        """Workspaces the caller belongs to. Anonymous callers get []."""
        if not user_id:
            return []

        workspaces = []
        for member in self.store.query("members", "by_user_id", user_id=user_id):
            workspace = get_live_workspace(self.store, member.workspace_id)
            if workspace is not None:
                workspaces.append(workspace)
        return workspaces

    def get_by_id(self, user_id: str | None, workspace_id: str) -> Workspace | None:
        """Full workspace record, or None when the caller is not a member."""
        user_id = require_user(user_id)

        if get_member(self.store, user_id, workspace_id) is None:
            return None
        return get_live_workspace(self.store, workspace_id)

    def get_info_by_id(self, user_id: str | None, workspace_id: str) -> WorkspaceInfo | None:
        """Name and membership flag, for the join prompt shown to non-members."""
        if not user_id:
            return None

        member = get_member(self.store, user_id, workspace_id)
        workspace = get_live_workspace(self.store, workspace_id)
        return WorkspaceInfo(
            name=workspace.name if workspace else None,
            is_member=member is not None,
        )
