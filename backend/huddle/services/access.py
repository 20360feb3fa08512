"""Membership and authorization gate.

Every workspace-scoped operation resolves the caller's membership here.
The gate fails closed: a missing identity, a missing or tombstoned
workspace, or a missing membership all deny.
"""

from huddle.models.documents import Member, MemberRole, Workspace
from huddle.services.errors import Unauthorized
from huddle.store import DocumentStore


def get_live_workspace(store: DocumentStore, workspace_id: str) -> Workspace | None:
    """Workspace by id, hiding workspaces whose removal has started."""
    workspace = store.get("workspaces", workspace_id)
    if workspace is None or workspace.deleted_at is not None:
        return None
    return workspace


def get_member(store: DocumentStore, user_id: str | None, workspace_id: str) -> Member | None:
    """The caller's membership in a workspace, or None."""
    if not user_id:
        return None
    if get_live_workspace(store, workspace_id) is None:
        return None
    return store.unique("members", "by_workspace_id_user_id", workspace_id=workspace_id, user_id=user_id)


def require_user(user_id: str | None) -> str:
    if not user_id:
        raise Unauthorized()
    return user_id


def require_member(store: DocumentStore, user_id: str | None, workspace_id: str) -> Member:
    member = get_member(store, user_id, workspace_id)
    if member is None:
        raise Unauthorized()
    return member


def require_admin(store: DocumentStore, user_id: str | None, workspace_id: str) -> Member:
    member = get_member(store, user_id, workspace_id)
    if member is None or member.role != MemberRole.admin:
        raise Unauthorized()
    return member
