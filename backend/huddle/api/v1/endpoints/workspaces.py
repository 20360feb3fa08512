"""Workspace API endpoints.

Create, join, rotate the join code, rename, remove, and read workspaces.
Reads that must work for anonymous callers (list, info) use optional auth.
"""

import logging

from fastapi import APIRouter, Depends

from huddle.api.v1.deps import get_workspace_service, to_http_exception
from huddle.api.v1.endpoints.auth import get_current_user_id, get_current_user_id_optional
from huddle.models.schemas import (
    CreateWorkspaceRequest,
    IdResponse,
    JoinWorkspaceRequest,
    UpdateWorkspaceRequest,
    WorkspaceInfoResponse,
    WorkspaceResponse,
)
from huddle.services import WorkspaceService
from huddle.services.errors import HuddleError
from huddle.store import StoreError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=IdResponse)
def create_workspace(
    request: CreateWorkspaceRequest,
    user_id: str = Depends(get_current_user_id),
    service: WorkspaceService = Depends(get_workspace_service),
):
    """Create a workspace with the caller as admin and a default channel."""
    logger.info(f"POST /workspaces: name={request.name}, user_id={user_id}")
    try:
        return IdResponse(id=service.create(user_id, request.name))
    except (HuddleError, StoreError) as e:
        raise to_http_exception(e) from e


@router.get("", response_model=list[WorkspaceResponse])
def list_workspaces(
    user_id: str | None = Depends(get_current_user_id_optional),
    service: WorkspaceService = Depends(get_workspace_service),
):
    """Workspaces the caller belongs to; empty for anonymous callers."""
    try:
        workspaces = service.get(user_id)
    except (HuddleError, StoreError) as e:
        raise to_http_exception(e) from e
    return [WorkspaceResponse.from_document(w) for w in workspaces]


@router.get("/{workspace_id}", response_model=WorkspaceResponse | None)
def get_workspace(
    workspace_id: str,
    user_id: str = Depends(get_current_user_id),
    service: WorkspaceService = Depends(get_workspace_service),
):
    """Full workspace, or null when the caller is not a member."""
    try:
        workspace = service.get_by_id(user_id, workspace_id)
    except (HuddleError, StoreError) as e:
        raise to_http_exception(e) from e
    return WorkspaceResponse.from_document(workspace) if workspace else None


@router.get("/{workspace_id}/info", response_model=WorkspaceInfoResponse | None)
def get_workspace_info(
    workspace_id: str,
    user_id: str | None = Depends(get_current_user_id_optional),
    service: WorkspaceService = Depends(get_workspace_service),
):
    """Name and membership flag, shown before joining. Null for anonymous callers."""
    try:
        info = service.get_info_by_id(user_id, workspace_id)
    except (HuddleError, StoreError) as e:
        raise to_http_exception(e) from e
    return WorkspaceInfoResponse.from_view(info) if info else None


@router.post("/{workspace_id}/join", response_model=IdResponse)
def join_workspace(
    workspace_id: str,
    request: JoinWorkspaceRequest,
    user_id: str = Depends(get_current_user_id),
    service: WorkspaceService = Depends(get_workspace_service),
):
    """Join a workspace with its join code (case-insensitive)."""
    logger.info(f"POST /workspaces/{workspace_id}/join: user_id={user_id}")
    try:
        return IdResponse(id=service.join(user_id, workspace_id, request.joinCode))
    except (HuddleError, StoreError) as e:
        raise to_http_exception(e) from e


@router.post("/{workspace_id}/join-code", response_model=IdResponse)
def rotate_join_code(
    workspace_id: str,
    user_id: str = Depends(get_current_user_id),
    service: WorkspaceService = Depends(get_workspace_service),
):
    """Generate a new join code. Admin only."""
    logger.info(f"POST /workspaces/{workspace_id}/join-code: user_id={user_id}")
    try:
        return IdResponse(id=service.new_join_code(user_id, workspace_id))
    except (HuddleError, StoreError) as e:
        raise to_http_exception(e) from e


@router.patch("/{workspace_id}", response_model=IdResponse)
def update_workspace(
    workspace_id: str,
    request: UpdateWorkspaceRequest,
    user_id: str = Depends(get_current_user_id),
    service: WorkspaceService = Depends(get_workspace_service),
):
    """Rename a workspace. Admin only."""
    logger.info(f"PATCH /workspaces/{workspace_id}: name={request.name}")
    try:
        return IdResponse(id=service.update(user_id, workspace_id, request.name))
    except (HuddleError, StoreError) as e:
        raise to_http_exception(e) from e


@router.delete("/{workspace_id}", response_model=IdResponse)
def remove_workspace(
    workspace_id: str,
    user_id: str = Depends(get_current_user_id),
    service: WorkspaceService = Depends(get_workspace_service),
):
    """Remove a workspace and everything in it. Admin only."""
    logger.info(f"DELETE /workspaces/{workspace_id}: user_id={user_id}")
    try:
        return IdResponse(id=service.remove(user_id, workspace_id))
    except (HuddleError, StoreError) as e:
        raise to_http_exception(e) from e
