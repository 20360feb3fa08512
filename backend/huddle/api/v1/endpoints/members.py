"""Member API endpoints."""

import logging

from fastapi import APIRouter, Depends

from huddle.api.v1.deps import get_member_service, to_http_exception
from huddle.api.v1.endpoints.auth import get_current_user_id
from huddle.models.schemas import IdResponse, MemberResponse, UpdateMemberRequest
from huddle.services import MemberService
from huddle.services.errors import HuddleError
from huddle.store import StoreError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/workspaces/{workspace_id}/members", response_model=list[MemberResponse])
def list_members(
    workspace_id: str,
    user_id: str = Depends(get_current_user_id),
    service: MemberService = Depends(get_member_service),
):
    """Members of a workspace with their user profiles; empty for non-members."""
    try:
        members = service.get(user_id, workspace_id)
    except (HuddleError, StoreError) as e:
        raise to_http_exception(e) from e
    return [MemberResponse.from_document(m) for m in members]


@router.get("/workspaces/{workspace_id}/members/current", response_model=MemberResponse | None)
def get_current_member(
    workspace_id: str,
    user_id: str = Depends(get_current_user_id),
    service: MemberService = Depends(get_member_service),
):
    try:
        member = service.current(user_id, workspace_id)
    except (HuddleError, StoreError) as e:
        raise to_http_exception(e) from e
    return MemberResponse.from_document(member) if member else None


@router.get("/members/{member_id}", response_model=MemberResponse | None)
def get_member(
    member_id: str,
    user_id: str = Depends(get_current_user_id),
    service: MemberService = Depends(get_member_service),
):
    try:
        member = service.get_by_id(user_id, member_id)
    except (HuddleError, StoreError) as e:
        raise to_http_exception(e) from e
    return MemberResponse.from_document(member) if member else None


@router.patch("/members/{member_id}", response_model=IdResponse)
def update_member(
    member_id: str,
    request: UpdateMemberRequest,
    user_id: str = Depends(get_current_user_id),
    service: MemberService = Depends(get_member_service),
):
    """Change a member's role. Admin only."""
    logger.info(f"PATCH /members/{member_id}: role={request.role.value}")
    try:
        return IdResponse(id=service.update(user_id, member_id, request.role))
    except (HuddleError, StoreError) as e:
        raise to_http_exception(e) from e


@router.delete("/members/{member_id}", response_model=IdResponse)
def remove_member(
    member_id: str,
    user_id: str = Depends(get_current_user_id),
    service: MemberService = Depends(get_member_service),
):
    """Remove a member (or leave) together with their messages and conversations."""
    logger.info(f"DELETE /members/{member_id}: user_id={user_id}")
    try:
        return IdResponse(id=service.remove(user_id, member_id))
    except (HuddleError, StoreError) as e:
        raise to_http_exception(e) from e
