"""Channel API endpoints."""

import logging

from fastapi import APIRouter, Depends

from huddle.api.v1.deps import get_channel_service, to_http_exception
from huddle.api.v1.endpoints.auth import get_current_user_id
from huddle.models.schemas import ChannelRequest, ChannelResponse, IdResponse
from huddle.services import ChannelService
from huddle.services.errors import HuddleError
from huddle.store import StoreError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/workspaces/{workspace_id}/channels", response_model=IdResponse)
def create_channel(
    workspace_id: str,
    request: ChannelRequest,
    user_id: str = Depends(get_current_user_id),
    service: ChannelService = Depends(get_channel_service),
):
    """Create a channel. Admin only; the name is normalized to kebab-case."""
    logger.info(f"POST /workspaces/{workspace_id}/channels: name={request.name}")
    try:
        return IdResponse(id=service.create(user_id, workspace_id, request.name))
    except (HuddleError, StoreError) as e:
        raise to_http_exception(e) from e


@router.get("/workspaces/{workspace_id}/channels", response_model=list[ChannelResponse])
def list_channels(
    workspace_id: str,
    user_id: str = Depends(get_current_user_id),
    service: ChannelService = Depends(get_channel_service),
):
    try:
        channels = service.get(user_id, workspace_id)
    except (HuddleError, StoreError) as e:
        raise to_http_exception(e) from e
    return [ChannelResponse.from_document(c) for c in channels]


@router.get("/channels/{channel_id}", response_model=ChannelResponse | None)
def get_channel(
    channel_id: str,
    user_id: str = Depends(get_current_user_id),
    service: ChannelService = Depends(get_channel_service),
):
    try:
        channel = service.get_by_id(user_id, channel_id)
    except (HuddleError, StoreError) as e:
        raise to_http_exception(e) from e
    return ChannelResponse.from_document(channel) if channel else None


@router.patch("/channels/{channel_id}", response_model=IdResponse)
def update_channel(
    channel_id: str,
    request: ChannelRequest,
    user_id: str = Depends(get_current_user_id),
    service: ChannelService = Depends(get_channel_service),
):
    """Rename a channel. Admin only."""
    logger.info(f"PATCH /channels/{channel_id}: name={request.name}")
    try:
        return IdResponse(id=service.update(user_id, channel_id, request.name))
    except (HuddleError, StoreError) as e:
        raise to_http_exception(e) from e


@router.delete("/channels/{channel_id}", response_model=IdResponse)
def remove_channel(
    channel_id: str,
    user_id: str = Depends(get_current_user_id),
    service: ChannelService = Depends(get_channel_service),
):
    """Delete a channel and its messages. Admin only."""
    logger.info(f"DELETE /channels/{channel_id}: user_id={user_id}")
    try:
        return IdResponse(id=service.remove(user_id, channel_id))
    except (HuddleError, StoreError) as e:
        raise to_http_exception(e) from e
