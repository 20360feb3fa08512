"""Message and reaction API endpoints."""

import logging

from fastapi import APIRouter, Depends, Query

from huddle.api.v1.deps import get_message_service, get_reaction_service, to_http_exception
from huddle.api.v1.endpoints.auth import get_current_user_id
from huddle.models.schemas import (
    CreateMessageRequest,
    IdResponse,
    MessagePageResponse,
    MessageResponse,
    ToggleReactionRequest,
    UpdateMessageRequest,
)
from huddle.services import MessageService, ReactionService
from huddle.services.errors import HuddleError
from huddle.settings import settings
from huddle.store import StoreError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=IdResponse)
def create_message(
    request: CreateMessageRequest,
    user_id: str = Depends(get_current_user_id),
    service: MessageService = Depends(get_message_service),
):
    """Post a message to a channel, a conversation, or a thread."""
    logger.info(
        f"POST /messages: workspace_id={request.workspaceId}, "
        f"channel_id={request.channelId}, conversation_id={request.conversationId}, "
        f"parent_message_id={request.parentMessageId}"
    )
    try:
        message_id = service.create(
            user_id,
            request.workspaceId,
            request.body,
            channel_id=request.channelId,
            conversation_id=request.conversationId,
            parent_message_id=request.parentMessageId,
        )
    except (HuddleError, StoreError) as e:
        raise to_http_exception(e) from e
    return IdResponse(id=message_id)


@router.get("", response_model=MessagePageResponse)
def list_messages(
    channelId: str | None = Query(None),
    conversationId: str | None = Query(None),
    parentMessageId: str | None = Query(None),
    cursor: str | None = Query(None),
    numItems: int = Query(settings.messages_page_size, ge=1, le=100),
    user_id: str = Depends(get_current_user_id),
    service: MessageService = Depends(get_message_service),
):
    """One page of messages, newest first. Pass continueCursor back as cursor."""
    try:
        page = service.get(
            user_id,
            channel_id=channelId,
            conversation_id=conversationId,
            parent_message_id=parentMessageId,
            cursor=cursor,
            num_items=numItems,
        )
    except (HuddleError, StoreError) as e:
        raise to_http_exception(e) from e
    return MessagePageResponse.from_view(page)


@router.get("/{message_id}", response_model=MessageResponse | None)
def get_message(
    message_id: str,
    user_id: str = Depends(get_current_user_id),
    service: MessageService = Depends(get_message_service),
):
    try:
        message = service.get_by_id(user_id, message_id)
    except (HuddleError, StoreError) as e:
        raise to_http_exception(e) from e
    return MessageResponse.from_view(message) if message else None


@router.patch("/{message_id}", response_model=IdResponse)
def update_message(
    message_id: str,
    request: UpdateMessageRequest,
    user_id: str = Depends(get_current_user_id),
    service: MessageService = Depends(get_message_service),
):
    """Edit a message. Author only."""
    logger.info(f"PATCH /messages/{message_id}")
    try:
        return IdResponse(id=service.update(user_id, message_id, request.body))
    except (HuddleError, StoreError) as e:
        raise to_http_exception(e) from e


@router.delete("/{message_id}", response_model=IdResponse)
def remove_message(
    message_id: str,
    user_id: str = Depends(get_current_user_id),
    service: MessageService = Depends(get_message_service),
):
    """Delete a message. Author only."""
    logger.info(f"DELETE /messages/{message_id}")
    try:
        return IdResponse(id=service.remove(user_id, message_id))
    except (HuddleError, StoreError) as e:
        raise to_http_exception(e) from e


@router.post("/{message_id}/reactions", response_model=IdResponse)
def toggle_reaction(
    message_id: str,
    request: ToggleReactionRequest,
    user_id: str = Depends(get_current_user_id),
    service: ReactionService = Depends(get_reaction_service),
):
    """Add the caller's reaction, or remove it if already present."""
    try:
        return IdResponse(id=service.toggle(user_id, message_id, request.value))
    except (HuddleError, StoreError) as e:
        raise to_http_exception(e) from e
