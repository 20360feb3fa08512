"""Direct conversation API endpoints."""

import logging

from fastapi import APIRouter, Depends

from huddle.api.v1.deps import get_conversation_service, to_http_exception
from huddle.api.v1.endpoints.auth import get_current_user_id
from huddle.models.schemas import CreateConversationRequest, IdResponse
from huddle.services import ConversationService
from huddle.services.errors import HuddleError
from huddle.store import StoreError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/workspaces/{workspace_id}/conversations", response_model=IdResponse)
def create_or_get_conversation(
    workspace_id: str,
    request: CreateConversationRequest,
    user_id: str = Depends(get_current_user_id),
    service: ConversationService = Depends(get_conversation_service),
):
    """Id of the 1:1 conversation with another member, created on first use."""
    logger.info(f"POST /workspaces/{workspace_id}/conversations: member_id={request.memberId}")
    try:
        return IdResponse(id=service.create_or_get(user_id, workspace_id, request.memberId))
    except (HuddleError, StoreError) as e:
        raise to_http_exception(e) from e
