"""Shared FastAPI dependencies: document store, services, error mapping."""

from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from huddle.db.mysql import get_db
from huddle.services import (
    ChannelService,
    ConversationService,
    MemberService,
    MessageService,
    ReactionService,
    WorkspaceService,
)
from huddle.services.errors import HuddleError
from huddle.services.locks import get_workspace_locks
from huddle.settings import settings
from huddle.store import DocumentStore, SqlStore, StoreError, memory_store
from huddle.utils import get_logger

logger = get_logger(__name__)


def get_store(db: Session = Depends(get_db)) -> DocumentStore:
    """Document store for the request, per settings.use_memory_store."""
    if settings.use_memory_store:
        return memory_store
    return SqlStore(db)


def get_workspace_service(store: DocumentStore = Depends(get_store)) -> WorkspaceService:
    return WorkspaceService(store, locks=get_workspace_locks())


def get_member_service(store: DocumentStore = Depends(get_store)) -> MemberService:
    return MemberService(store)


def get_channel_service(store: DocumentStore = Depends(get_store)) -> ChannelService:
    return ChannelService(store)


def get_conversation_service(store: DocumentStore = Depends(get_store)) -> ConversationService:
    return ConversationService(store)


def get_message_service(store: DocumentStore = Depends(get_store)) -> MessageService:
    return MessageService(store)


def get_reaction_service(store: DocumentStore = Depends(get_store)) -> ReactionService:
    return ReactionService(store)


def to_http_exception(error: HuddleError | StoreError) -> HTTPException:
    """HTTP error for a service failure."""
    if isinstance(error, StoreError):
        logger.error(f"Store error: {error}")
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Storage error")
    return HTTPException(status_code=error.status_code, detail=str(error))
