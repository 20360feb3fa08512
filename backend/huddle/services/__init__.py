"""Business logic of the workspace domain.

Every service takes a DocumentStore and receives the caller identity
(user_id, possibly None) explicitly on each call.
"""

from huddle.services.channel_service import ChannelService
from huddle.services.conversation_service import ConversationService
from huddle.services.member_service import MemberService
from huddle.services.message_service import MessageService
from huddle.services.reaction_service import ReactionService
from huddle.services.workspace_service import WorkspaceService

__all__ = [
    "ChannelService",
    "ConversationService",
    "MemberService",
    "MessageService",
    "ReactionService",
    "WorkspaceService",
]
