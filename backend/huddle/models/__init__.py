from .documents import (
    Channel,
    Conversation,
    Document,
    Member,
    MemberRole,
    Message,
    Reaction,
    User,
    Workspace,
)
from .views import (
    MemberWithUser,
    MessageDetail,
    MessagePage,
    ReactionSummary,
    UserProfile,
    WorkspaceInfo,
)

__all__ = [
    "Document",
    "User",
    "Workspace",
    "Member",
    "MemberRole",
    "Channel",
    "Conversation",
    "Message",
    "Reaction",
    "UserProfile",
    "MemberWithUser",
    "ReactionSummary",
    "MessageDetail",
    "MessagePage",
    "WorkspaceInfo",
]
