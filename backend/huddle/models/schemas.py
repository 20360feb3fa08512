"""Pydantic models of the HTTP API, matching the frontend TypeScript types."""

from pydantic import BaseModel, Field

from huddle.models.documents import Channel, Member, MemberRole, Workspace
from huddle.models.views import MemberWithUser, MessageDetail, MessagePage, UserProfile, WorkspaceInfo


class IdResponse(BaseModel):
    id: str


# ==================== Workspaces ====================


class CreateWorkspaceRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=80)


class UpdateWorkspaceRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=80)


class JoinWorkspaceRequest(BaseModel):
    joinCode: str = Field(..., min_length=1, max_length=16)


class WorkspaceResponse(BaseModel):
    id: str
    name: str
    userId: str
    joinCode: str
    createdAt: int

    @classmethod
    def from_document(cls, workspace: Workspace) -> "WorkspaceResponse":
        return cls(
            id=workspace.id,
            name=workspace.name,
            userId=workspace.user_id,
            joinCode=workspace.join_code,
            createdAt=workspace.created_at,
        )


class WorkspaceInfoResponse(BaseModel):
    name: str | None = None
    isMember: bool

    @classmethod
    def from_view(cls, info: WorkspaceInfo) -> "WorkspaceInfoResponse":
        return cls(name=info.name, isMember=info.is_member)


# ==================== Members ====================


class UpdateMemberRequest(BaseModel):
    role: MemberRole


class UserResponse(BaseModel):
    id: str
    name: str
    email: str

    @classmethod
    def from_view(cls, user: UserProfile | None) -> "UserResponse | None":
        if user is None:
            return None
        return cls(id=user.id, name=user.name, email=user.email)


class MemberResponse(BaseModel):
    id: str
    userId: str
    workspaceId: str
    role: MemberRole
    createdAt: int
    user: UserResponse | None = None

    @classmethod
    def from_document(cls, member: Member | MemberWithUser) -> "MemberResponse":
        return cls(
            id=member.id,
            userId=member.user_id,
            workspaceId=member.workspace_id,
            role=member.role,
            createdAt=member.created_at,
            user=UserResponse.from_view(getattr(member, "user", None)),
        )


# ==================== Channels ====================


class ChannelRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=80)


class ChannelResponse(BaseModel):
    id: str
    name: str
    workspaceId: str
    createdAt: int

    @classmethod
    def from_document(cls, channel: Channel) -> "ChannelResponse":
        return cls(
            id=channel.id,
            name=channel.name,
            workspaceId=channel.workspace_id,
            createdAt=channel.created_at,
        )


# ==================== Conversations ====================


class CreateConversationRequest(BaseModel):
    memberId: str


# ==================== Messages ====================


class CreateMessageRequest(BaseModel):
    workspaceId: str
    body: str = Field(..., min_length=1)
    channelId: str | None = None
    conversationId: str | None = None
    parentMessageId: str | None = None


class UpdateMessageRequest(BaseModel):
    body: str = Field(..., min_length=1)


class ReactionSummaryResponse(BaseModel):
    value: str
    count: int
    memberIds: list[str]


class MessageResponse(BaseModel):
    id: str
    body: str
    memberId: str
    workspaceId: str
    channelId: str | None = None
    conversationId: str | None = None
    parentMessageId: str | None = None
    createdAt: int
    updatedAt: int | None = None
    member: MemberResponse
    user: UserResponse | None = None
    reactions: list[ReactionSummaryResponse] = []
    threadCount: int = 0
    threadTimestamp: int | None = None

    @classmethod
    def from_view(cls, message: MessageDetail) -> "MessageResponse":
        return cls(
            id=message.id,
            body=message.body,
            memberId=message.member_id,
            workspaceId=message.workspace_id,
            channelId=message.channel_id,
            conversationId=message.conversation_id,
            parentMessageId=message.parent_message_id,
            createdAt=message.created_at,
            updatedAt=message.updated_at,
            member=MemberResponse.from_document(message.member),
            user=UserResponse.from_view(message.user),
            reactions=[
                ReactionSummaryResponse(value=r.value, count=r.count, memberIds=r.member_ids)
                for r in message.reactions
            ],
            threadCount=message.thread_count,
            threadTimestamp=message.thread_timestamp,
        )


class MessagePageResponse(BaseModel):
    page: list[MessageResponse]
    isDone: bool
    continueCursor: str | None = None

    @classmethod
    def from_view(cls, page: MessagePage) -> "MessagePageResponse":
        return cls(
            page=[MessageResponse.from_view(m) for m in page.page],
            isDone=page.is_done,
            continueCursor=page.continue_cursor,
        )


# ==================== Reactions ====================


class ToggleReactionRequest(BaseModel):
    value: str = Field(..., min_length=1, max_length=64)
