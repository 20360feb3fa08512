"""Read models assembled by the services from several documents."""

from pydantic import BaseModel

from huddle.models.documents import Member, Message


class UserProfile(BaseModel):
    """Public part of a user: never carries the password hash."""

    id: str
    name: str
    email: str


class MemberWithUser(Member):
    user: UserProfile | None = None


class ReactionSummary(BaseModel):
    value: str
    count: int
    member_ids: list[str]


class MessageDetail(Message):
    member: Member
    user: UserProfile | None = None
    reactions: list[ReactionSummary] = []
    thread_count: int = 0
    thread_timestamp: int | None = None  # created_at of the latest reply


class MessagePage(BaseModel):
    page: list[MessageDetail]
    is_done: bool
    continue_cursor: str | None = None


class WorkspaceInfo(BaseModel):
    """Reduced view of a workspace, visible to authenticated non-members."""

    name: str | None
    is_member: bool
