"""Stored documents, as returned by every DocumentStore implementation."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class MemberRole(str, Enum):
    admin = "admin"
    member = "member"


class Document(BaseModel):
    """Common fields assigned by the store on insert."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: int
    # Insertion order; ties in created_at are broken by it
    seq: int


class User(Document):
    name: str
    email: str
    hashed_password: str | None = None


class Workspace(Document):
    name: str
    user_id: str
    join_code: str
    deleted_at: int | None = None


class Member(Document):
    user_id: str
    workspace_id: str
    role: MemberRole


class Channel(Document):
    name: str
    workspace_id: str


class Conversation(Document):
    workspace_id: str
    member_one_id: str
    member_two_id: str


class Message(Document):
    body: str
    member_id: str
    workspace_id: str
    channel_id: str | None = None
    parent_message_id: str | None = None
    conversation_id: str | None = None
    updated_at: int | None = None


class Reaction(Document):
    workspace_id: str
    message_id: str
    member_id: str
    value: str
