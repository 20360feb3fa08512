"""SQLAlchemy ORM models for Huddle.

Entity Hierarchy:
    User -> Member -> Workspace
    Workspace -> Channel -> Message -> Reaction
    Workspace -> Conversation -> Message

Workspace-scoped rows reference their workspace by id only. There are no
foreign key cascades: removing a workspace deletes every dependent table
explicitly (see WorkspaceService.remove).
"""

from sqlalchemy import BigInteger, Column, Enum, Index, String, Text
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class UserModel(Base):
    """User account."""

    __tablename__ = "users"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    hashed_password = Column(String(255), nullable=True)
    created_at = Column(BigInteger, nullable=False)
    seq = Column(BigInteger, nullable=False)

    __table_args__ = (Index("idx_users_email", "email"),)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"


class WorkspaceModel(Base):
    """Workspace - top-level tenant for channels, conversations and members."""

    __tablename__ = "workspaces"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    user_id = Column(String(64), nullable=False)  # owner, set once at creation
    join_code = Column(String(16), nullable=False)
    deleted_at = Column(BigInteger, nullable=True)  # tombstone while the cascade runs
    created_at = Column(BigInteger, nullable=False)
    seq = Column(BigInteger, nullable=False)

    def __repr__(self) -> str:
        return f"<Workspace(id={self.id}, name={self.name})>"


class MemberModel(Base):
    """Member - binds a user to a workspace with a role."""

    __tablename__ = "members"

    id = Column(String(64), primary_key=True)
    user_id = Column(String(64), nullable=False)
    workspace_id = Column(String(64), nullable=False)
    role = Column(Enum("admin", "member", name="member_role"), nullable=False)
    created_at = Column(BigInteger, nullable=False)
    seq = Column(BigInteger, nullable=False)

    # Uniqueness of (workspace_id, user_id) is checked before insert, not here
    __table_args__ = (
        Index("idx_members_user_id", "user_id"),
        Index("idx_members_workspace_id", "workspace_id"),
        Index("idx_members_workspace_id_user_id", "workspace_id", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<Member(id={self.id}, role={self.role})>"


class ChannelModel(Base):
    """Channel - named room inside a workspace."""

    __tablename__ = "channels"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    workspace_id = Column(String(64), nullable=False)
    created_at = Column(BigInteger, nullable=False)
    seq = Column(BigInteger, nullable=False)

    __table_args__ = (Index("idx_channels_workspace_id", "workspace_id"),)

    def __repr__(self) -> str:
        return f"<Channel(id={self.id}, name={self.name})>"


class ConversationModel(Base):
    """Conversation - direct 1:1 conversation between two members."""

    __tablename__ = "conversations"

    id = Column(String(64), primary_key=True)
    workspace_id = Column(String(64), nullable=False)
    member_one_id = Column(String(64), nullable=False)
    member_two_id = Column(String(64), nullable=False)
    created_at = Column(BigInteger, nullable=False)
    seq = Column(BigInteger, nullable=False)

    __table_args__ = (Index("idx_conversations_workspace_id", "workspace_id"),)

    def __repr__(self) -> str:
        return f"<Conversation(id={self.id})>"


class MessageModel(Base):
    """Message - posted to a channel, a conversation, or as a thread reply."""

    __tablename__ = "messages"

    id = Column(String(64), primary_key=True)
    body = Column(Text, nullable=False)
    member_id = Column(String(64), nullable=False)
    workspace_id = Column(String(64), nullable=False)
    channel_id = Column(String(64), nullable=True)
    parent_message_id = Column(String(64), nullable=True)
    conversation_id = Column(String(64), nullable=True)
    updated_at = Column(BigInteger, nullable=True)
    created_at = Column(BigInteger, nullable=False)
    seq = Column(BigInteger, nullable=False)

    __table_args__ = (
        Index("idx_messages_workspace_id", "workspace_id"),
        Index("idx_messages_member_id", "member_id"),
        Index("idx_messages_channel_id", "channel_id"),
        Index("idx_messages_conversation_id", "conversation_id"),
        Index("idx_messages_parent_message_id", "parent_message_id"),
        Index(
            "idx_messages_channel_parent_conversation",
            "channel_id",
            "parent_message_id",
            "conversation_id",
            "seq",
        ),
    )

    def __repr__(self) -> str:
        return f"<Message(id={self.id}, member_id={self.member_id})>"


class ReactionModel(Base):
    """Reaction - an emoji value left by a member on a message."""

    __tablename__ = "reactions"

    id = Column(String(64), primary_key=True)
    workspace_id = Column(String(64), nullable=False)
    message_id = Column(String(64), nullable=False)
    member_id = Column(String(64), nullable=False)
    value = Column(String(64), nullable=False)
    created_at = Column(BigInteger, nullable=False)
    seq = Column(BigInteger, nullable=False)

    __table_args__ = (
        Index("idx_reactions_workspace_id", "workspace_id"),
        Index("idx_reactions_message_id", "message_id"),
        Index("idx_reactions_member_id", "member_id"),
    )

    def __repr__(self) -> str:
        return f"<Reaction(id={self.id}, value={self.value})>"
