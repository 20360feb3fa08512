"""Database module for the Huddle backend.

Components:
- SQL (SQLite/MySQL via SQLAlchemy): persistent documents
- Redis: user cache and per-workspace locks
"""

from huddle.db.models import (
    Base,
    ChannelModel,
    ConversationModel,
    MemberModel,
    MessageModel,
    ReactionModel,
    UserModel,
    WorkspaceModel,
)
from huddle.db.mysql import (
    SessionLocal,
    check_connection,
    close_db,
    engine,
    get_db,
    get_db_session,
    init_db,
)
from huddle.db.redis_cache import RedisCache, get_redis_cache
from huddle.db.redis_db import RedisKeyPrefix
from huddle.db.redis_factory import create_redis_client, get_redis_client

__all__ = [
    # Redis
    "RedisCache",
    "RedisKeyPrefix",
    "create_redis_client",
    "get_redis_cache",
    "get_redis_client",
    # SQL - Connection
    "engine",
    "SessionLocal",
    "get_db",
    "get_db_session",
    "init_db",
    "close_db",
    "check_connection",
    # SQL - Models
    "Base",
    "UserModel",
    "WorkspaceModel",
    "MemberModel",
    "ChannelModel",
    "ConversationModel",
    "MessageModel",
    "ReactionModel",
]
