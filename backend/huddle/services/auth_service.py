"""Authentication service for JWT token management and password hashing.

This is the identity collaborator of the workspace services: it turns a
bearer token into a stable user id. Users are stored in the document
store and cached in Redis for USER_CACHE_SECONDS.
"""

import logging
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt

from huddle.db.redis_cache import get_redis_cache
from huddle.db.redis_db import RedisKeyPrefix
from huddle.models.documents import User
from huddle.services.errors import HuddleError
from huddle.settings import settings
from huddle.store import DocumentStore

logger = logging.getLogger(__name__)

USER_CACHE_SECONDS = 900  # 15 minutes


class EmailAlreadyRegistered(HuddleError):
    status_code = 400
    default_message = "Email already registered"


def create_access_token(claims: dict, expires_delta: timedelta | None = None) -> str:
    """Signed JWT carrying claims (which must include "sub", the user id).

    Expires after settings.jwt_expire_minutes unless expires_delta is given.
    """
    lifetime = expires_delta if expires_delta is not None else timedelta(minutes=settings.jwt_expire_minutes)
    payload = {**claims, "exp": datetime.now(timezone.utc) + lifetime}
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> str | None:
    """User id ("sub") of a valid, unexpired token; None otherwise."""
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.warning(f"Rejected token: {e}")
        return None
    return payload.get("sub")


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """False on mismatch and on a malformed hash."""
    try:
        return bcrypt.checkpw(plain_password.encode(), hashed_password.encode())
    except ValueError as e:
        logger.error(f"Unusable password hash: {e}")
        return False


def register_user(store: DocumentStore, name: str, email: str, password: str) -> User:
    """Create a user with a hashed password.

    Raises:
        EmailAlreadyRegistered: If the email is taken
    """
    email = email.lower()
    if store.unique("users", "by_email", email=email) is not None:
        raise EmailAlreadyRegistered()

    user_id = store.insert(
        "users",
        {"name": name, "email": email, "hashed_password": get_password_hash(password)},
    )
    logger.info(f"New user registered: {email}")
    return store.get("users", user_id)


def authenticate_user(store: DocumentStore, email: str, password: str) -> User | None:
    """The user with this email and password, or None."""
    user = store.unique("users", "by_email", email=email.lower())
    if not user or not user.hashed_password:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


def get_user_from_cache(store: DocumentStore, user_id: str) -> User | None:
    """Get user from Redis cache or the store.

    The cached copy never contains the password hash.
    """
    cache = get_redis_cache()
    cache_key = RedisKeyPrefix.user_key(user_id)

    cached_user = cache.get(cache_key)
    if cached_user:
        return User.model_validate(cached_user)

    user = store.get("users", user_id)
    if user:
        cache.set(cache_key, user.model_dump(exclude={"hashed_password"}), expire_seconds=USER_CACHE_SECONDS)

    return user
