"""Authentication endpoints and the caller-identity dependencies.

Every other router resolves its caller through get_current_user_id
(required auth) or get_current_user_id_optional (anonymous allowed).
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from huddle.api.v1.deps import get_store, to_http_exception
from huddle.models.auth_schemas import Token, UserLogin, UserRegister, UserResponse
from huddle.models.documents import User
from huddle.services.auth_service import (
    authenticate_user,
    create_access_token,
    get_user_from_cache,
    register_user,
    verify_token,
)
from huddle.services.errors import HuddleError
from huddle.store import DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter()
security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


def _unauthenticated(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _resolve_user(store: DocumentStore, token: str) -> User | None:
    user_id = verify_token(token)
    return get_user_from_cache(store, user_id) if user_id else None


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    store: DocumentStore = Depends(get_store),
) -> User:
    """User of the bearer token; 401 if the token is invalid or the user is gone."""
    user_id = verify_token(credentials.credentials)
    if not user_id:
        raise _unauthenticated("Could not validate credentials")
    user = get_user_from_cache(store, user_id)
    if user is None:
        raise _unauthenticated("User not found")
    return user


def get_current_user_optional(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(optional_security)],
    store: DocumentStore = Depends(get_store),
) -> User | None:
    """Like get_current_user, but any auth failure means an anonymous caller."""
    if credentials is None:
        return None
    return _resolve_user(store, credentials.credentials)


def get_current_user_id(user: User = Depends(get_current_user)) -> str:
    return user.id


def get_current_user_id_optional(user: User | None = Depends(get_current_user_optional)) -> str | None:
    return user.id if user else None


@router.post("/register", response_model=UserResponse)
def register(body: UserRegister, store: DocumentStore = Depends(get_store)):
    logger.info(f"POST /auth/register: email={body.email}")
    try:
        user = register_user(store, body.name, body.email, body.password)
    except HuddleError as e:
        raise to_http_exception(e) from e
    return UserResponse.model_validate(user)


@router.post("/login", response_model=Token)
def login(body: UserLogin, store: DocumentStore = Depends(get_store)):
    """Exchange email and password for a bearer token."""
    logger.info(f"POST /auth/login: email={body.email}")

    user = authenticate_user(store, body.email, body.password)
    if user is None:
        raise _unauthenticated("Incorrect email or password")

    return Token(access_token=create_access_token({"sub": user.id}))


@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)):
    return UserResponse.model_validate(current_user)
