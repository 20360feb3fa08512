"""Tests for the authentication service."""

from datetime import timedelta

import pytest

from huddle.db.redis_cache import get_redis_cache
from huddle.db.redis_db import RedisKeyPrefix
from huddle.services.auth_service import (
    EmailAlreadyRegistered,
    authenticate_user,
    create_access_token,
    get_password_hash,
    get_user_from_cache,
    register_user,
    verify_password,
    verify_token,
)


class TestTokens:
    def test_round_trip(self):
        token = create_access_token({"sub": "user_1"})
        assert verify_token(token) == "user_1"

    def test_expired(self):
        token = create_access_token({"sub": "user_1"}, expires_delta=timedelta(seconds=-1))
        assert verify_token(token) is None

    def test_garbage(self):
        assert verify_token("not-a-token") is None

    def test_missing_subject(self):
        assert verify_token(create_access_token({"name": "x"})) is None


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = get_password_hash("secret123")

        assert hashed != "secret123"
        assert verify_password("secret123", hashed) is True
        assert verify_password("wrong", hashed) is False

    def test_malformed_hash(self):
        assert verify_password("secret123", "not-a-bcrypt-hash") is False


class TestUsers:
    def test_register_and_authenticate(self, store):
        user = register_user(store, "Alice", "Alice@Example.com", "secret123")

        assert user.email == "alice@example.com"
        assert authenticate_user(store, "ALICE@example.com", "secret123").id == user.id
        assert authenticate_user(store, "alice@example.com", "wrong") is None
        assert authenticate_user(store, "nobody@example.com", "secret123") is None

    def test_duplicate_email(self, store):
        register_user(store, "Alice", "alice@example.com", "secret123")

        with pytest.raises(EmailAlreadyRegistered):
            register_user(store, "Other", "ALICE@example.com", "secret456")

    def test_user_cache_excludes_password(self, store):
        user = register_user(store, "Alice", "alice@example.com", "secret123")

        loaded = get_user_from_cache(store, user.id)
        assert loaded.hashed_password is not None

        cached = get_redis_cache().get(RedisKeyPrefix.user_key(user.id))
        assert cached["email"] == "alice@example.com"
        assert "hashed_password" not in cached

        # Served from the cache even when the store no longer has the row
        store.delete("users", user.id)
        assert get_user_from_cache(store, user.id).name == "Alice"

    def test_unknown_user(self, store):
        assert get_user_from_cache(store, "user_missing") is None
