#!/usr/bin/env python
"""
pytest configuration file

This file contains shared fixtures for all tests.
"""

import os

# Must be set before huddle.settings is imported anywhere
os.environ["HUDDLE_ENVIRONMENT"] = "test"
os.environ["HUDDLE_REDIS_TYPE"] = "in_memory"
os.environ["HUDDLE_DATABASE_TYPE"] = "sqlite"

import fakeredis
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from huddle.db.models import Base
from huddle.services.locks import WorkspaceLocks
from huddle.services.workspace_service import WorkspaceService
from huddle.store import MemoryStore, SqlStore


@pytest.fixture
def fake_redis_client():
    """
    Create a fakeredis client for unit tests.

    This provides an in-memory Redis implementation that allows
    unit tests to run without a real Redis server.
    """
    server = fakeredis.FakeServer()
    client = fakeredis.FakeRedis(server=server, decode_responses=True)
    yield client
    client.close()


@pytest.fixture
def workspace_locks(fake_redis_client) -> WorkspaceLocks:
    """Workspace locks over a private fakeredis server."""
    return WorkspaceLocks(fake_redis_client, timeout=5, blocking_timeout=1)


@pytest.fixture
def store() -> MemoryStore:
    """Fresh in-memory document store."""
    return MemoryStore()


@pytest.fixture
def db_session():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def sql_store(db_session) -> SqlStore:
    return SqlStore(db_session)


@pytest.fixture
def make_user(store):
    """Factory inserting a user row into the memory store, returning its id."""

    def _make_user(name: str) -> str:
        return store.insert("users", {"name": name, "email": f"{name.lower()}@example.com"})

    return _make_user


@pytest.fixture
def alice(make_user) -> str:
    return make_user("Alice")


@pytest.fixture
def bob(make_user) -> str:
    return make_user("Bob")


@pytest.fixture
def carol(make_user) -> str:
    return make_user("Carol")


@pytest.fixture
def acme(store, alice, bob) -> str:
    """Workspace "Acme" with Alice as admin and Bob as member, join code k3f9p1."""
    service = WorkspaceService(store, code_generator=lambda: "k3f9p1")
    workspace_id = service.create(alice, "Acme")
    service.join(bob, workspace_id, "k3f9p1")
    return workspace_id


@pytest.fixture
def member_of(store):
    """Lookup of a user's Member record in a workspace."""

    def _member_of(user_id: str, workspace_id: str):
        return store.unique("members", "by_workspace_id_user_id", workspace_id=workspace_id, user_id=user_id)

    return _member_of
