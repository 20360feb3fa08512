"""Fixtures for API tests against the in-memory SQLite database."""

import pytest
from fastapi.testclient import TestClient

from huddle.db.models import Base
from huddle.db.mysql import engine
from huddle.main import app


@pytest.fixture
def client():
    """TestClient over freshly created tables."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield TestClient(app)
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def register(client):
    """Register a user and return bearer auth headers for them."""

    def _register(name: str) -> dict[str, str]:
        email = f"{name.lower()}@example.com"
        response = client.post(
            "/api/v1/auth/register",
            json={"email": email, "name": name, "password": "secret123"},
        )
        assert response.status_code == 200, response.text

        response = client.post("/api/v1/auth/login", json={"email": email, "password": "secret123"})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _register
