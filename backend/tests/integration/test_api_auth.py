"""Integration tests for Auth API.

Test cases for:
- Register, login, me
- Invalid credentials and tokens
"""


class TestAuthAPI:
    def test_register_login_me(self, client, register):
        headers = register("Alice")

        response = client.get("/api/v1/auth/me", headers=headers)
        assert response.status_code == 200
        data = response.json()
        assert data["email"] == "alice@example.com"
        assert data["name"] == "Alice"
        assert "hashed_password" not in data

    def test_duplicate_email(self, client, register):
        register("Alice")

        response = client.post(
            "/api/v1/auth/register",
            json={"email": "ALICE@example.com", "name": "Again", "password": "secret123"},
        )
        assert response.status_code == 400
        assert "already registered" in response.json()["detail"]

    def test_short_password_rejected(self, client):
        response = client.post(
            "/api/v1/auth/register",
            json={"email": "bob@example.com", "name": "Bob", "password": "123"},
        )
        assert response.status_code == 422

    def test_wrong_password(self, client, register):
        register("Alice")

        response = client.post("/api/v1/auth/login", json={"email": "alice@example.com", "password": "nope123"})
        assert response.status_code == 401

    def test_invalid_token(self, client):
        response = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 401

    def test_missing_token(self, client):
        response = client.get("/api/v1/auth/me")
        assert response.status_code in (401, 403)


class TestHealthAPI:
    def test_health(self, client):
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root(self, client):
        assert client.get("/").json()["status"] == "ok"
