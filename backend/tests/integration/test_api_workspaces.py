"""Integration tests for Workspaces API.

Test cases for:
- Create, join, rotate code, rename, remove
- Anonymous and non-member reads
- Channels, members, conversations and messages inside a workspace
- Storage failures on reads map to 500
"""

import pytest
from fastapi import Depends
from sqlalchemy.orm import Session

from huddle.api.v1.deps import get_store
from huddle.db.mysql import get_db
from huddle.main import app
from huddle.store import SqlStore, StoreError


@pytest.fixture
def alice(register):
    return register("Alice")


@pytest.fixture
def bob(register):
    return register("Bob")


@pytest.fixture
def carol(register):
    return register("Carol")


@pytest.fixture
def workspace(client, alice):
    """Workspace created by Alice: (id, join code)."""
    response = client.post("/api/v1/workspaces", json={"name": "Acme"}, headers=alice)
    assert response.status_code == 200, response.text
    workspace_id = response.json()["id"]
    join_code = client.get(f"/api/v1/workspaces/{workspace_id}", headers=alice).json()["joinCode"]
    return workspace_id, join_code


class TestWorkspaceLifecycle:
    def test_create_seeds_admin_and_channel(self, client, alice, workspace):
        workspace_id, join_code = workspace

        assert len(join_code) == 6

        members = client.get(f"/api/v1/workspaces/{workspace_id}/members", headers=alice).json()
        assert [m["role"] for m in members] == ["admin"]
        assert members[0]["user"]["name"] == "Alice"

        channels = client.get(f"/api/v1/workspaces/{workspace_id}/channels", headers=alice).json()
        assert [c["name"] for c in channels] == ["general"]

    def test_create_requires_auth(self, client):
        response = client.post("/api/v1/workspaces", json={"name": "Acme"})
        assert response.status_code in (401, 403)

    def test_join_flow(self, client, alice, bob, carol, workspace):
        workspace_id, join_code = workspace

        info = client.get(f"/api/v1/workspaces/{workspace_id}/info", headers=bob).json()
        assert info == {"name": "Acme", "isMember": False}
        assert client.get(f"/api/v1/workspaces/{workspace_id}", headers=bob).json() is None

        response = client.post(
            f"/api/v1/workspaces/{workspace_id}/join", json={"joinCode": join_code.upper()}, headers=bob
        )
        assert response.status_code == 200
        assert response.json()["id"] == workspace_id

        current = client.get(f"/api/v1/workspaces/{workspace_id}/members/current", headers=bob).json()
        assert current["role"] == "member"

        response = client.post(f"/api/v1/workspaces/{workspace_id}/join", json={"joinCode": join_code}, headers=bob)
        assert response.status_code == 409

        response = client.patch(f"/api/v1/workspaces/{workspace_id}", json={"name": "X"}, headers=bob)
        assert response.status_code == 403

        response = client.post(f"/api/v1/workspaces/{workspace_id}/join-code", headers=alice)
        assert response.status_code == 200
        new_code = client.get(f"/api/v1/workspaces/{workspace_id}", headers=alice).json()["joinCode"]
        assert new_code != join_code

        response = client.post(f"/api/v1/workspaces/{workspace_id}/join", json={"joinCode": join_code}, headers=carol)
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid join code"

    def test_join_missing_workspace(self, client, bob):
        response = client.post("/api/v1/workspaces/ws_missing/join", json={"joinCode": "abc123"}, headers=bob)
        assert response.status_code == 404

    def test_anonymous_reads(self, client, workspace):
        workspace_id, _ = workspace

        response = client.get("/api/v1/workspaces")
        assert response.status_code == 200
        assert response.json() == []

        response = client.get(f"/api/v1/workspaces/{workspace_id}/info")
        assert response.status_code == 200
        assert response.json() is None

    def test_list_and_rename(self, client, alice, workspace):
        workspace_id, _ = workspace

        response = client.patch(f"/api/v1/workspaces/{workspace_id}", json={"name": "Acme Corp"}, headers=alice)
        assert response.status_code == 200

        listed = client.get("/api/v1/workspaces", headers=alice).json()
        assert [w["name"] for w in listed] == ["Acme Corp"]

    def test_remove(self, client, alice, bob, workspace):
        workspace_id, join_code = workspace
        client.post(f"/api/v1/workspaces/{workspace_id}/join", json={"joinCode": join_code}, headers=bob)
        channel_id = client.get(f"/api/v1/workspaces/{workspace_id}/channels", headers=alice).json()[0]["id"]
        client.post(
            "/api/v1/messages",
            json={"workspaceId": workspace_id, "channelId": channel_id, "body": "hello"},
            headers=bob,
        )

        response = client.delete(f"/api/v1/workspaces/{workspace_id}", headers=bob)
        assert response.status_code == 403

        response = client.delete(f"/api/v1/workspaces/{workspace_id}", headers=alice)
        assert response.status_code == 200

        assert client.get(f"/api/v1/workspaces/{workspace_id}", headers=alice).json() is None
        assert client.get("/api/v1/workspaces", headers=bob).json() == []
        assert client.get(f"/api/v1/channels/{channel_id}", headers=alice).json() is None


class TestWorkspaceContent:
    @pytest.fixture
    def joined(self, client, bob, workspace):
        workspace_id, join_code = workspace
        client.post(f"/api/v1/workspaces/{workspace_id}/join", json={"joinCode": join_code}, headers=bob)
        return workspace_id

    def test_channels(self, client, alice, bob, joined):
        response = client.post(f"/api/v1/workspaces/{joined}/channels", json={"name": "Team News"}, headers=bob)
        assert response.status_code == 403

        response = client.post(f"/api/v1/workspaces/{joined}/channels", json={"name": "Team News"}, headers=alice)
        channel_id = response.json()["id"]
        assert client.get(f"/api/v1/channels/{channel_id}", headers=bob).json()["name"] == "team-news"

        response = client.patch(f"/api/v1/channels/{channel_id}", json={"name": "news"}, headers=alice)
        assert response.status_code == 200

        response = client.delete(f"/api/v1/channels/{channel_id}", headers=alice)
        assert response.status_code == 200
        assert client.get(f"/api/v1/channels/{channel_id}", headers=alice).json() is None

    def test_members(self, client, alice, bob, joined):
        members = client.get(f"/api/v1/workspaces/{joined}/members", headers=alice).json()
        bob_member = next(m for m in members if m["user"]["name"] == "Bob")
        alice_member = next(m for m in members if m["user"]["name"] == "Alice")

        response = client.delete(f"/api/v1/members/{alice_member['id']}", headers=alice)
        assert response.status_code == 400

        response = client.patch(f"/api/v1/members/{bob_member['id']}", json={"role": "admin"}, headers=alice)
        assert response.status_code == 200
        assert client.get(f"/api/v1/members/{bob_member['id']}", headers=bob).json()["role"] == "admin"

        response = client.patch(f"/api/v1/members/{bob_member['id']}", json={"role": "owner"}, headers=alice)
        assert response.status_code == 422

    def test_conversation_and_messages(self, client, alice, bob, joined):
        members = client.get(f"/api/v1/workspaces/{joined}/members", headers=alice).json()
        bob_member = next(m for m in members if m["user"]["name"] == "Bob")

        response = client.post(
            f"/api/v1/workspaces/{joined}/conversations", json={"memberId": bob_member["id"]}, headers=alice
        )
        assert response.status_code == 200
        conversation_id = response.json()["id"]

        response = client.post(
            "/api/v1/messages",
            json={"workspaceId": joined, "conversationId": conversation_id, "body": "hi bob"},
            headers=alice,
        )
        assert response.status_code == 200
        message_id = response.json()["id"]

        response = client.post(f"/api/v1/messages/{message_id}/reactions", json={"value": "+1"}, headers=bob)
        assert response.status_code == 200

        page = client.get("/api/v1/messages", params={"conversationId": conversation_id}, headers=bob).json()
        assert page["isDone"] is True
        assert page["continueCursor"] is None
        [message] = page["page"]
        assert message["body"] == "hi bob"
        assert message["user"]["name"] == "Alice"
        assert message["reactions"] == [{"value": "+1", "count": 1, "memberIds": [bob_member["id"]]}]

        response = client.patch(f"/api/v1/messages/{message_id}", json={"body": "edited"}, headers=bob)
        assert response.status_code == 403

        response = client.patch(f"/api/v1/messages/{message_id}", json={"body": "hi Bob"}, headers=alice)
        assert response.status_code == 200
        assert client.get(f"/api/v1/messages/{message_id}", headers=bob).json()["body"] == "hi Bob"

        response = client.delete(f"/api/v1/messages/{message_id}", headers=alice)
        assert response.status_code == 200
        assert client.get(f"/api/v1/messages/{message_id}", headers=bob).json() is None

    def test_message_pagination(self, client, alice, joined):
        channel_id = client.get(f"/api/v1/workspaces/{joined}/channels", headers=alice).json()[0]["id"]

        def post(body):
            response = client.post(
                "/api/v1/messages",
                json={"workspaceId": joined, "channelId": channel_id, "body": body},
                headers=alice,
            )
            assert response.status_code == 200, response.text

        def page(cursor=None):
            params = {"channelId": channel_id, "numItems": 3}
            if cursor:
                params["cursor"] = cursor
            return client.get("/api/v1/messages", params=params, headers=alice).json()

        for i in range(5):
            post(f"m{i}")

        first = page()
        assert [m["body"] for m in first["page"]] == ["m4", "m3", "m2"]
        assert first["isDone"] is False

        post("late")

        second = page(first["continueCursor"])
        assert [m["body"] for m in second["page"]] == ["m1", "m0"]
        assert second["isDone"] is True
        assert second["continueCursor"] is None

        assert [m["body"] for m in page()["page"]] == ["late", "m4", "m3"]

    def test_messages_need_scope(self, client, alice, joined):
        response = client.get("/api/v1/messages", headers=alice)
        assert response.status_code == 400

        response = client.post("/api/v1/messages", json={"workspaceId": joined, "body": "x"}, headers=alice)
        assert response.status_code == 400


class BrokenIndexStore(SqlStore):
    """SqlStore whose indexed queries fail."""

    def _scan(self, table, filters, limit, before_seq=None, descending=False):
        raise StoreError("index unavailable")


class TestStorageErrors:
    def test_reads_return_storage_error(self, client, alice, workspace):
        workspace_id, _ = workspace
        channel_id = client.get(f"/api/v1/workspaces/{workspace_id}/channels", headers=alice).json()[0]["id"]
        message_id = client.post(
            "/api/v1/messages",
            json={"workspaceId": workspace_id, "channelId": channel_id, "body": "hi"},
            headers=alice,
        ).json()["id"]

        def broken_store(db: Session = Depends(get_db)):
            return BrokenIndexStore(db)

        app.dependency_overrides[get_store] = broken_store
        try:
            for path in (
                "/api/v1/workspaces",
                f"/api/v1/workspaces/{workspace_id}/info",
                f"/api/v1/workspaces/{workspace_id}/members",
                f"/api/v1/workspaces/{workspace_id}/channels",
                f"/api/v1/channels/{channel_id}",
                f"/api/v1/messages/{message_id}",
            ):
                response = client.get(path, headers=alice)
                assert response.status_code == 500, path
                assert response.json()["detail"] == "Storage error"
        finally:
            app.dependency_overrides.pop(get_store, None)
