"""Direct 1:1 conversations between two members of a workspace."""

from huddle.services.access import require_member
from huddle.services.errors import NotFound
from huddle.store import DocumentStore


class ConversationService:
    def __init__(self, store: DocumentStore):
        self.store = store

    def create_or_get(self, user_id: str | None, workspace_id: str, member_id: str) -> str:
        """Conversation between the caller and another member, created on first use."""
        current = require_member(self.store, user_id, workspace_id)

        other = self.store.get("members", member_id)
        if other is None or other.workspace_id != workspace_id:
            raise NotFound("Member not found")

        pair = {current.id, other.id}
        for conversation in self.store.query("conversations", "by_workspace_id", workspace_id=workspace_id):
            if {conversation.member_one_id, conversation.member_two_id} == pair:
                return conversation.id

        return self.store.insert(
            "conversations",
            {"workspace_id": workspace_id, "member_one_id": current.id, "member_two_id": other.id},
        )
