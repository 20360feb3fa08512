"""Emoji reactions on messages."""

from huddle.services.access import require_member
from huddle.services.errors import NotFound
from huddle.store import DocumentStore


class ReactionService:
    def __init__(self, store: DocumentStore):
        self.store = store

    def toggle(self, user_id: str | None, message_id: str, value: str) -> str:
        """Add the caller's reaction, or take it back if already present.

        Returns:
            Id of the reaction added or removed
        """
        message = self.store.get("messages", message_id)
        if message is None:
            raise NotFound("Message not found")
        member = require_member(self.store, user_id, message.workspace_id)

        for reaction in self.store.query("reactions", "by_message_id", message_id=message_id):
            if reaction.member_id == member.id and reaction.value == value:
                self.store.delete("reactions", reaction.id)
                return reaction.id

        return self.store.insert(
            "reactions",
            {
                "workspace_id": message.workspace_id,
                "message_id": message_id,
                "member_id": member.id,
                "value": value,
            },
        )
