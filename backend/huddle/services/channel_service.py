"""Channels inside a workspace."""

import re

from huddle.models.documents import Channel
from huddle.services.access import get_member, require_admin
from huddle.services.errors import InvalidOperation, NotFound
from huddle.store import DocumentStore
from huddle.utils import get_logger

logger = get_logger(__name__)

WHITESPACE_PATTERN = re.compile(r"\s+")


def normalize_channel_name(name: str) -> str:
    """Lowercase, whitespace runs replaced by '-': "Team  News" -> "team-news"."""
    normalized = WHITESPACE_PATTERN.sub("-", name.strip()).lower()
    if not normalized:
        raise InvalidOperation("Channel name cannot be empty")
    return normalized


class ChannelService:
    def __init__(self, store: DocumentStore):
        self.store = store

    def create(self, user_id: str | None, workspace_id: str, name: str) -> str:
        """Create a channel. Admin only."""
        require_admin(self.store, user_id, workspace_id)

        channel_id = self.store.insert(
            "channels",
            {"name": normalize_channel_name(name), "workspace_id": workspace_id},
        )
        logger.info(f"Channel created: id={channel_id}, workspace={workspace_id}")
        return channel_id

    def get(self, user_id: str | None, workspace_id: str) -> list[Channel]:
        if get_member(self.store, user_id, workspace_id) is None:
            return []
        return self.store.query("channels", "by_workspace_id", workspace_id=workspace_id)

    def get_by_id(self, user_id: str | None, channel_id: str) -> Channel | None:
        channel = self.store.get("channels", channel_id)
        if channel is None:
            return None
        if get_member(self.store, user_id, channel.workspace_id) is None:
            return None
        return channel

    def update(self, user_id: str | None, channel_id: str, name: str) -> str:
        """Rename a channel. Admin only."""
        channel = self.store.get("channels", channel_id)
        if channel is None:
            raise NotFound("Channel not found")
        require_admin(self.store, user_id, channel.workspace_id)

        self.store.patch("channels", channel_id, {"name": normalize_channel_name(name)})
        return channel_id

    def remove(self, user_id: str | None, channel_id: str) -> str:
        """Delete a channel with its messages and their reactions. Admin only."""
        channel = self.store.get("channels", channel_id)
        if channel is None:
            raise NotFound("Channel not found")
        require_admin(self.store, user_id, channel.workspace_id)

        messages = self.store.query("messages", "by_channel_id", channel_id=channel_id)
        for message in messages:
            for reaction in self.store.query("reactions", "by_message_id", message_id=message.id):
                self.store.delete("reactions", reaction.id)
            self.store.delete("messages", message.id)

        self.store.delete("channels", channel_id)
        logger.info(f"Channel {channel_id} removed with {len(messages)} messages")
        return channel_id
