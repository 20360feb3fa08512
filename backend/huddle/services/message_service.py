"""Messages in channels, conversations and threads.

A message lives in exactly one scope, identified by the triple
(channel_id, parent_message_id, conversation_id):

- channel message:      (channel, None, None)
- conversation message: (None, None, conversation)
- thread reply:         (channel or None, parent, conversation or None)

Listing is paginated newest first. The cursor is an opaque string the
client hands back to get the next page. It holds the seq of the oldest
message already returned.
"""

from huddle.models.documents import Message
from huddle.models.views import MessageDetail, MessagePage, ReactionSummary
from huddle.services.access import get_member, require_member
from huddle.services.errors import InvalidOperation, NotFound, Unauthorized
from huddle.services.member_service import get_user_profile
from huddle.settings import settings
from huddle.store import DocumentStore
from huddle.utils import get_logger, get_timestamp_ms

logger = get_logger(__name__)


def summarize_reactions(reactions) -> list[ReactionSummary]:
    """Group reactions by value, keeping the order values first appeared in."""
    summaries: dict[str, ReactionSummary] = {}
    for reaction in reactions:
        summary = summaries.get(reaction.value)
        if summary is None:
            summary = summaries[reaction.value] = ReactionSummary(value=reaction.value, count=0, member_ids=[])
        summary.count += 1
        summary.member_ids.append(reaction.member_id)
    return list(summaries.values())


class MessageService:
    def __init__(self, store: DocumentStore):
        self.store = store

    def _get_in_workspace(self, table: str, id: str, workspace_id: str, label: str):
        doc = self.store.get(table, id)
        if doc is None or doc.workspace_id != workspace_id:
            raise NotFound(f"{label} not found")
        return doc

    def _populate(self, message: Message) -> MessageDetail | None:
        member = self.store.get("members", message.member_id)
        if member is None:
            return None

        replies = self.store.query("messages", "by_parent_message_id", parent_message_id=message.id)
        reactions = self.store.query("reactions", "by_message_id", message_id=message.id)

        return MessageDetail(
            **message.model_dump(),
            member=member,
            user=get_user_profile(self.store, member.user_id),
            reactions=summarize_reactions(reactions),
            thread_count=len(replies),
            thread_timestamp=replies[-1].created_at if replies else None,
        )

    def create(
        self,
        user_id: str | None,
        workspace_id: str,
        body: str,
        channel_id: str | None = None,
        conversation_id: str | None = None,
        parent_message_id: str | None = None,
    ) -> str:
        """Post a message as the caller's member.

        A thread reply posted without a channel or conversation belongs to
        the conversation of its parent (replies in 1:1 threads).
        """
        member = require_member(self.store, user_id, workspace_id)

        if channel_id:
            self._get_in_workspace("channels", channel_id, workspace_id, "Channel")
        if conversation_id:
            self._get_in_workspace("conversations", conversation_id, workspace_id, "Conversation")
        if parent_message_id:
            parent = self._get_in_workspace("messages", parent_message_id, workspace_id, "Parent message")
            if not channel_id and not conversation_id:
                conversation_id = parent.conversation_id

        if not (channel_id or conversation_id or parent_message_id):
            raise InvalidOperation("A message needs a channel, a conversation or a parent message")

        message_id = self.store.insert(
            "messages",
            {
                "body": body,
                "member_id": member.id,
                "workspace_id": workspace_id,
                "channel_id": channel_id,
                "conversation_id": conversation_id,
                "parent_message_id": parent_message_id,
            },
        )
        logger.debug(f"Message created: id={message_id}, member={member.id}")
        return message_id

    def get(
        self,
        user_id: str | None,
        channel_id: str | None = None,
        conversation_id: str | None = None,
        parent_message_id: str | None = None,
        cursor: str | None = None,
        num_items: int = settings.messages_page_size,
    ) -> MessagePage:
        """One page of messages in a scope, newest first.

        Raises:
            InvalidOperation: No scope given, or a malformed cursor
            NotFound: The scope does not exist
            Unauthorized: The caller is not a member of the scope's workspace
        """
        if parent_message_id:
            parent = self.store.get("messages", parent_message_id)
            if parent is None:
                raise NotFound("Parent message not found")
            workspace_id = parent.workspace_id
            if not channel_id and not conversation_id:
                conversation_id = parent.conversation_id
        elif conversation_id:
            conversation = self.store.get("conversations", conversation_id)
            if conversation is None:
                raise NotFound("Conversation not found")
            workspace_id = conversation.workspace_id
        elif channel_id:
            channel = self.store.get("channels", channel_id)
            if channel is None:
                raise NotFound("Channel not found")
            workspace_id = channel.workspace_id
        else:
            raise InvalidOperation("channel_id, conversation_id or parent_message_id is required")

        require_member(self.store, user_id, workspace_id)

        try:
            before_seq = int(cursor) if cursor else None
        except ValueError as e:
            raise InvalidOperation("Invalid cursor") from e
        if (before_seq is not None and before_seq < 1) or num_items < 1:
            raise InvalidOperation("Invalid cursor")

        # One extra row tells whether an older page exists
        window = self.store.query(
            "messages",
            "by_channel_id_parent_message_id_conversation_id",
            limit=num_items + 1,
            before_seq=before_seq,
            descending=True,
            channel_id=channel_id,
            parent_message_id=parent_message_id,
            conversation_id=conversation_id,
        )
        is_done = len(window) <= num_items
        window = window[:num_items]
        page = [detail for detail in (self._populate(message) for message in window) if detail is not None]

        return MessagePage(
            page=page,
            is_done=is_done,
            continue_cursor=None if is_done else str(window[-1].seq),
        )

    def get_by_id(self, user_id: str | None, message_id: str) -> MessageDetail | None:
        message = self.store.get("messages", message_id)
        if message is None:
            return None
        if get_member(self.store, user_id, message.workspace_id) is None:
            return None
        return self._populate(message)

    def _require_author(self, user_id: str | None, message_id: str) -> Message:
        message = self.store.get("messages", message_id)
        if message is None:
            raise NotFound("Message not found")
        member = require_member(self.store, user_id, message.workspace_id)
        if member.id != message.member_id:
            raise Unauthorized()
        return message

    def update(self, user_id: str | None, message_id: str, body: str) -> str:
        """Edit a message. Author only."""
        self._require_author(user_id, message_id)

        self.store.patch("messages", message_id, {"body": body, "updated_at": get_timestamp_ms()})
        return message_id

    def remove(self, user_id: str | None, message_id: str) -> str:
        """Delete a message and its reactions. Author only; thread replies stay."""
        self._require_author(user_id, message_id)

        for reaction in self.store.query("reactions", "by_message_id", message_id=message_id):
            self.store.delete("reactions", reaction.id)
        self.store.delete("messages", message_id)
        return message_id
