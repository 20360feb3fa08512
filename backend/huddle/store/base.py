"""Document store interface.

Services never talk to SQLAlchemy or to in-memory dicts directly; they
receive a DocumentStore and use its narrow surface:

- get(table, id)                        point lookup
- query(table, index, **values)         equality scan on a declared index
- unique(table, index, **values)        query expecting at most one row
- insert(table, fields)                 assigns id, created_at and seq
- patch(table, id, fields)              partial update
- delete(table, id)

Indexes are declared up front in SCHEMA, mirroring the indexes of the SQL
tables, so a query that would need a full table scan is rejected.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from huddle.models.documents import (
    Channel,
    Conversation,
    Document,
    Member,
    Message,
    Reaction,
    User,
    Workspace,
)


class StoreError(RuntimeError):
    """Raised when the store is used against its declared schema."""


@dataclass(frozen=True)
class TableSchema:
    document: type[Document]
    id_prefix: str
    indexes: dict[str, tuple[str, ...]] = field(default_factory=dict)


SCHEMA: dict[str, TableSchema] = {
    "users": TableSchema(User, "user", {"by_email": ("email",)}),
    "workspaces": TableSchema(Workspace, "ws"),
    "members": TableSchema(
        Member,
        "member",
        {
            "by_user_id": ("user_id",),
            "by_workspace_id": ("workspace_id",),
            "by_workspace_id_user_id": ("workspace_id", "user_id"),
        },
    ),
    "channels": TableSchema(Channel, "channel", {"by_workspace_id": ("workspace_id",)}),
    "conversations": TableSchema(Conversation, "conv", {"by_workspace_id": ("workspace_id",)}),
    "messages": TableSchema(
        Message,
        "msg",
        {
            "by_workspace_id": ("workspace_id",),
            "by_member_id": ("member_id",),
            "by_channel_id": ("channel_id",),
            "by_conversation_id": ("conversation_id",),
            "by_parent_message_id": ("parent_message_id",),
            "by_channel_id_parent_message_id_conversation_id": (
                "channel_id",
                "parent_message_id",
                "conversation_id",
            ),
        },
    ),
    "reactions": TableSchema(
        Reaction,
        "react",
        {
            "by_workspace_id": ("workspace_id",),
            "by_message_id": ("message_id",),
            "by_member_id": ("member_id",),
        },
    ),
}

# Tables owned by a workspace, deleted with it
WORKSPACE_SCOPED_TABLES = ("messages", "reactions", "conversations", "channels", "members")


def get_table_schema(table: str) -> TableSchema:
    schema = SCHEMA.get(table)
    if schema is None:
        raise StoreError(f"Unknown table: {table}")
    return schema


def resolve_index(table: str, index: str, values: dict[str, Any]) -> tuple[str, ...]:
    """Check that values address a prefix of the named index.

    Returns:
        The index fields covered by the lookup, in index order
    """
    fields = get_table_schema(table).indexes.get(index)
    if fields is None:
        raise StoreError(f"Unknown index {index} on table {table}")

    covered = fields[: len(values)]
    if not values or set(values) != set(covered):
        raise StoreError(f"Index {index} on {table} is ({', '.join(fields)}), got ({', '.join(values)})")
    return covered


class DocumentStore(ABC):
    """Storage collaborator shared by every service."""

    @abstractmethod
    def get(self, table: str, id: str) -> Document | None:
        """Get a document by id, or None."""

    @abstractmethod
    def insert(self, table: str, fields: dict[str, Any]) -> str:
        """Insert a document and return its generated id."""

    @abstractmethod
    def patch(self, table: str, id: str, fields: dict[str, Any]) -> None:
        """Update some fields of an existing document.

        Raises:
            StoreError: If the document does not exist
        """

    @abstractmethod
    def delete(self, table: str, id: str) -> bool:
        """Delete a document. Returns False if it did not exist."""

    @abstractmethod
    def _scan(
        self,
        table: str,
        filters: dict[str, Any],
        limit: int | None,
        before_seq: int | None = None,
        descending: bool = False,
    ) -> list[Document]:
        """Equality scan in seq order. Filters are already validated."""

    def query(
        self,
        table: str,
        index: str,
        limit: int | None = None,
        before_seq: int | None = None,
        descending: bool = False,
        **values: Any,
    ) -> list[Document]:
        """Documents matching values on a declared index.

        Ordered by insertion (seq), oldest first unless descending. With
        before_seq, only documents inserted before that seq are returned.
        """
        resolve_index(table, index, values)
        return self._scan(table, values, limit, before_seq=before_seq, descending=descending)

    def unique(self, table: str, index: str, **values: Any) -> Document | None:
        """Single document matching values, or None.

        Raises:
            StoreError: If more than one document matches
        """
        rows = self.query(table, index, limit=2, **values)
        if len(rows) > 1:
            raise StoreError(f"Expected at most one {table} row for {index}={values}")
        return rows[0] if rows else None
