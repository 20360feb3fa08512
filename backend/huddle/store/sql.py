"""SQL document store backed by SQLAlchemy.

Each write commits on its own, so a multi-step operation such as a
workspace removal is not atomic. The workspace tombstone and the
per-workspace lock cover that gap (see WorkspaceService).
"""

from enum import Enum
from typing import Any

from sqlalchemy.orm import Session

from huddle.db.models import (
    ChannelModel,
    ConversationModel,
    MemberModel,
    MessageModel,
    ReactionModel,
    UserModel,
    WorkspaceModel,
)
from huddle.models.documents import Document
from huddle.repositories.base import BaseRepository
from huddle.store.base import DocumentStore, StoreError, get_table_schema
from huddle.utils import generate_id, get_timestamp_ms, next_sequence

REPOSITORIES: dict[str, BaseRepository] = {
    "users": BaseRepository(UserModel),
    "workspaces": BaseRepository(WorkspaceModel),
    "members": BaseRepository(MemberModel),
    "channels": BaseRepository(ChannelModel),
    "conversations": BaseRepository(ConversationModel),
    "messages": BaseRepository(MessageModel),
    "reactions": BaseRepository(ReactionModel),
}


def _column_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


class SqlStore(DocumentStore):
    """DocumentStore over a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def _repository(self, table: str) -> BaseRepository:
        get_table_schema(table)
        return REPOSITORIES[table]

    def _to_document(self, table: str, row) -> Document:
        return get_table_schema(table).document.model_validate(row)

    def get(self, table: str, id: str) -> Document | None:
        row = self._repository(table).get_by_id(self.db, id)
        return self._to_document(table, row) if row is not None else None

    def insert(self, table: str, fields: dict[str, Any]) -> str:
        schema = get_table_schema(table)
        values = {name: _column_value(value) for name, value in fields.items()}
        values["id"] = generate_id(schema.id_prefix)
        values["created_at"] = get_timestamp_ms()
        values["seq"] = next_sequence()
        row = self._repository(table).create(self.db, values)
        return row.id

    def patch(self, table: str, id: str, fields: dict[str, Any]) -> None:
        repository = self._repository(table)
        row = repository.get_by_id(self.db, id)
        if row is None:
            raise StoreError(f"{table} document not found: {id}")
        repository.update(self.db, row, {name: _column_value(value) for name, value in fields.items()})

    def delete(self, table: str, id: str) -> bool:
        return self._repository(table).delete(self.db, id)

    def _scan(
        self,
        table: str,
        filters: dict[str, Any],
        limit: int | None,
        before_seq: int | None = None,
        descending: bool = False,
    ) -> list[Document]:
        rows = self._repository(table).list_by(
            self.db,
            {name: _column_value(value) for name, value in filters.items()},
            limit=limit,
            before_seq=before_seq,
            descending=descending,
        )
        return [self._to_document(table, row) for row in rows]
