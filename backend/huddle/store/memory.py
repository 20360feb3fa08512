"""In-memory document store.

Holds every table as a dict of pydantic documents. Used by the unit tests
and, with use_memory_store enabled, for single-process development.

Note: Data is lost on restart and is not shared between instances.
"""

import threading
from typing import Any

from huddle.models.documents import Document
from huddle.store.base import DocumentStore, StoreError, get_table_schema
from huddle.utils import generate_id, get_timestamp_ms, next_sequence


class MemoryStore(DocumentStore):
    """Thread-safe in-memory data store.

    Uses a reentrant lock (RLock) to ensure thread safety for all operations.
    Documents are copied on the way in and out so callers never share state
    with the store.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._tables: dict[str, dict[str, Document]] = {}

    def _table(self, table: str) -> dict[str, Document]:
        get_table_schema(table)
        return self._tables.setdefault(table, {})

    def get(self, table: str, id: str) -> Document | None:
        with self._lock:
            doc = self._table(table).get(id)
            return doc.model_copy() if doc else None

    def insert(self, table: str, fields: dict[str, Any]) -> str:
        schema = get_table_schema(table)
        with self._lock:
            doc_id = generate_id(schema.id_prefix)
            doc = schema.document(id=doc_id, created_at=get_timestamp_ms(), seq=next_sequence(), **fields)
            self._table(table)[doc_id] = doc
            return doc_id

    def patch(self, table: str, id: str, fields: dict[str, Any]) -> None:
        schema = get_table_schema(table)
        with self._lock:
            rows = self._table(table)
            doc = rows.get(id)
            if doc is None:
                raise StoreError(f"{table} document not found: {id}")
            # Revalidate so a patch cannot store a field of the wrong type
            rows[id] = schema.document.model_validate({**doc.model_dump(), **fields})

    def delete(self, table: str, id: str) -> bool:
        with self._lock:
            return self._table(table).pop(id, None) is not None

    def _scan(
        self,
        table: str,
        filters: dict[str, Any],
        limit: int | None,
        before_seq: int | None = None,
        descending: bool = False,
    ) -> list[Document]:
        with self._lock:
            matches = [
                doc
                for doc in self._table(table).values()
                if all(getattr(doc, name) == value for name, value in filters.items())
                and (before_seq is None or doc.seq < before_seq)
            ]
            matches.sort(key=lambda d: d.seq, reverse=descending)
            if limit is not None:
                matches = matches[:limit]
            return [doc.model_copy() for doc in matches]

    def clear_all(self) -> None:
        """Clear all data (useful for testing)."""
        with self._lock:
            self._tables.clear()


# Singleton instance used when settings.use_memory_store is enabled
memory_store = MemoryStore()
