"""Document storage used by the services.

Usage:
    from huddle.store import MemoryStore

    store = MemoryStore()
    workspace_id = store.insert("workspaces", {"name": "Acme", "user_id": "user_1", "join_code": "k3f9p1"})
    members = store.query("members", "by_workspace_id", workspace_id=workspace_id)
"""

from huddle.store.base import SCHEMA, WORKSPACE_SCOPED_TABLES, DocumentStore, StoreError
from huddle.store.memory import MemoryStore, memory_store
from huddle.store.sql import SqlStore

__all__ = [
    "SCHEMA",
    "WORKSPACE_SCOPED_TABLES",
    "DocumentStore",
    "StoreError",
    "MemoryStore",
    "memory_store",
    "SqlStore",
]
