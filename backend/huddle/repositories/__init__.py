"""Repository layer for database access.

One BaseRepository per table, used by the SQL document store.

Usage:
    from huddle.repositories import BaseRepository

    repo = BaseRepository(WorkspaceModel)
    workspace = repo.get_by_id(db, workspace_id)
"""

from huddle.repositories.base import BaseRepository

__all__ = ["BaseRepository"]
