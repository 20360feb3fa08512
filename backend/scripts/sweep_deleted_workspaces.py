#!/usr/bin/env python3
"""Finish removing workspaces whose removal was interrupted.

A removed workspace is tombstoned first and its rows are deleted in
batches afterwards. If the process died mid-sweep the tombstone stays
behind; this script picks those workspaces up and completes the sweep.

Usage:
    cd backend
    python scripts/sweep_deleted_workspaces.py
"""

from sqlalchemy import select

from huddle.db.models import WorkspaceModel
from huddle.db.mysql import get_db_session
from huddle.services.errors import WorkspaceBusy
from huddle.services.locks import get_workspace_locks
from huddle.services.workspace_service import WorkspaceService
from huddle.store import SqlStore
from huddle.utils import get_logger

logger = get_logger(__name__)


def sweep_deleted_workspaces() -> int:
    """Resume every pending removal. Returns how many workspaces were finished."""
    finished = 0
    with get_db_session() as db:
        pending = db.execute(
            select(WorkspaceModel.id).where(WorkspaceModel.deleted_at.is_not(None))
        ).scalars().all()
        logger.info(f"Found {len(pending)} workspace(s) pending removal")

        service = WorkspaceService(SqlStore(db), locks=get_workspace_locks())
        for workspace_id in pending:
            try:
                if service.resume_removal(workspace_id):
                    finished += 1
            except WorkspaceBusy:
                logger.warning(f"Workspace {workspace_id} is locked, skipping")
    logger.info(f"Finished removal of {finished} workspace(s)")
    return finished


if __name__ == "__main__":
    sweep_deleted_workspaces()
