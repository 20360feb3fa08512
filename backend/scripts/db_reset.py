#!/usr/bin/env python3
"""Database reset script.

Drops every table and recreates the schema. Development only.

Usage:
    cd backend
    python scripts/db_reset.py
"""

import sys

from huddle.db.models import Base
from huddle.db.mysql import engine
from huddle.settings import settings
from huddle.utils import get_logger

logger = get_logger(__name__)


def reset_database():
    if settings.environment not in ["local-dev", "test"]:
        logger.error("Database reset is only allowed in local-dev or test environment")
        logger.error(f"Current environment: {settings.environment}")
        sys.exit(1)

    db_type = settings.database_type
    logger.info(f"Database type: {db_type}")

    if db_type == "sqlite":
        sqlite_path = settings.get_sqlite_path()
        if str(sqlite_path) != ":memory:" and sqlite_path.exists():
            sqlite_path.unlink()
            logger.info(f"Deleted SQLite database: {sqlite_path}")
    else:
        logger.info("Dropping all MySQL tables...")
        Base.metadata.drop_all(bind=engine)

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")


if __name__ == "__main__":
    reset_database()
