"""SQLAlchemy engine and sessions.

SQLite for local development and tests (an in-memory database when
environment=test), MySQL via PyMySQL everywhere else.

Usage:
    from huddle.db.mysql import get_db

    def list_workspaces(db: Session = Depends(get_db)):
        store = SqlStore(db)
"""

from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from huddle.settings import settings
from huddle.utils import get_logger

logger = get_logger(__name__)

SQLITE_MEMORY_URL = "sqlite:///:memory:"


def _database_url() -> str:
    url = settings.get_database_url_auto()
    # Bare mysql:// would pick the MySQLdb driver, which is not installed
    if url.startswith("mysql://"):
        url = "mysql+pymysql://" + url.removeprefix("mysql://")
    return url


def _engine_options(url: str) -> dict[str, Any]:
    options: dict[str, Any] = {"echo": settings.debug and settings.is_local_dev()}
    if url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
        if url == SQLITE_MEMORY_URL:
            # A single shared connection, or each session sees its own empty database
            options["poolclass"] = StaticPool
    else:
        options.update(
            pool_size=settings.mysql_pool_size,
            max_overflow=settings.mysql_max_overflow,
            pool_pre_ping=settings.mysql_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


_url = _database_url()
engine: Engine = create_engine(_url, **_engine_options(_url))
logger.info(f"Database engine: {engine.url.render_as_string(hide_password=True)}")

if engine.dialect.name == "mysql":

    @event.listens_for(engine, "connect")
    def _set_wait_timeout(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("SET SESSION wait_timeout = 28800")
        cursor.close()


SessionLocal = sessionmaker(bind=engine, autoflush=False)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency: one session per request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    """Session for scripts. Rolls back and re-raises on error."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def check_connection() -> bool:
    """Run SELECT 1; False (and an error log) if the database is unreachable."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Database connection check failed: {e}")
        return False
    return True


def init_db() -> None:
    """Create missing tables."""
    from huddle.db.models import Base

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables initialized")


def close_db() -> None:
    engine.dispose()
    logger.info("Database connections closed")
