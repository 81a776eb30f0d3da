"""Engine and session factory for the configured database."""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from contractpro.core.config import get_config

logger = logging.getLogger(__name__)

DATABASE_URL: str
engine: Engine
SessionLocal: sessionmaker


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _build_engine(database_url: str) -> Engine:
    config = get_config()
    echo = config.DEBUG and config.LOG_LEVEL == "DEBUG"
    if database_url.startswith("sqlite"):
        sqlite_engine = create_engine(database_url, echo=echo, connect_args={"check_same_thread": False})
        event.listen(sqlite_engine, "connect", _enable_sqlite_foreign_keys)
        return sqlite_engine
    return create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        pool_recycle=3600,
        pool_size=10,
        max_overflow=20,
    )


def reset_engine(database_url: str | None = None) -> None:
    """Rebind the module engine and session factory (defaults to the current URL)."""
    global DATABASE_URL, engine, SessionLocal
    DATABASE_URL = database_url or get_config().DATABASE_URL
    engine = _build_engine(DATABASE_URL)
    # Services read attributes after commit, so loaded state is kept.
    SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


reset_engine()


def get_active_database_url() -> str:
    return DATABASE_URL


@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create any missing tables for the declarative models."""
    from contractpro.models import Base

    Base.metadata.create_all(bind=engine)
    logger.info(
        "database.schema.ready",
        extra={"event": "database.schema.ready", "tables": sorted(Base.metadata.tables)},
    )


def verify_database_connection() -> bool:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.error(
            "database.connection_failed",
            extra={"event": "database.connection_failed", "error": str(exc)},
        )
        return False
    return True
