"""Engine, sessions and shared column helpers for the content store.

SQLite leaves foreign keys unenforced unless each connection opts in, so
every SQLite engine built here switches them on. The ``ON DELETE CASCADE``
keys on posts, comments, scores and tag links then hold on the default
file database as they do on PostgreSQL.
"""

from __future__ import annotations

from collections.abc import Generator
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from devspark.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


def utcnow() -> datetime:
    """Timezone-aware creation and update stamp for content rows."""
    return datetime.now(UTC)


# Models import Base and utcnow from here, so they load after both exist.
import devspark.models  # noqa: E402,F401


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")
    finally:
        cursor.close()


def build_engine(url: str, **kwargs: Any) -> Engine:
    """Create an engine for ``url``, enforcing foreign keys on SQLite."""
    kwargs.setdefault("echo", settings.sql_debug)
    built = create_engine(url, pool_pre_ping=True, **kwargs)
    if built.dialect.name == "sqlite":
        event.listen(built, "connect", _enable_sqlite_foreign_keys)
    return built


engine = build_engine(settings.effective_database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a request-scoped session; it is closed once the response is sent."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    Base.metadata.drop_all(bind=engine)
