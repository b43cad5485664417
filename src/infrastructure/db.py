"""Database infrastructure for the expense tracker.

This module exposes helpers to create and reuse the SQLAlchemy engine that
backs the persistent key-value store. It belongs to the infrastructure layer
because it deals with an external system (SQLite or PostgreSQL).
"""

from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import QueuePool

from src.application.ports.database import DatabaseEnginePort


def _ensure_sqlite_directory(db_url: str) -> None:
    """Create the parent directory of a file-based SQLite database.

    Args:
        db_url: Database URL; non-SQLite and in-memory URLs are ignored.
    """
    url = make_url(db_url)
    if not url.drivername.startswith("sqlite"):
        return
    if not url.database or url.database == ":memory:":
        return
    Path(url.database).expanduser().parent.mkdir(parents=True, exist_ok=True)


def _create_engine(db_url: str) -> Engine:
    """Create a configured SQLAlchemy engine.

    Args:
        db_url: Fully qualified database URL (including driver and credentials)

    Returns:
        Engine: A SQLAlchemy engine instance with a small connection pool and
        health checks enabled.
    """
    _ensure_sqlite_directory(db_url)
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )


_expenses_engine: Optional[Engine] = None
_expenses_engine_url: Optional[str] = None


def get_expenses_engine(db_url: str) -> Engine:
    """Get a singleton SQLAlchemy engine for the expenses database.

    Args:
        db_url: Database URL; a different URL replaces the cached engine.

    Returns:
        Engine: Lazily initialized engine connected to ``db_url``.
    """
    global _expenses_engine, _expenses_engine_url
    if _expenses_engine is None or _expenses_engine_url != db_url:
        _expenses_engine = _create_engine(db_url)
        _expenses_engine_url = db_url
    return _expenses_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by a SQLAlchemy engine.

    The adapter hides pooling details behind the port so key-value store
    adapters depend only on the protocol.
    """

    def __init__(self, db_url: str) -> None:
        """Initialize the adapter.

        Args:
            db_url: Database URL of the expenses store.
        """
        self._db_url = db_url

    def get_expenses_engine(self) -> Engine:
        """Get the engine for the expenses database.

        Returns:
            Engine: SQLAlchemy engine connected to the expenses store.
        """
        return get_expenses_engine(self._db_url)


__all__ = [
    "get_expenses_engine",
    "SqlAlchemyDatabaseEngineAdapter",
]
