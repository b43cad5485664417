"""Database ports for the expense tracker.

This module defines the application-layer protocol for accessing the
database engine. Infrastructure implementations provide concrete adapters
that satisfy it.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the database engine holding the expense data.

    Adapters can depend on this protocol instead of concrete database
    drivers or configuration details.
    """

    def get_expenses_engine(self) -> Engine:
        """Get the engine for the expenses database.

        Returns:
            Engine: SQLAlchemy engine connected to the expenses store.
        """


__all__ = ["DatabaseEnginePort"]
