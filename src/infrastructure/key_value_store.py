"""Key-value store adapters used to persist the expense collection."""

from sqlalchemy import text

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.key_value_store import KeyValueStorePort


CREATE_KV_STORE_SQL = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
)
"""

SELECT_VALUE_SQL = text("SELECT value FROM kv_store WHERE key = :key")

UPSERT_VALUE_SQL = text(
    """
    INSERT INTO kv_store (key, value)
    VALUES (:key, :value)
    ON CONFLICT (key) DO UPDATE SET value = excluded.value
    """
)


class InMemoryKeyValueStore(KeyValueStorePort):
    """Dict-backed store for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class SqlAlchemyKeyValueStore(KeyValueStorePort):
    """Store backed by a single ``kv_store`` table."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the store.

        Args:
            db_port: Port providing access to the expenses engine.
        """
        self._db_port = db_port
        self._table_ready = False

    def get(self, key: str) -> str | None:
        """Return the value stored under ``key``, or None when absent."""
        engine = self._db_port.get_expenses_engine()
        self._ensure_table(engine)
        with engine.connect() as conn:
            row = conn.execute(SELECT_VALUE_SQL, {"key": key}).first()
        return row.value if row is not None else None

    def set(self, key: str, value: str) -> None:
        """Upsert ``value`` under ``key`` in one transaction."""
        engine = self._db_port.get_expenses_engine()
        self._ensure_table(engine)
        with engine.begin() as conn:
            conn.execute(UPSERT_VALUE_SQL, {"key": key, "value": value})

    def _ensure_table(self, engine) -> None:
        """Create the kv_store table if it does not exist."""
        if self._table_ready:
            return
        with engine.begin() as conn:
            conn.exec_driver_sql(CREATE_KV_STORE_SQL)
        self._table_ready = True


__all__ = ["InMemoryKeyValueStore", "SqlAlchemyKeyValueStore"]
