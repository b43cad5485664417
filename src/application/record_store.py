"""In-memory expense collection mirrored to a key-value store.

Every successful mutation writes the full collection back through the
KeyValueStorePort before returning, so the in-memory state and the persisted
snapshot never diverge between operations. A mutation that fails, including
a failed write, leaves both untouched.
"""

from collections.abc import Callable, Iterable

from src.application.ports.key_value_store import EXPENSES_KEY, KeyValueStorePort
from src.domain.errors import DuplicateIdError, NotFoundError
from src.domain.models.expenses import ExpenseRecord
from src.domain.services.serialization import dump_records, load_records
from src.infrastructure.logging.logger import get_app_logger


class ExpenseRecordStore:
    """Ordered collection of expense records addressable by id."""

    def __init__(self, kv_store: KeyValueStorePort, logger=None) -> None:
        """Initialize an empty store.

        Args:
            kv_store: Persistence backend for the serialized collection.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._kv_store = kv_store
        self._logger = logger or get_app_logger()
        self._records: list[ExpenseRecord] = []

    @property
    def records(self) -> tuple[ExpenseRecord, ...]:
        """Return a snapshot of the records in store order."""
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def load(self) -> "ExpenseRecordStore":
        """Replace the in-memory collection with the persisted one."""
        blob = self._kv_store.get(EXPENSES_KEY)
        records = load_records(blob) if blob else []
        self._ensure_unique_ids(records)
        self._records = records
        self._logger.info(f"Loaded {len(records)} expenses from storage")
        return self

    def get(self, record_id: str) -> ExpenseRecord:
        """Return the record with ``record_id``.

        Raises:
            NotFoundError: If no record has that id.
        """
        for record in self._records:
            if record.id == record_id:
                return record
        raise NotFoundError(record_id)

    def query(
        self,
        predicate: Callable[[ExpenseRecord], bool] | None = None,
    ) -> list[ExpenseRecord]:
        """Return the records matching ``predicate``, in store order."""
        if predicate is None:
            return list(self._records)
        return [record for record in self._records if predicate(record)]

    def group_members(self, recurring_group: str) -> list[ExpenseRecord]:
        """Return the members of a group ordered by installment."""
        if not recurring_group:
            return []
        members = self.query(lambda r: r.recurring_group == recurring_group)
        return sorted(members, key=lambda r: r.current_installment)

    def insert_many(self, records: Iterable[ExpenseRecord]) -> None:
        """Append records, keeping the caller's order.

        Raises:
            DuplicateIdError: If an id already exists or repeats in the
                batch; nothing is inserted in that case.
        """
        new_records = list(records)
        self._ensure_unique_ids([*self._records, *new_records])
        self._commit([*self._records, *new_records])
        self._logger.info(f"Inserted {len(new_records)} expenses")

    def remove(self, record_id: str) -> None:
        """Remove exactly one record.

        Siblings of a removed installment are left as they are.

        Raises:
            NotFoundError: If no record has that id.
        """
        remaining = [r for r in self._records if r.id != record_id]
        if len(remaining) == len(self._records):
            raise NotFoundError(record_id)
        self._commit(remaining)
        self._logger.info(f"Removed expense {record_id}")

    def replace_all(self, records: Iterable[ExpenseRecord]) -> None:
        """Atomically replace the whole collection.

        Raises:
            DuplicateIdError: If the new collection repeats an id.
        """
        new_records = list(records)
        self._ensure_unique_ids(new_records)
        self._commit(new_records)
        self._logger.info(f"Replaced collection with {len(new_records)} expenses")

    def _commit(self, records: list[ExpenseRecord]) -> None:
        previous = self._records
        self._records = records
        try:
            self._kv_store.set(EXPENSES_KEY, dump_records(records))
        except Exception:
            self._records = previous
            self._logger.error("Failed to persist expenses; changes rolled back")
            raise

    @staticmethod
    def _ensure_unique_ids(records: Iterable[ExpenseRecord]) -> None:
        seen: set[str] = set()
        for record in records:
            if record.id in seen:
                raise DuplicateIdError(record.id)
            seen.add(record.id)


__all__ = ["ExpenseRecordStore"]
