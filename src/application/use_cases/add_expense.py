"""Use case to record a new expense, expanding recurring submissions."""

from collections.abc import Callable
from datetime import datetime

from src.application.record_store import ExpenseRecordStore
from src.domain.models.expenses import ExpenseDraft, ExpenseRecord
from src.domain.services.recurrence import IdFactory, expand_draft, new_token
from src.infrastructure.logging.logger import get_app_logger


class AddExpenseUseCase:
    """Expand a draft into installment records and store them."""

    def __init__(
        self,
        store: ExpenseRecordStore,
        logger=None,
        id_factory: IdFactory = new_token,
        group_factory: IdFactory = new_token,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize the use case.

        Args:
            store: Expense store receiving the new records.
            logger: Optional logger compatible with logging.Logger-like API.
            id_factory: Source of record ids.
            group_factory: Source of recurring group tokens.
            clock: Source of creation timestamps.
        """
        self._store = store
        self._logger = logger or get_app_logger()
        self._id_factory = id_factory
        self._group_factory = group_factory
        self._clock = clock

    def execute(self, draft: ExpenseDraft) -> list[ExpenseRecord]:
        """Store the records generated from ``draft``.

        Returns:
            list[ExpenseRecord]: The inserted records, in installment order.
        """
        records = expand_draft(
            draft,
            id_factory=self._id_factory,
            group_factory=self._group_factory,
            now=self._clock(),
        )
        self._store.insert_many(records)
        if len(records) > 1:
            self._logger.info(
                f"Added recurring expense '{draft.name}' as {len(records)} "
                f"installments (group {records[0].recurring_group})"
            )
        else:
            self._logger.info(f"Added expense '{draft.name}'")
        return records


__all__ = ["AddExpenseUseCase"]
