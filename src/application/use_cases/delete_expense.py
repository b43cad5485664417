"""Use case to delete a single expense."""

from src.application.record_store import ExpenseRecordStore
from src.infrastructure.logging.logger import get_app_logger


class DeleteExpenseUseCase:
    """Delete one record.

    Deleting an installment leaves the rest of its group untouched: the
    siblings keep their positions and installment count.
    """

    def __init__(self, store: ExpenseRecordStore, logger=None) -> None:
        self._store = store
        self._logger = logger or get_app_logger()

    def execute(self, record_id: str) -> None:
        record = self._store.get(record_id)
        self._store.remove(record_id)
        if record.is_grouped:
            self._logger.info(
                f"Deleted installment {record.installment_label} of group "
                f"{record.recurring_group}; siblings left unchanged"
            )


__all__ = ["DeleteExpenseUseCase"]
