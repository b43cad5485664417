"""Use case to edit an expense or its whole recurring group."""

from collections.abc import Callable
from datetime import datetime

from src.application.record_store import ExpenseRecordStore
from src.domain.models.expenses import ExpenseRecord, ExpenseUpdate
from src.domain.services.recurrence import (
    IdFactory,
    merge_resolution,
    new_token,
    resolve_update,
)
from src.infrastructure.logging.logger import get_app_logger


class UpdateExpenseUseCase:
    """Resolve an edit against the store and persist the next state."""

    def __init__(
        self,
        store: ExpenseRecordStore,
        logger=None,
        id_factory: IdFactory = new_token,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize the use case.

        Args:
            store: Expense store holding the edited record.
            logger: Optional logger compatible with logging.Logger-like API.
            id_factory: Source of ids for installments added by a resize.
            clock: Source of creation timestamps for added installments.
        """
        self._store = store
        self._logger = logger or get_app_logger()
        self._id_factory = id_factory
        self._clock = clock

    def execute(
        self,
        target_id: str,
        update: ExpenseUpdate,
        apply_to_group: bool = False,
    ) -> list[ExpenseRecord]:
        """Apply ``update`` to the target record or to its group.

        Args:
            target_id: Id of the edited record.
            update: Fields to change.
            apply_to_group: Whether the edit targets the whole group; only
                meaningful for grouped recurring records.

        Returns:
            list[ExpenseRecord]: Next state of the affected records, in
            installment order.
        """
        current = self._store.records
        resolution = resolve_update(
            current,
            target_id,
            update,
            apply_to_group,
            id_factory=self._id_factory,
            now=self._clock(),
            logger=self._logger,
        )
        self._store.replace_all(merge_resolution(current, resolution))
        self._logger.info(
            f"Updated expense {target_id} "
            f"(group={apply_to_group}, fields={sorted(update.changes())}, "
            f"created={len(resolution.created)}, "
            f"removed={len(resolution.removed_ids)})"
        )
        return resolution.records


__all__ = ["UpdateExpenseUseCase"]
