"""Use case to list stored expenses."""

from src.application.record_store import ExpenseRecordStore
from src.domain.models.expenses import ExpenseFilters, ExpenseRecord
from src.domain.services.filters import SortField, filter_records, sort_records


class ListExpensesUseCase:
    """Return filtered and sorted expenses from the store."""

    def __init__(self, store: ExpenseRecordStore) -> None:
        self._store = store

    def execute(
        self,
        filters: ExpenseFilters | None = None,
        sort_field: SortField = SortField.DATE,
        descending: bool = True,
    ) -> list[ExpenseRecord]:
        """Return matching expenses.

        Args:
            filters: Optional criteria; inactive filters return everything.
            sort_field: Column to sort by.
            descending: Sort direction.

        Returns:
            list[ExpenseRecord]: Matching records in the requested order.
        """
        matches = filter_records(self._store.query(), filters)
        return sort_records(matches, sort_field, descending)


__all__ = ["ListExpensesUseCase"]
