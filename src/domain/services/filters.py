"""Filtering and sorting helpers for expense listings."""

from collections.abc import Iterable
from enum import Enum

from src.domain.models.expenses import ExpenseFilters, ExpenseRecord


class SortField(str, Enum):
    """Columns an expense listing can be sorted by."""

    NAME = "name"
    DATE = "date"
    CATEGORY = "category"
    AMOUNT = "amount"


def filter_records(
    records: Iterable[ExpenseRecord],
    filters: ExpenseFilters | None,
) -> list[ExpenseRecord]:
    """Return the records matching ``filters``, preserving order."""
    if filters is None or not filters.is_active:
        return list(records)
    return [record for record in records if filters.matches(record)]


def sort_records(
    records: Iterable[ExpenseRecord],
    sort_field: SortField = SortField.DATE,
    descending: bool = True,
) -> list[ExpenseRecord]:
    """Sort records by a column.

    Text columns compare case-insensitively. The sort is stable, so records
    with equal keys keep their store order.
    """
    return sorted(records, key=_sort_key(sort_field), reverse=descending)


def _sort_key(sort_field: SortField):
    if sort_field == SortField.NAME:
        return lambda record: record.name.lower()
    if sort_field == SortField.CATEGORY:
        return lambda record: record.category.name.lower()
    if sort_field == SortField.AMOUNT:
        return lambda record: record.amount
    return lambda record: record.date


def unique_banks(records: Iterable[ExpenseRecord]) -> list[str]:
    """Return the sorted bank names used by ``records``."""
    return sorted({record.bank.name for record in records})


def unique_categories(records: Iterable[ExpenseRecord]) -> list[str]:
    """Return the sorted category names used by ``records``."""
    return sorted({record.category.name for record in records})


__all__ = [
    "SortField",
    "filter_records",
    "sort_records",
    "unique_banks",
    "unique_categories",
]
