"""Tests for the ListExpensesUseCase."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from src.application.record_store import ExpenseRecordStore
from src.application.use_cases.list_expenses import ListExpensesUseCase
from src.domain.models.expenses import Bank, Category, ExpenseFilters, ExpenseRecord
from src.domain.services.filters import SortField
from src.infrastructure.key_value_store import InMemoryKeyValueStore


def _record(record_id: str, day: int, amount: str, bank: str) -> ExpenseRecord:
    return ExpenseRecord(
        id=record_id,
        name=record_id,
        date=date(2024, 5, day),
        category=Category(name="Misc"),
        bank=Bank(name=bank),
        amount=Decimal(amount),
    )


def _use_case() -> ListExpensesUseCase:
    store = ExpenseRecordStore(InMemoryKeyValueStore(), logger=MagicMock())
    store.insert_many(
        [
            _record("a", 1, "10", "Card"),
            _record("b", 3, "30", "Cash"),
            _record("c", 2, "20", "Card"),
        ]
    )
    return ListExpensesUseCase(store)


def test_execute_defaults_to_newest_first() -> None:
    """Without arguments every record is listed by date descending."""
    assert [r.id for r in _use_case().execute()] == ["b", "c", "a"]


def test_execute_applies_filters_and_sort() -> None:
    """Filters narrow the list before sorting."""
    result = _use_case().execute(
        ExpenseFilters(bank="Card"),
        sort_field=SortField.AMOUNT,
        descending=False,
    )

    assert [r.id for r in result] == ["a", "c"]
