"""Tests for the AddExpenseUseCase."""

from datetime import date, datetime
from decimal import Decimal
from itertools import count
from unittest.mock import MagicMock

import pytest

from src.application.record_store import ExpenseRecordStore
from src.application.use_cases.add_expense import AddExpenseUseCase
from src.domain.errors import ValidationError
from src.domain.models.expenses import Bank, Category, ExpenseDraft
from src.infrastructure.key_value_store import InMemoryKeyValueStore


def _counter(prefix: str):
    values = count(1)
    return lambda: f"{prefix}{next(values)}"


def _use_case() -> tuple[AddExpenseUseCase, ExpenseRecordStore]:
    store = ExpenseRecordStore(InMemoryKeyValueStore(), logger=MagicMock())
    use_case = AddExpenseUseCase(
        store,
        logger=MagicMock(),
        id_factory=_counter("id"),
        group_factory=_counter("group"),
        clock=lambda: datetime(2024, 1, 1),
    )
    return use_case, store


def _draft(**overrides) -> ExpenseDraft:
    values = {
        "name": "Rent",
        "date": date(2024, 1, 15),
        "category": Category(name="Housing"),
        "bank": Bank(name="Checking"),
        "amount": Decimal("1000"),
    }
    values.update(overrides)
    return ExpenseDraft(**values)


def test_execute_stores_single_expense() -> None:
    """A one-off draft is stored as a single record."""
    use_case, store = _use_case()

    records = use_case.execute(_draft(name="Coffee", amount=Decimal("3.5")))

    assert len(records) == 1
    assert store.records == tuple(records)
    assert records[0].created_at == datetime(2024, 1, 1)


def test_execute_expands_recurring_expense() -> None:
    """Rent x3 lands in the store as three dated installments."""
    use_case, store = _use_case()

    records = use_case.execute(_draft(recurring=True, installments_total=3))

    assert [(r.id, r.date, r.installment_label) for r in store.records] == [
        ("id1", date(2024, 1, 15), "1/3"),
        ("id2", date(2024, 2, 15), "2/3"),
        ("id3", date(2024, 3, 15), "3/3"),
    ]
    assert {r.recurring_group for r in records} == {"group1"}


def test_execute_rejects_invalid_draft_without_storing() -> None:
    """Invalid drafts leave the store untouched."""
    use_case, store = _use_case()

    with pytest.raises(ValidationError):
        use_case.execute(_draft(amount=Decimal("-5")))

    assert len(store) == 0
