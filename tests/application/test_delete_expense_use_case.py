"""Tests for the DeleteExpenseUseCase."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.application.record_store import ExpenseRecordStore
from src.application.use_cases.delete_expense import DeleteExpenseUseCase
from src.domain.errors import NotFoundError
from src.domain.models.expenses import Bank, Category, ExpenseRecord
from src.infrastructure.key_value_store import InMemoryKeyValueStore


def _installment(position: int) -> ExpenseRecord:
    return ExpenseRecord(
        id=f"i{position}",
        name="Phone",
        date=date(2024, position, 1),
        category=Category(name="Telephony"),
        bank=Bank(name="Card"),
        amount=Decimal("25"),
        recurring=True,
        installments_total=3,
        current_installment=position,
        recurring_group="phone",
    )


def test_deleting_installment_keeps_sibling_numbering() -> None:
    """Siblings keep their positions and total after a delete."""
    store = ExpenseRecordStore(InMemoryKeyValueStore(), logger=MagicMock())
    store.insert_many([_installment(p) for p in (1, 2, 3)])
    logger = MagicMock()

    DeleteExpenseUseCase(store, logger=logger).execute("i2")

    assert [(r.id, r.installment_label) for r in store.records] == [
        ("i1", "1/3"),
        ("i3", "3/3"),
    ]
    logger.info.assert_called_once()


def test_deleting_unknown_expense_raises() -> None:
    """Missing ids raise NotFoundError."""
    store = ExpenseRecordStore(InMemoryKeyValueStore(), logger=MagicMock())

    with pytest.raises(NotFoundError):
        DeleteExpenseUseCase(store, logger=MagicMock()).execute("missing")
