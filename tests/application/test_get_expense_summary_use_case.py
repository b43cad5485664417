"""Tests for the GetExpenseSummaryUseCase."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from src.application.record_store import ExpenseRecordStore
from src.application.use_cases.budget_goal import BudgetGoalUseCase
from src.application.use_cases.get_expense_summary import GetExpenseSummaryUseCase
from src.domain.models.expenses import Bank, Category, ExpenseRecord
from src.infrastructure.key_value_store import InMemoryKeyValueStore


def test_execute_bundles_totals_and_metrics() -> None:
    """The summary combines monthly and category totals with the goal."""
    kv_store = InMemoryKeyValueStore()
    store = ExpenseRecordStore(kv_store, logger=MagicMock())
    store.insert_many(
        [
            ExpenseRecord(
                id=str(month),
                name="Rent",
                date=date(2024, month, 15),
                category=Category(name="Housing"),
                bank=Bank(name="Checking"),
                amount=Decimal("1000"),
            )
            for month in (1, 2)
        ]
    )
    goal = BudgetGoalUseCase(kv_store, logger=MagicMock())
    goal.set(Decimal("1500"))

    summary = GetExpenseSummaryUseCase(store, goal).execute(date(2024, 2, 1))

    assert [m.label for m in summary.monthly] == ["2024-01", "2024-02"]
    assert summary.categories[0].total == Decimal("2000")
    assert summary.metrics.current_month_total == Decimal("1000")
    assert summary.metrics.remaining_budget == Decimal("500")
