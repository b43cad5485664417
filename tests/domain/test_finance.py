"""Tests for expense aggregate services."""

from datetime import date
from decimal import Decimal

from src.domain.models.expenses import Bank, Category, ExpenseRecord
from src.domain.services.finance import (
    compute_category_totals,
    compute_expense_metrics,
    compute_monthly_totals,
)


def _record(record_id: str, when: date, amount: str, category: str,
            recurring: bool = False) -> ExpenseRecord:
    return ExpenseRecord(
        id=record_id,
        name=record_id,
        date=when,
        category=Category(name=category, icon="•", color="#000000"),
        bank=Bank(name="Card"),
        amount=Decimal(amount),
        recurring=recurring,
    )


RECORDS = [
    _record("a", date(2024, 1, 3), "100.10", "Food"),
    _record("b", date(2024, 1, 20), "0.20", "Food"),
    _record("c", date(2024, 2, 1), "300", "Rent", recurring=True),
    _record("d", date(2023, 12, 31), "50", "Fun"),
]


def test_monthly_totals_are_sorted_and_exact() -> None:
    """Totals are grouped per month using decimal arithmetic."""
    totals = compute_monthly_totals(RECORDS)

    assert [(m.label, m.total) for m in totals] == [
        ("2023-12", Decimal("50")),
        ("2024-01", Decimal("100.30")),
        ("2024-02", Decimal("300")),
    ]


def test_category_totals_are_largest_first() -> None:
    """Category totals carry display metadata and sort descending."""
    totals = compute_category_totals(RECORDS)

    assert [(c.category, c.total) for c in totals] == [
        ("Rent", Decimal("300")),
        ("Food", Decimal("100.30")),
        ("Fun", Decimal("50")),
    ]
    assert totals[0].icon == "•"


def test_metrics_compare_current_month_with_goal() -> None:
    """Budget figures use the month of the reference date."""
    metrics = compute_expense_metrics(
        RECORDS,
        Decimal("200"),
        today=date(2024, 2, 14),
    )

    assert metrics.total == Decimal("450.30")
    assert metrics.current_month_total == Decimal("300")
    assert metrics.remaining_budget == Decimal("-100")
    assert metrics.over_budget is True
    assert metrics.budget_progress == Decimal("150")
    assert metrics.average_monthly == Decimal("150.10")
    assert metrics.top_category.category == "Rent"
    assert metrics.recurring_count == 1
    assert metrics.category_count == 3


def test_metrics_handle_empty_data_and_zero_goal() -> None:
    """No records and a zero goal never divide by zero."""
    metrics = compute_expense_metrics([], Decimal("0"), today=date(2024, 1, 1))

    assert metrics.total == Decimal("0")
    assert metrics.average_monthly == Decimal("0")
    assert metrics.budget_progress == Decimal("0")
    assert metrics.top_category is None
    assert metrics.over_budget is False
