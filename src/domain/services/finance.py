"""Domain services for expense aggregates."""

from collections.abc import Iterable, Sequence
from datetime import date
from decimal import Decimal

from src.domain.models.expenses import ExpenseRecord
from src.domain.models.finance import CategoryTotal, ExpenseMetrics, MonthlyTotal
from src.domain.services.calendar import month_key


def compute_monthly_totals(records: Iterable[ExpenseRecord]) -> list[MonthlyTotal]:
    """Sum amounts per calendar month.

    Args:
        records: Expenses to aggregate.

    Returns:
        list[MonthlyTotal]: One entry per month with expenses, oldest first.
    """
    totals: dict[tuple[int, int], Decimal] = {}
    for record in records:
        key = month_key(record.date)
        totals[key] = totals.get(key, Decimal("0")) + record.amount
    return [
        MonthlyTotal(year=year, month=month, total=total)
        for (year, month), total in sorted(totals.items())
    ]


def compute_category_totals(
    records: Iterable[ExpenseRecord],
) -> list[CategoryTotal]:
    """Sum amounts per category name, largest first."""
    totals: dict[str, Decimal] = {}
    display: dict[str, tuple[str, str]] = {}
    for record in records:
        name = record.category.name
        totals[name] = totals.get(name, Decimal("0")) + record.amount
        display.setdefault(name, (record.category.icon, record.category.color))
    items = [
        CategoryTotal(
            category=name,
            total=total,
            icon=display[name][0],
            color=display[name][1],
        )
        for name, total in totals.items()
    ]
    return sorted(items, key=lambda item: item.total, reverse=True)


def compute_expense_metrics(
    records: Sequence[ExpenseRecord],
    goal_amount: Decimal,
    today: date,
    monthly: Sequence[MonthlyTotal] | None = None,
    categories: Sequence[CategoryTotal] | None = None,
) -> ExpenseMetrics:
    """Compute the headline metrics shown next to the charts.

    Args:
        records: All stored expenses.
        goal_amount: Monthly budget goal.
        today: Reference date selecting the current month.
        monthly: Precomputed monthly totals, if available.
        categories: Precomputed category totals, if available.

    Returns:
        ExpenseMetrics: Totals, budget usage and category highlights.
    """
    monthly = list(monthly if monthly is not None else compute_monthly_totals(records))
    categories = list(
        categories if categories is not None else compute_category_totals(records)
    )
    total = sum((record.amount for record in records), Decimal("0"))
    current_key = month_key(today)
    current_month_total = next(
        (m.total for m in monthly if (m.year, m.month) == current_key),
        Decimal("0"),
    )
    average_monthly = (
        sum((m.total for m in monthly), Decimal("0")) / len(monthly)
        if monthly
        else Decimal("0")
    )
    budget_progress = (
        current_month_total / goal_amount * Decimal("100")
        if goal_amount
        else Decimal("0")
    )
    return ExpenseMetrics(
        total=total,
        current_month_total=current_month_total,
        average_monthly=average_monthly,
        goal_amount=goal_amount,
        remaining_budget=goal_amount - current_month_total,
        budget_progress=budget_progress,
        top_category=categories[0] if categories else None,
        recurring_count=sum(1 for record in records if record.recurring),
        category_count=len(categories),
    )


__all__ = [
    "compute_monthly_totals",
    "compute_category_totals",
    "compute_expense_metrics",
]
