"""Domain models for expense aggregates."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class MonthlyTotal:
    """Total spent in a calendar month."""

    year: int
    month: int
    total: Decimal

    @property
    def label(self) -> str:
        """Return a ``YYYY-MM`` label for charts."""
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class CategoryTotal:
    """Amount aggregated for a given category.

    Attributes:
        category: Category name.
        total: Sum of amounts in the category.
        icon: Icon of the first record seen for the category.
        color: Color of the first record seen for the category.
    """

    category: str
    total: Decimal
    icon: str = ""
    color: str = ""


@dataclass(frozen=True)
class ExpenseMetrics:
    """Headline figures compared against the monthly budget goal.

    Attributes:
        total: Sum of all expenses.
        current_month_total: Sum of the expenses dated in the current month.
        average_monthly: Mean of the monthly totals.
        goal_amount: Monthly budget goal.
        remaining_budget: Goal minus the current month total.
        budget_progress: Current month total as a percentage of the goal.
        top_category: Category with the largest total, if any.
        recurring_count: Number of records flagged as recurring.
        category_count: Number of distinct categories.
    """

    total: Decimal
    current_month_total: Decimal
    average_monthly: Decimal
    goal_amount: Decimal
    remaining_budget: Decimal
    budget_progress: Decimal
    top_category: CategoryTotal | None
    recurring_count: int
    category_count: int

    @property
    def over_budget(self) -> bool:
        return self.remaining_budget < 0


@dataclass(frozen=True)
class ExpenseSummary:
    """Aggregates rendered by the charts and metrics views."""

    monthly: list[MonthlyTotal]
    categories: list[CategoryTotal]
    metrics: ExpenseMetrics


__all__ = [
    "MonthlyTotal",
    "CategoryTotal",
    "ExpenseMetrics",
    "ExpenseSummary",
]
