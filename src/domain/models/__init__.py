"""Domain models package."""

from .expenses import (
    Bank,
    Category,
    ExpenseDraft,
    ExpenseFilters,
    ExpenseRecord,
    ExpenseUpdate,
)
from .finance import (
    CategoryTotal,
    ExpenseMetrics,
    ExpenseSummary,
    MonthlyTotal,
)

__all__ = [
    "Bank",
    "Category",
    "ExpenseDraft",
    "ExpenseFilters",
    "ExpenseRecord",
    "ExpenseUpdate",
    "MonthlyTotal",
    "CategoryTotal",
    "ExpenseMetrics",
    "ExpenseSummary",
]
