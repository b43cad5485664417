"""Domain package for business rules and core models."""

from .constants import BANK_PRESETS, CATEGORY_PRESETS
from .errors import (
    DuplicateIdError,
    ExpenseTrackerError,
    InvariantViolation,
    NotFoundError,
    ValidationError,
)
from .models import (
    Bank,
    Category,
    CategoryTotal,
    ExpenseDraft,
    ExpenseFilters,
    ExpenseMetrics,
    ExpenseRecord,
    ExpenseSummary,
    ExpenseUpdate,
    MonthlyTotal,
)
from .services import (
    GroupResolution,
    SortField,
    add_months,
    compute_category_totals,
    compute_expense_metrics,
    compute_monthly_totals,
    expand_draft,
    filter_records,
    merge_resolution,
    resolve_update,
    sort_records,
)

__all__ = [
    "BANK_PRESETS",
    "CATEGORY_PRESETS",
    "ExpenseTrackerError",
    "ValidationError",
    "DuplicateIdError",
    "NotFoundError",
    "InvariantViolation",
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
    "GroupResolution",
    "SortField",
    "add_months",
    "compute_category_totals",
    "compute_expense_metrics",
    "compute_monthly_totals",
    "expand_draft",
    "filter_records",
    "merge_resolution",
    "resolve_update",
    "sort_records",
]
