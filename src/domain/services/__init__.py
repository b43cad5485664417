"""Domain services package."""

from .calendar import add_months, month_key
from .filters import SortField, filter_records, sort_records
from .finance import (
    compute_category_totals,
    compute_expense_metrics,
    compute_monthly_totals,
)
from .recurrence import (
    GroupResolution,
    expand_draft,
    merge_resolution,
    resolve_update,
)

__all__ = [
    "add_months",
    "month_key",
    "SortField",
    "filter_records",
    "sort_records",
    "compute_monthly_totals",
    "compute_category_totals",
    "compute_expense_metrics",
    "GroupResolution",
    "expand_draft",
    "merge_resolution",
    "resolve_update",
]
