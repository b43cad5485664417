"""Use case to aggregate expenses for the charts and metrics views."""

from datetime import date

from src.application.record_store import ExpenseRecordStore
from src.application.use_cases.budget_goal import BudgetGoalUseCase
from src.domain.models.finance import ExpenseSummary
from src.domain.services.finance import (
    compute_category_totals,
    compute_expense_metrics,
    compute_monthly_totals,
)


class GetExpenseSummaryUseCase:
    """Build monthly and category totals plus budget metrics."""

    def __init__(
        self,
        store: ExpenseRecordStore,
        budget_goal: BudgetGoalUseCase,
    ) -> None:
        self._store = store
        self._budget_goal = budget_goal

    def execute(self, today: date | None = None) -> ExpenseSummary:
        """Return the summary as of ``today``.

        Args:
            today: Reference date for the current month; defaults to today.

        Returns:
            ExpenseSummary: Monthly totals, category totals and metrics.
        """
        records = self._store.query()
        monthly = compute_monthly_totals(records)
        categories = compute_category_totals(records)
        metrics = compute_expense_metrics(
            records,
            self._budget_goal.get(),
            today or date.today(),
            monthly=monthly,
            categories=categories,
        )
        return ExpenseSummary(
            monthly=monthly,
            categories=categories,
            metrics=metrics,
        )


__all__ = ["GetExpenseSummaryUseCase"]
