"""Application use cases package."""

from .add_expense import AddExpenseUseCase
from .budget_goal import BudgetGoalUseCase
from .custom_options import CustomBanksUseCase, CustomCategoriesUseCase
from .delete_expense import DeleteExpenseUseCase
from .get_expense_summary import GetExpenseSummaryUseCase
from .import_export import (
    ExportExpensesUseCase,
    ImportExpensesUseCase,
    ImportMode,
)
from .list_expenses import ListExpensesUseCase
from .update_expense import UpdateExpenseUseCase

__all__ = [
    "AddExpenseUseCase",
    "BudgetGoalUseCase",
    "CustomBanksUseCase",
    "CustomCategoriesUseCase",
    "DeleteExpenseUseCase",
    "GetExpenseSummaryUseCase",
    "ExportExpensesUseCase",
    "ImportExpensesUseCase",
    "ImportMode",
    "ListExpensesUseCase",
    "UpdateExpenseUseCase",
]
