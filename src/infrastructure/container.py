"""Composition root for wiring infrastructure adapters."""

from dataclasses import dataclass

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.key_value_store import KeyValueStorePort
from src.application.record_store import ExpenseRecordStore
from src.application.use_cases.add_expense import AddExpenseUseCase
from src.application.use_cases.budget_goal import BudgetGoalUseCase
from src.application.use_cases.custom_options import (
    CustomBanksUseCase,
    CustomCategoriesUseCase,
)
from src.application.use_cases.delete_expense import DeleteExpenseUseCase
from src.application.use_cases.get_expense_summary import (
    GetExpenseSummaryUseCase,
)
from src.application.use_cases.import_export import (
    ExportExpensesUseCase,
    ImportExpensesUseCase,
)
from src.application.use_cases.list_expenses import ListExpensesUseCase
from src.application.use_cases.update_expense import UpdateExpenseUseCase
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.key_value_store import (
    InMemoryKeyValueStore,
    SqlAlchemyKeyValueStore,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import AppSettings


@dataclass(frozen=True)
class ExpenseServices:
    """Use cases sharing one record store."""

    store: ExpenseRecordStore
    add_expense: AddExpenseUseCase
    update_expense: UpdateExpenseUseCase
    delete_expense: DeleteExpenseUseCase
    list_expenses: ListExpensesUseCase
    budget_goal: BudgetGoalUseCase
    summary: GetExpenseSummaryUseCase
    export_expenses: ExportExpensesUseCase
    import_expenses: ImportExpensesUseCase
    custom_banks: CustomBanksUseCase
    custom_categories: CustomCategoriesUseCase


def build_database_adapter(
    settings: AppSettings | None = None,
) -> DatabaseEnginePort:
    """Return the database adapter instance."""
    resolved = settings or AppSettings.from_env()
    return SqlAlchemyDatabaseEngineAdapter(resolved.db_url)


def build_key_value_store(
    settings: AppSettings | None = None,
) -> KeyValueStorePort:
    """Return the configured key-value store."""
    resolved = settings or AppSettings.from_env()
    if resolved.backend == "memory":
        return InMemoryKeyValueStore()
    return SqlAlchemyKeyValueStore(build_database_adapter(resolved))


def build_expense_services(
    settings: AppSettings | None = None,
    kv_store: KeyValueStorePort | None = None,
) -> ExpenseServices:
    """Wire the use cases around a freshly loaded record store.

    Args:
        settings: Optional settings; read from the environment when omitted.
        kv_store: Optional store override, mostly for tests.

    Returns:
        ExpenseServices: Use cases sharing the same store.
    """
    resolved = settings or AppSettings.from_env()
    resolved_kv = kv_store or build_key_value_store(resolved)
    logger = get_app_logger()
    store = ExpenseRecordStore(resolved_kv, logger=logger).load()
    budget_goal = BudgetGoalUseCase(
        resolved_kv,
        default_goal=resolved.default_goal,
        logger=logger,
    )
    return ExpenseServices(
        store=store,
        add_expense=AddExpenseUseCase(store, logger=logger),
        update_expense=UpdateExpenseUseCase(store, logger=logger),
        delete_expense=DeleteExpenseUseCase(store, logger=logger),
        list_expenses=ListExpensesUseCase(store),
        budget_goal=budget_goal,
        summary=GetExpenseSummaryUseCase(store, budget_goal),
        export_expenses=ExportExpensesUseCase(store, logger=logger),
        import_expenses=ImportExpensesUseCase(store, logger=logger),
        custom_banks=CustomBanksUseCase(resolved_kv, logger=logger),
        custom_categories=CustomCategoriesUseCase(resolved_kv, logger=logger),
    )


__all__ = [
    "ExpenseServices",
    "build_database_adapter",
    "build_key_value_store",
    "build_expense_services",
]
