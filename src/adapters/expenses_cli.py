"""Command-line adapter for the expense tracker.

Examples::

    python -m src.adapters.expenses_cli add --name Rent --date 2024-01-15 \
        --category Housing --bank Checking --amount 1000 --installments 3
    python -m src.adapters.expenses_cli update <id> --position 1 --group
    python -m src.adapters.expenses_cli export --pretty --output backup.pbtxt
    python -m src.adapters.expenses_cli categories add Pets --icon 🐶
"""

import argparse
from collections.abc import Sequence
from dataclasses import replace
from datetime import date
from pathlib import Path
import sys

from src.application.use_cases.import_export import ImportMode
from src.domain.errors import ExpenseTrackerError, ValidationError
from src.domain.models.expenses import (
    DEFAULT_COLOR,
    DEFAULT_ICON,
    Bank,
    Category,
    ExpenseDraft,
    ExpenseFilters,
    ExpenseRecord,
    ExpenseUpdate,
)
from src.domain.services.filters import SortField
from src.infrastructure.container import ExpenseServices, build_expense_services
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import parse_amount


def _parse_date(value: str) -> date:
    """Parse an ISO date for argparse.

    Args:
        value: Date string in YYYY-MM-DD format.

    Returns:
        date: Parsed calendar date.
    """
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"Invalid date '{value}'. Expected format YYYY-MM-DD."
        ) from exc


def _parse_amount(value: str):
    try:
        return parse_amount(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid number '{value}'") from exc
    if number < 1:
        raise argparse.ArgumentTypeError(f"Expected a number >= 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for all sub-commands."""
    parser = argparse.ArgumentParser(prog="expenses", description=__doc__)
    commands = parser.add_subparsers(dest="command", required=True)

    add = commands.add_parser("add", help="Record a new expense")
    add.add_argument("--name", required=True)
    add.add_argument("--date", type=_parse_date, default=date.today())
    add.add_argument("--category", required=True)
    add.add_argument("--icon")
    add.add_argument("--color")
    add.add_argument("--bank", required=True)
    add.add_argument("--bank-color")
    add.add_argument("--amount", type=_parse_amount, required=True)
    add.add_argument(
        "--installments",
        type=_positive_int,
        help="Record a recurring expense split into this many installments",
    )

    listing = commands.add_parser("list", help="List expenses")
    listing.add_argument("--name", default="")
    listing.add_argument("--from", dest="date_from", type=_parse_date)
    listing.add_argument("--to", dest="date_to", type=_parse_date)
    listing.add_argument("--min", dest="min_amount", type=_parse_amount)
    listing.add_argument("--max", dest="max_amount", type=_parse_amount)
    listing.add_argument("--bank", default="")
    listing.add_argument("--category", default="")
    listing.add_argument(
        "--sort",
        choices=[field.value for field in SortField],
        default=SortField.DATE.value,
    )
    listing.add_argument("--asc", action="store_true")

    update = commands.add_parser("update", help="Edit an expense")
    update.add_argument("id")
    update.add_argument("--name")
    update.add_argument("--date", type=_parse_date)
    update.add_argument("--amount", type=_parse_amount)
    update.add_argument("--category")
    update.add_argument("--bank")
    update.add_argument("--installments", type=_positive_int)
    update.add_argument("--position", type=_positive_int)
    update.add_argument(
        "--group",
        action="store_true",
        help="Apply the edit to every installment of the recurring group",
    )

    delete = commands.add_parser("delete", help="Delete one expense")
    delete.add_argument("id")

    export = commands.add_parser("export", help="Export all expenses")
    export.add_argument("--pretty", action="store_true")
    export.add_argument("--output", type=Path)

    importer = commands.add_parser("import", help="Import an export file")
    importer.add_argument("file", type=Path)
    importer.add_argument("--replace", action="store_true")

    goal = commands.add_parser("goal", help="Show or set the monthly goal")
    goal.add_argument("amount", nargs="?", type=_parse_amount)

    banks = commands.add_parser("banks", help="Manage the banks offered")
    banks.add_argument("action", choices=["list", "add", "delete"])
    banks.add_argument("name", nargs="?")
    banks.add_argument("--color", default=DEFAULT_COLOR)

    categories = commands.add_parser(
        "categories",
        help="Manage the categories offered",
    )
    categories.add_argument("action", choices=["list", "add", "delete"])
    categories.add_argument("name", nargs="?")
    categories.add_argument("--icon", default=DEFAULT_ICON)
    categories.add_argument("--color", default=DEFAULT_COLOR)

    commands.add_parser("summary", help="Show monthly totals and metrics")
    return parser


def _format_record(record: ExpenseRecord) -> str:
    label = f" [{record.installment_label}]" if record.recurring else ""
    return (
        f"{record.id}  {record.date.isoformat()}  {record.name}{label}  "
        f"{record.category.icon} {record.category.name}  "
        f"{record.bank.name}  {record.amount:,.2f}"
    )


def _resolve_category(services: ExpenseServices, name: str) -> Category:
    """Reuse the icon and color of an offered or recorded category."""
    offered = services.custom_categories.find(name)
    if offered is not None:
        return offered
    for record in services.store.query(lambda r: r.category.name == name):
        return record.category
    return Category(name=name)


def _resolve_bank(services: ExpenseServices, name: str) -> Bank:
    offered = services.custom_banks.find(name)
    if offered is not None:
        return offered
    for record in services.store.query(lambda r: r.bank.name == name):
        return record.bank
    return Bank(name=name)


def _override(option, **changes):
    """Return ``option`` with the explicitly given attributes replaced."""
    given = {key: value for key, value in changes.items() if value is not None}
    return replace(option, **given) if given else option


def _manage_options(args: argparse.Namespace, use_case, item) -> None:
    if args.action == "list":
        custom = {option.name for option in use_case.list_custom()}
        for option in use_case.options():
            icon = f"{option.icon} " if isinstance(option, Category) else ""
            marker = "  (custom)" if option.name in custom else ""
            print(f"{icon}{option.name}  {option.color}{marker}")
        return
    if not args.name:
        raise ValidationError(f"{args.command} {args.action} needs a name")
    if args.action == "add":
        added = use_case.add(item)
        print(f"Added {added.name}")
    else:
        use_case.delete(args.name)
        print(f"Deleted {args.name}")


def _run(args: argparse.Namespace, services: ExpenseServices) -> None:
    if args.command == "add":
        draft = ExpenseDraft(
            name=args.name,
            date=args.date,
            category=_override(
                _resolve_category(services, args.category),
                icon=args.icon,
                color=args.color,
            ),
            bank=_override(
                _resolve_bank(services, args.bank),
                color=args.bank_color,
            ),
            amount=args.amount,
            recurring=args.installments is not None,
            installments_total=args.installments or 1,
        )
        for record in services.add_expense.execute(draft):
            print(_format_record(record))
    elif args.command == "list":
        filters = ExpenseFilters(
            name=args.name,
            date_from=args.date_from,
            date_to=args.date_to,
            min_amount=args.min_amount,
            max_amount=args.max_amount,
            bank=args.bank,
            category=args.category,
        )
        records = services.list_expenses.execute(
            filters,
            sort_field=SortField(args.sort),
            descending=not args.asc,
        )
        for record in records:
            print(_format_record(record))
        print(f"{len(records)} expenses shown")
    elif args.command == "update":
        update = ExpenseUpdate(
            name=args.name,
            date=args.date,
            amount=args.amount,
            category=(
                _resolve_category(services, args.category)
                if args.category
                else None
            ),
            bank=_resolve_bank(services, args.bank) if args.bank else None,
            installments_total=args.installments,
            current_installment=args.position,
        )
        for record in services.update_expense.execute(
            args.id,
            update,
            apply_to_group=args.group,
        ):
            print(_format_record(record))
    elif args.command == "delete":
        services.delete_expense.execute(args.id)
        print(f"Deleted expense {args.id}")
    elif args.command == "export":
        content = services.export_expenses.execute(pretty=args.pretty)
        if args.output:
            args.output.write_text(content, encoding="utf-8")
            print(f"Exported {len(services.store)} expenses to {args.output}")
        else:
            print(content)
    elif args.command == "import":
        mode = ImportMode.REPLACE if args.replace else ImportMode.APPEND
        records = services.import_expenses.execute(
            args.file.read_text(encoding="utf-8"),
            mode=mode,
        )
        print(f"Imported {len(records)} expenses")
    elif args.command == "goal":
        if args.amount is not None:
            services.budget_goal.set(args.amount)
        print(f"Monthly goal: {services.budget_goal.get():,.2f}")
    elif args.command == "banks":
        _manage_options(
            args,
            services.custom_banks,
            Bank(name=args.name or "", color=args.color),
        )
    elif args.command == "categories":
        _manage_options(
            args,
            services.custom_categories,
            Category(name=args.name or "", icon=args.icon, color=args.color),
        )
    elif args.command == "summary":
        summary = services.summary.execute()
        for month in summary.monthly:
            print(f"{month.label}  {month.total:,.2f}")
        metrics = summary.metrics
        print(f"Total: {metrics.total:,.2f}")
        print(
            f"This month: {metrics.current_month_total:,.2f} of "
            f"{metrics.goal_amount:,.2f} ({metrics.budget_progress:.1f}%)"
        )
        if metrics.top_category is not None:
            print(f"Top category: {metrics.top_category.category}")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI.

    Returns:
        int: Process exit code.
    """
    args = build_parser().parse_args(argv)
    logger = get_app_logger()
    try:
        services = build_expense_services()
        _run(args, services)
    except ExpenseTrackerError as exc:
        logger.error(f"{args.command} failed: {exc}")
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        logger.error(f"{args.command} failed: {exc}")
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
