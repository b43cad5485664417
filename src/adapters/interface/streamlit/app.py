"""Streamlit dashboard entry point."""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal

import altair as alt
import streamlit as st

from src.application.use_cases.import_export import ImportMode
from src.domain.errors import ExpenseTrackerError
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
from src.domain.models.finance import ExpenseSummary
from src.domain.services.filters import SortField, unique_banks, unique_categories
from src.infrastructure.container import ExpenseServices, build_expense_services
from src.infrastructure.logging.logger import get_usage_logger
from src.utils.decimal_utils import parse_amount


_ALL = "All"


@st.cache_resource(show_spinner=False)
def _load_services() -> ExpenseServices:
    """Build the use cases once per Streamlit server process."""
    return build_expense_services()


def _format_currency(value: Decimal) -> str:
    """Format currency values for display."""
    return f"{value:,.2f}"


def _records_table(records: Sequence[ExpenseRecord]) -> list[dict[str, str]]:
    """Return dataframe rows for the expense list."""
    return [
        {
            "Name": record.name,
            "Date": record.date.isoformat(),
            "Category": f"{record.category.icon} {record.category.name}",
            "Bank": record.bank.name,
            "Amount": _format_currency(record.amount),
            "Type": (
                f"Recurring {record.installment_label}"
                if record.recurring
                else "One-off"
            ),
        }
        for record in records
    ]


def _category_label(category: Category) -> str:
    return f"{category.icon} {category.name}"


def _bank_label(bank: Bank) -> str:
    return bank.name


def _record_label(record: ExpenseRecord) -> str:
    suffix = f" ({record.installment_label})" if record.recurring else ""
    return f"{record.date.isoformat()} · {record.name}{suffix}"


def _prepare_monthly_chart_data(
    summary: ExpenseSummary,
) -> list[dict[str, str | float | bool]]:
    """Prepare Altair-ready monthly totals flagged against the goal.

    Args:
        summary: Aggregated expense totals and metrics.

    Returns:
        list of dicts with month label, amount and an over-goal flag.
    """
    goal = summary.metrics.goal_amount
    return [
        {
            "month": item.label,
            "amount": float(item.total),
            "amount_label": _format_currency(item.total),
            "over_goal": bool(goal) and item.total > goal,
        }
        for item in summary.monthly
    ]


def _render_monthly_chart(summary: ExpenseSummary) -> None:
    """Render monthly totals as bars with the goal as a rule."""
    data = _prepare_monthly_chart_data(summary)
    if not data:
        st.info("No expenses recorded yet. Add your first expense!")
        return
    bars = alt.Chart(alt.Data(values=data)).mark_bar(
        cornerRadiusTopLeft=4,
        cornerRadiusTopRight=4,
    ).encode(
        x=alt.X("month:N", title=None, sort=None),
        y=alt.Y("amount:Q", title="Total"),
        color=alt.condition(
            "datum.over_goal",
            alt.value("#e76f51"),
            alt.value("#1b9aaa"),
        ),
        tooltip=[
            alt.Tooltip("month:N"),
            alt.Tooltip("amount_label:N", title="Total"),
        ],
    )
    goal_rule = alt.Chart(
        alt.Data(values=[{"goal": float(summary.metrics.goal_amount)}])
    ).mark_rule(strokeDash=[6, 4], color="#f4a261").encode(y="goal:Q")
    st.subheader("Monthly expenses")
    st.altair_chart(alt.layer(bars, goal_rule), width="stretch")


def _render_metrics(summary: ExpenseSummary, services: ExpenseServices) -> None:
    metrics = summary.metrics
    total_col, month_col, average_col, budget_col = st.columns(4)
    total_col.metric("Total", _format_currency(metrics.total))
    month_col.metric(
        "This month",
        _format_currency(metrics.current_month_total),
        f"{metrics.budget_progress:.1f}% of goal",
        delta_color="inverse",
    )
    average_col.metric("Monthly average", _format_currency(metrics.average_monthly))
    budget_col.metric(
        "Over budget" if metrics.over_budget else "Remaining budget",
        _format_currency(abs(metrics.remaining_budget)),
    )
    top = metrics.top_category
    st.caption(
        f"{metrics.recurring_count} recurring expenses · "
        f"{metrics.category_count} categories"
        + (f" · top: {top.icon} {top.category}" if top else "")
    )
    goal = st.number_input(
        "Monthly goal",
        min_value=0.0,
        value=float(metrics.goal_amount),
        step=100.0,
    )
    if Decimal(str(goal)) != metrics.goal_amount:
        services.budget_goal.set(Decimal(str(goal)).quantize(Decimal("0.01")))
        st.rerun()


def _render_expense_form(services: ExpenseServices) -> None:
    """Render the form that records a new expense."""
    st.subheader("Save expense")
    with st.form("expense_form", clear_on_submit=True):
        name = st.text_input("Expense name")
        expense_date = st.date_input("Date", value=date.today())
        category_col, bank_col = st.columns(2)
        category = category_col.selectbox(
            "Category",
            services.custom_categories.options(),
            format_func=_category_label,
        )
        bank = bank_col.selectbox(
            "Bank",
            services.custom_banks.options(),
            format_func=_bank_label,
        )
        raw_amount = st.text_input("Amount")
        recurring = st.checkbox("Recurring expense")
        installments = st.number_input(
            "Number of installments",
            min_value=1,
            value=1,
            step=1,
        )
        submitted = st.form_submit_button("Add expense")

    if not submitted:
        return
    if not (name.strip() and category and bank and raw_amount):
        st.warning("Name, category, bank and amount are required.")
        return
    try:
        amount = parse_amount(raw_amount)
    except ValueError:
        st.warning("Amount must be a number.")
        return
    draft = ExpenseDraft(
        name=name.strip(),
        date=expense_date,
        category=category,
        bank=bank,
        amount=amount,
        recurring=recurring,
        installments_total=int(installments) if recurring else 1,
    )
    try:
        records = services.add_expense.execute(draft)
    except ExpenseTrackerError as exc:
        st.error(str(exc))
        return
    get_usage_logger().info(f"Expense added: {draft.name} x{len(records)}")
    st.success(f"Saved {len(records)} expense(s).")


def _render_filters(records: Sequence[ExpenseRecord]) -> ExpenseFilters:
    """Render the sidebar filters and return the selected criteria."""
    st.sidebar.header("Filters")
    name = st.sidebar.text_input("Name", placeholder="Search by name...")
    date_range = st.sidebar.date_input("Date range", value=())
    min_amount = st.sidebar.text_input("Min amount")
    max_amount = st.sidebar.text_input("Max amount")
    bank = st.sidebar.selectbox("Bank", [_ALL, *unique_banks(records)])
    category = st.sidebar.selectbox(
        "Category",
        [_ALL, *unique_categories(records)],
    )
    date_from = date_range[0] if len(date_range) > 0 else None
    date_to = date_range[1] if len(date_range) > 1 else None
    return ExpenseFilters(
        name=name,
        date_from=date_from,
        date_to=date_to,
        min_amount=_optional_amount(min_amount),
        max_amount=_optional_amount(max_amount),
        bank="" if bank == _ALL else bank,
        category="" if category == _ALL else category,
    )


def _optional_amount(raw: str) -> Decimal | None:
    if not raw.strip():
        return None
    try:
        return parse_amount(raw)
    except ValueError:
        st.sidebar.warning(f"Ignoring invalid amount {raw!r}")
        return None


def _render_expense_list(
    services: ExpenseServices,
    filters: ExpenseFilters,
) -> list[ExpenseRecord]:
    """Render the sortable expense table and return the shown records."""
    st.subheader("Expense records")
    sort_col, direction_col = st.columns([3, 1])
    sort_field = sort_col.selectbox(
        "Sort by",
        [field.value for field in SortField],
        index=1,
    )
    descending = direction_col.toggle("Descending", value=True)
    records = services.list_expenses.execute(
        filters,
        sort_field=SortField(sort_field),
        descending=descending,
    )
    total = sum((record.amount for record in records), Decimal("0"))
    st.caption(
        f"{len(records)} expenses shown · total {_format_currency(total)}"
    )
    if records:
        st.dataframe(
            _records_table(records),
            width="stretch",
            hide_index=True,
        )
    return records


def _render_edit_panel(
    services: ExpenseServices,
    records: Sequence[ExpenseRecord],
) -> None:
    """Render the edit/delete panel for one selected record."""
    if not records:
        return
    st.subheader("Edit expense")
    by_id = {record.id: record for record in records}
    record = by_id[
        st.selectbox(
            "Expense",
            list(by_id),
            format_func=lambda record_id: _record_label(by_id[record_id]),
        )
    ]

    with st.form(f"edit_{record.id}"):
        name = st.text_input("Name", value=record.name)
        expense_date = st.date_input("Date", value=record.date)
        raw_amount = st.text_input("Amount", value=str(record.amount))
        categories, category_index = _options_with_current(
            services.custom_categories.options(),
            record.category,
        )
        category = st.selectbox(
            "Category",
            categories,
            index=category_index,
            format_func=_category_label,
        )
        banks, bank_index = _options_with_current(
            services.custom_banks.options(),
            record.bank,
        )
        bank = st.selectbox(
            "Bank",
            banks,
            index=bank_index,
            format_func=_bank_label,
        )
        position = total = None
        apply_to_group = False
        if record.recurring:
            position_col, total_col = st.columns(2)
            position = position_col.number_input(
                "Installment",
                min_value=1,
                value=record.current_installment,
                step=1,
            )
            total = total_col.number_input(
                "Installments",
                min_value=1,
                value=record.installments_total,
                step=1,
            )
        if record.is_grouped:
            apply_to_group = st.checkbox(
                "Apply to every installment of this recurring expense",
                value=True,
            )
        save_col, delete_col = st.columns(2)
        save = save_col.form_submit_button("Save")
        delete = delete_col.form_submit_button("Delete")

    try:
        if delete:
            services.delete_expense.execute(record.id)
            get_usage_logger().info(f"Expense deleted: {record.id}")
            st.rerun()
        if save:
            update = ExpenseUpdate(
                name=name if name != record.name else None,
                date=expense_date if expense_date != record.date else None,
                amount=_changed_amount(raw_amount, record.amount),
                category=category if category != record.category else None,
                bank=bank if bank != record.bank else None,
                current_installment=int(position) if position else None,
                installments_total=int(total) if total else None,
            )
            services.update_expense.execute(
                record.id,
                update,
                apply_to_group=apply_to_group,
            )
            get_usage_logger().info(
                f"Expense updated: {record.id} (group={apply_to_group})"
            )
            st.rerun()
    except ValueError:
        st.warning("Amount must be a number.")
    except ExpenseTrackerError as exc:
        st.error(str(exc))


def _options_with_current(options: Sequence, current) -> tuple[list, int]:
    """Return the options with ``current`` replacing its namesake.

    Records keep their own icon and color even when a preset or custom entry
    shares their name, and names no longer offered stay selectable.
    """
    merged = [current if option.name == current.name else option for option in options]
    if current not in merged:
        merged.append(current)
    return merged, merged.index(current)


def _changed_amount(raw: str, current: Decimal) -> Decimal | None:
    amount = parse_amount(raw)
    return amount if amount != current else None


def _render_import_export(services: ExpenseServices) -> None:
    """Render download and upload controls for the whole collection."""
    st.sidebar.header("Import / export")
    pretty = st.sidebar.radio(
        "Export format",
        ["Binary (.pb)", "Text (.pbtxt)"],
    ).startswith("Text")
    suffix = "pbtxt" if pretty else "pb"
    st.sidebar.download_button(
        f"Export {len(services.store)} expenses",
        data=services.export_expenses.execute(pretty=pretty),
        file_name=f"expenses_{date.today().isoformat()}.{suffix}",
        mime="text/plain" if pretty else "application/octet-stream",
    )
    uploaded = st.sidebar.file_uploader(
        "Import",
        type=["pb", "pbtxt", "json"],
    )
    replace = st.sidebar.checkbox("Replace existing expenses")
    if uploaded is not None and st.sidebar.button("Import file"):
        mode = ImportMode.REPLACE if replace else ImportMode.APPEND
        try:
            records = services.import_expenses.execute(
                uploaded.getvalue().decode("utf-8"),
                mode=mode,
            )
        except (ExpenseTrackerError, UnicodeDecodeError) as exc:
            st.sidebar.error(f"Import failed: {exc}")
            return
        get_usage_logger().info(f"Imported {len(records)} expenses")
        st.sidebar.success(f"Imported {len(records)} expenses")


def _render_custom_options(services: ExpenseServices) -> None:
    """Render sidebar controls to add and remove custom banks and categories."""
    st.sidebar.header("Banks and categories")
    with st.sidebar.form("add_category", clear_on_submit=True):
        name = st.text_input("New category")
        icon = st.text_input("Icon", value=DEFAULT_ICON)
        color = st.color_picker("Category color", value=DEFAULT_COLOR)
        if st.form_submit_button("Add category"):
            _add_option(
                services.custom_categories,
                Category(name=name, icon=icon or DEFAULT_ICON, color=color),
            )
    with st.sidebar.form("add_bank", clear_on_submit=True):
        name = st.text_input("New bank")
        color = st.color_picker("Bank color", value=DEFAULT_COLOR)
        if st.form_submit_button("Add bank"):
            _add_option(services.custom_banks, Bank(name=name, color=color))

    custom = [
        *(("category", c.name) for c in services.custom_categories.list_custom()),
        *(("bank", b.name) for b in services.custom_banks.list_custom()),
    ]
    if not custom:
        return
    kind, name = st.sidebar.selectbox(
        "Custom entries",
        custom,
        format_func=lambda entry: f"{entry[1]} ({entry[0]})",
    )
    if st.sidebar.button("Remove entry"):
        use_case = (
            services.custom_categories if kind == "category" else services.custom_banks
        )
        try:
            use_case.delete(name)
        except ExpenseTrackerError as exc:
            st.sidebar.error(str(exc))
            return
        get_usage_logger().info(f"Custom {kind} removed: {name}")
        st.rerun()


def _add_option(use_case, item: Bank | Category) -> None:
    try:
        added = use_case.add(item)
    except ExpenseTrackerError as exc:
        st.sidebar.error(str(exc))
        return
    get_usage_logger().info(f"Custom option added: {added.name}")
    st.sidebar.success(f"Added {added.name}")


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Finance Control", layout="wide")
    st.title("Finance Control")
    st.caption("Manage your expenses and track your financial goals")

    services = _load_services()
    filters = _render_filters(services.store.records)
    _render_import_export(services)
    _render_custom_options(services)

    form_col, overview_col = st.columns(2)
    with form_col:
        _render_expense_form(services)
    with overview_col:
        summary = services.summary.execute(date.today())
        _render_monthly_chart(summary)
        _render_metrics(summary, services)

    records = _render_expense_list(services, filters)
    _render_edit_panel(services, records)


if __name__ == "__main__":  # pragma: no cover
    main()
