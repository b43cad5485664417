"""Domain models for expense records."""

from dataclasses import dataclass, fields, replace
import datetime as dt
from decimal import Decimal
from typing import Any


NUMBERING_FIELDS = ("installments_total", "current_installment")
DEFAULT_COLOR = "#3b82f6"
DEFAULT_ICON = "💰"


@dataclass(frozen=True)
class Category:
    """Expense category.

    Attributes:
        name: Category label, used as the filter key.
        icon: Display icon (usually an emoji).
        color: Display color as a hex string.
    """

    name: str
    icon: str = DEFAULT_ICON
    color: str = DEFAULT_COLOR


@dataclass(frozen=True)
class Bank:
    """Bank or payment method an expense was charged to."""

    name: str
    color: str = DEFAULT_COLOR


@dataclass(frozen=True)
class ExpenseRecord:
    """A single stored expense, possibly one installment of a group.

    Attributes:
        id: Unique identifier, immutable after creation.
        name: Display label.
        date: Calendar date the expense applies to.
        category: Category of the expense.
        bank: Bank the expense was charged to.
        amount: Monetary value.
        recurring: Whether the expense was submitted as recurring.
        installments_total: Number of installments in the series.
        current_installment: Position of this record within its group.
        recurring_group: Token shared by the installments of one
            submission; empty for ungrouped records.
        created_at: Creation timestamp, display only.
    """

    id: str
    name: str
    date: dt.date
    category: Category
    bank: Bank
    amount: Decimal
    recurring: bool = False
    installments_total: int = 1
    current_installment: int = 1
    recurring_group: str = ""
    created_at: dt.datetime | None = None

    @property
    def is_grouped(self) -> bool:
        """Return True when the record belongs to a recurring group."""
        return self.recurring and bool(self.recurring_group)

    @property
    def is_last_installment(self) -> bool:
        return self.current_installment == self.installments_total

    @property
    def installment_label(self) -> str:
        """Return a ``current/total`` label for recurring records."""
        if not self.recurring:
            return ""
        return f"{self.current_installment}/{self.installments_total}"


@dataclass(frozen=True)
class ExpenseDraft:
    """Validated form input for a new expense."""

    name: str
    date: dt.date
    category: Category
    bank: Bank
    amount: Decimal
    recurring: bool = False
    installments_total: int = 1


@dataclass(frozen=True)
class ExpenseUpdate:
    """Partial update of an expense; ``None`` fields are left unchanged."""

    name: str | None = None
    date: dt.date | None = None
    category: Category | None = None
    bank: Bank | None = None
    amount: Decimal | None = None
    recurring: bool | None = None
    installments_total: int | None = None
    current_installment: int | None = None

    def changes(self) -> dict[str, Any]:
        """Return the fields set on this update."""
        return {
            item.name: getattr(self, item.name)
            for item in fields(self)
            if getattr(self, item.name) is not None
        }

    def field_changes(self) -> dict[str, Any]:
        """Return the set fields, excluding installment numbering."""
        return {
            key: value
            for key, value in self.changes().items()
            if key not in NUMBERING_FIELDS
        }

    def without_numbering(self) -> "ExpenseUpdate":
        return ExpenseUpdate(**self.field_changes())

    def apply_to(self, record: ExpenseRecord) -> ExpenseRecord:
        """Return a copy of ``record`` with the set fields replaced."""
        changes = self.changes()
        if not changes:
            return record
        return replace(record, **changes)

    @property
    def is_empty(self) -> bool:
        return not self.changes()


@dataclass(frozen=True)
class ExpenseFilters:
    """Transient query over stored expenses.

    Empty values disable the corresponding criterion. Ranges are inclusive.
    """

    name: str = ""
    date_from: dt.date | None = None
    date_to: dt.date | None = None
    min_amount: Decimal | None = None
    max_amount: Decimal | None = None
    bank: str = ""
    category: str = ""

    @property
    def is_active(self) -> bool:
        return any(
            (
                self.name,
                self.date_from,
                self.date_to,
                self.min_amount is not None,
                self.max_amount is not None,
                self.bank,
                self.category,
            )
        )

    def matches(self, record: ExpenseRecord) -> bool:
        """Return True when ``record`` satisfies every active criterion."""
        needle = self.name.strip().lower()
        if needle and needle not in record.name.lower():
            return False
        if self.date_from and record.date < self.date_from:
            return False
        if self.date_to and record.date > self.date_to:
            return False
        if self.min_amount is not None and record.amount < self.min_amount:
            return False
        if self.max_amount is not None and record.amount > self.max_amount:
            return False
        if self.bank and record.bank.name != self.bank:
            return False
        if self.category and record.category.name != self.category:
            return False
        return True


__all__ = [
    "NUMBERING_FIELDS",
    "DEFAULT_COLOR",
    "DEFAULT_ICON",
    "Category",
    "Bank",
    "ExpenseRecord",
    "ExpenseDraft",
    "ExpenseUpdate",
    "ExpenseFilters",
]
