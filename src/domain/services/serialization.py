"""Lossless (de)serialization of expense records.

Dates are written as ISO calendar dates (``YYYY-MM-DD``) so a record never
moves to another day or month when read back in a different timezone.
Amounts are written as decimal strings.
"""

from collections.abc import Iterable, Mapping
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
import json
from typing import Any

from src.domain.errors import ValidationError
from src.domain.models.expenses import (
    DEFAULT_COLOR,
    DEFAULT_ICON,
    Bank,
    Category,
    ExpenseRecord,
)
from src.utils.decimal_utils import coerce_decimal


EXPORT_VERSION = "1.0"
SUPPORTED_VERSIONS = ("1.0",)


def record_to_dict(record: ExpenseRecord) -> dict[str, Any]:
    """Convert a record to a JSON-ready mapping."""
    return {
        "id": record.id,
        "name": record.name,
        "date": record.date.isoformat(),
        "category": category_to_dict(record.category),
        "bank": bank_to_dict(record.bank),
        "amount": str(record.amount),
        "recurring": record.recurring,
        "installmentsTotal": record.installments_total,
        "currentInstallment": record.current_installment,
        "recurringGroup": record.recurring_group,
        "createdAt": record.created_at.isoformat() if record.created_at else None,
    }


def record_from_dict(data: Mapping[str, Any]) -> ExpenseRecord:
    """Build a record from a mapping.

    Besides the native layout, entries exported by the earlier web version
    (flat ``tag``/``tagColor``/``tagIcon``/``bankColor``/``value``/
    ``installments`` keys) are accepted.

    Raises:
        ValidationError: When a required key is missing or malformed.
    """
    try:
        record_id = str(data["id"])
        name = str(data["name"])
        raw_category = data.get("category", data.get("tag"))
        raw_bank = data["bank"]
        raw_amount = data.get("amount", data.get("value"))
        raw_date = data["date"]
    except KeyError as exc:
        raise ValidationError(f"Expense entry is missing {exc.args[0]!r}") from exc
    if raw_category is None or raw_amount is None:
        raise ValidationError(f"Expense entry {record_id} is incomplete")

    if isinstance(raw_category, Mapping):
        category = Category(
            name=str(raw_category.get("name", "")),
            icon=str(raw_category.get("icon", "")),
            color=str(raw_category.get("color", "")),
        )
    else:
        category = Category(
            name=str(raw_category),
            icon=str(data.get("tagIcon", "")),
            color=str(data.get("tagColor", "")),
        )
    if isinstance(raw_bank, Mapping):
        bank = Bank(
            name=str(raw_bank.get("name", "")),
            color=str(raw_bank.get("color", "")),
        )
    else:
        bank = Bank(name=str(raw_bank), color=str(data.get("bankColor", "")))

    recurring = bool(data.get("recurring", False))
    installments_total = _parse_int(
        data.get("installmentsTotal", data.get("installments", 1)),
        "installmentsTotal",
    )
    current_installment = _parse_int(
        data.get("currentInstallment", 1),
        "currentInstallment",
    )
    if not 1 <= current_installment <= max(installments_total, 1):
        raise ValidationError(
            f"Expense {record_id} holds installment "
            f"{current_installment}/{installments_total}"
        )
    return ExpenseRecord(
        id=record_id,
        name=name,
        date=_parse_date(raw_date),
        category=category,
        bank=bank,
        amount=_parse_amount(raw_amount),
        recurring=recurring,
        installments_total=installments_total,
        current_installment=current_installment,
        recurring_group=str(data.get("recurringGroup") or ""),
        created_at=_parse_datetime(data.get("createdAt")),
    )


def category_to_dict(category: Category) -> dict[str, str]:
    return {"name": category.name, "icon": category.icon, "color": category.color}


def bank_to_dict(bank: Bank) -> dict[str, str]:
    return {"name": bank.name, "color": bank.color}


def category_from_dict(data: Mapping[str, Any]) -> Category:
    """Build a category, filling in the default icon and color."""
    name = str(data.get("name") or "").strip()
    if not name:
        raise ValidationError(f"Category entry has no name: {dict(data)!r}")
    return Category(
        name=name,
        icon=str(data.get("icon") or DEFAULT_ICON),
        color=str(data.get("color") or DEFAULT_COLOR),
    )


def bank_from_dict(data: Mapping[str, Any]) -> Bank:
    """Build a bank, filling in the default color."""
    name = str(data.get("name") or "").strip()
    if not name:
        raise ValidationError(f"Bank entry has no name: {dict(data)!r}")
    return Bank(name=name, color=str(data.get("color") or DEFAULT_COLOR))


def dump_banks(banks: Iterable[Bank]) -> str:
    return json.dumps([bank_to_dict(bank) for bank in banks], ensure_ascii=False)


def load_banks(blob: str) -> list[Bank]:
    return [bank_from_dict(item) for item in _load_list(blob, "banks")]


def dump_categories(categories: Iterable[Category]) -> str:
    return json.dumps(
        [category_to_dict(category) for category in categories],
        ensure_ascii=False,
    )


def load_categories(blob: str) -> list[Category]:
    return [category_from_dict(item) for item in _load_list(blob, "categories")]


def dump_records(records: Iterable[ExpenseRecord]) -> str:
    """Serialize records for the key-value store."""
    return json.dumps([record_to_dict(record) for record in records])


def load_records(blob: str) -> list[ExpenseRecord]:
    """Deserialize records written by ``dump_records``."""
    try:
        data = json.loads(blob)
    except json.JSONDecodeError as exc:
        raise ValidationError(f"Stored expenses are not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise ValidationError("Stored expenses must be a list")
    return [record_from_dict(item) for item in data]


def build_export_document(
    records: Iterable[ExpenseRecord],
    exported_at: datetime,
) -> dict[str, Any]:
    """Wrap records in a versioned export document."""
    return {
        "version": EXPORT_VERSION,
        "exportedAt": exported_at.isoformat(),
        "expenses": [record_to_dict(record) for record in records],
    }


def dumps_export_document(document: Mapping[str, Any], pretty: bool) -> str:
    """Render an export document as compact or indented JSON."""
    if pretty:
        return json.dumps(document, indent=2, ensure_ascii=False)
    return json.dumps(document, separators=(",", ":"), ensure_ascii=False)


def parse_export_document(text: str) -> list[ExpenseRecord]:
    """Parse an export document into records.

    Raises:
        ValidationError: On invalid JSON, an unsupported version, or a
            missing or malformed ``expenses`` list.
    """
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValidationError(f"Invalid export document: {exc}") from exc
    if not isinstance(document, Mapping):
        raise ValidationError("Export document must be an object")
    version = str(document.get("version", EXPORT_VERSION))
    if version not in SUPPORTED_VERSIONS:
        raise ValidationError(f"Unsupported export version: {version}")
    expenses = document.get("expenses")
    if not isinstance(expenses, list):
        raise ValidationError("Export document has no expenses list")
    return [record_from_dict(item) for item in expenses]


def _load_list(blob: str, what: str) -> list[Mapping[str, Any]]:
    try:
        data = json.loads(blob)
    except json.JSONDecodeError as exc:
        raise ValidationError(f"Stored {what} are not valid JSON: {exc}") from exc
    if not isinstance(data, list) or not all(
        isinstance(item, Mapping) for item in data
    ):
        raise ValidationError(f"Stored {what} must be a list of objects")
    return data


def _parse_date(value: Any) -> date:
    """Parse a calendar date.

    Legacy exports stored local midnight as a UTC timestamp
    (``2024-01-14T23:00:00.000Z`` for Jan 15 in UTC+1). Timezone-aware
    timestamps are therefore converted to the local timezone before the
    calendar day is taken; naive timestamps keep their own day.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value)
    if len(text) > 10:
        moment = _parse_datetime(text)
        if moment.tzinfo is not None:
            moment = moment.astimezone()
        return moment.date()
    try:
        return date.fromisoformat(text)
    except ValueError as exc:
        raise ValidationError(f"Invalid date: {value!r}") from exc


def _parse_datetime(value: Any) -> datetime | None:
    if not value:
        return None
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise ValidationError(f"Invalid timestamp: {value!r}") from exc


def _parse_amount(value: Any) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError(f"Invalid amount: {value!r}")
    try:
        amount = coerce_decimal(value)
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"Invalid amount: {value!r}") from exc
    if not amount.is_finite():
        raise ValidationError(f"Invalid amount: {value!r}")
    return amount


def _parse_int(value: Any, key: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid {key}: {value!r}") from exc
    if number < 1:
        raise ValidationError(f"Invalid {key}: {value!r}")
    return number


__all__ = [
    "EXPORT_VERSION",
    "SUPPORTED_VERSIONS",
    "record_to_dict",
    "record_from_dict",
    "bank_to_dict",
    "bank_from_dict",
    "category_to_dict",
    "category_from_dict",
    "dump_banks",
    "load_banks",
    "dump_categories",
    "load_categories",
    "dump_records",
    "load_records",
    "build_export_document",
    "dumps_export_document",
    "parse_export_document",
]
