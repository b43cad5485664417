"""Tests for the import and export use cases."""

from datetime import date, datetime
from decimal import Decimal
import json
from unittest.mock import MagicMock

import pytest

from src.application.record_store import ExpenseRecordStore
from src.application.use_cases.import_export import (
    ExportExpensesUseCase,
    ImportExpensesUseCase,
    ImportMode,
)
from src.domain.errors import DuplicateIdError, ValidationError
from src.domain.models.expenses import Bank, Category, ExpenseRecord
from src.infrastructure.key_value_store import InMemoryKeyValueStore


def _record(record_id: str) -> ExpenseRecord:
    return ExpenseRecord(
        id=record_id,
        name="Book",
        date=date(2024, 6, 1),
        category=Category(name="Culture"),
        bank=Bank(name="Card"),
        amount=Decimal("15.99"),
    )


def _store(*records: ExpenseRecord) -> ExpenseRecordStore:
    store = ExpenseRecordStore(InMemoryKeyValueStore(), logger=MagicMock())
    store.insert_many(records)
    return store


def _export(store: ExpenseRecordStore, pretty: bool = False) -> str:
    return ExportExpensesUseCase(
        store,
        logger=MagicMock(),
        clock=lambda: datetime(2024, 6, 30),
    ).execute(pretty=pretty)


def test_export_produces_versioned_document() -> None:
    """Exports include every record plus version metadata."""
    document = json.loads(_export(_store(_record("a"), _record("b")), pretty=True))

    assert document["version"] == "1.0"
    assert document["exportedAt"] == "2024-06-30T00:00:00"
    assert [e["id"] for e in document["expenses"]] == ["a", "b"]


def test_import_appends_by_default() -> None:
    """Imported records are appended after the existing ones."""
    content = _export(_store(_record("b")))
    target = _store(_record("a"))

    imported = ImportExpensesUseCase(target, logger=MagicMock()).execute(content)

    assert [r.id for r in imported] == ["b"]
    assert [r.id for r in target.records] == ["a", "b"]


def test_import_replace_mode_swaps_collection() -> None:
    """Replace mode discards the current records."""
    content = _export(_store(_record("b")))
    target = _store(_record("a"))

    ImportExpensesUseCase(target, logger=MagicMock()).execute(
        content,
        mode=ImportMode.REPLACE,
    )

    assert [r.id for r in target.records] == ["b"]


def test_import_append_rejects_colliding_ids() -> None:
    """Appending a record whose id exists fails without changes."""
    content = _export(_store(_record("a")))
    target = _store(_record("a"))

    with pytest.raises(DuplicateIdError):
        ImportExpensesUseCase(target, logger=MagicMock()).execute(content)

    assert len(target) == 1


def test_import_rejects_malformed_documents() -> None:
    """Invalid files raise ValidationError."""
    target = _store()

    with pytest.raises(ValidationError):
        ImportExpensesUseCase(target, logger=MagicMock()).execute("{}")
