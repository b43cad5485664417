"""Use cases to export and import the expense collection."""

from collections.abc import Callable
from datetime import datetime
from enum import Enum

from src.application.record_store import ExpenseRecordStore
from src.domain.models.expenses import ExpenseRecord
from src.domain.services.serialization import (
    build_export_document,
    dumps_export_document,
    parse_export_document,
)
from src.infrastructure.logging.logger import get_app_logger


class ImportMode(str, Enum):
    """How imported records combine with the stored ones."""

    APPEND = "append"
    REPLACE = "replace"


class ExportExpensesUseCase:
    """Serialize every stored expense into a versioned document."""

    def __init__(
        self,
        store: ExpenseRecordStore,
        logger=None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._store = store
        self._logger = logger or get_app_logger()
        self._clock = clock

    def execute(self, pretty: bool = False) -> str:
        """Return the export document.

        Args:
            pretty: Indent the document for reading; otherwise compact.

        Returns:
            str: JSON export document.
        """
        records = self._store.query()
        document = build_export_document(records, self._clock())
        self._logger.info(f"Exported {len(records)} expenses")
        return dumps_export_document(document, pretty=pretty)


class ImportExpensesUseCase:
    """Load an export document into the store."""

    def __init__(self, store: ExpenseRecordStore, logger=None) -> None:
        self._store = store
        self._logger = logger or get_app_logger()

    def execute(
        self,
        text: str,
        mode: ImportMode = ImportMode.APPEND,
    ) -> list[ExpenseRecord]:
        """Import the records of an export document.

        Args:
            text: Export document contents.
            mode: Append to or replace the stored collection.

        Returns:
            list[ExpenseRecord]: The imported records.

        Raises:
            ValidationError: If the document is malformed.
            DuplicateIdError: If appending would repeat an id.
        """
        records = parse_export_document(text)
        if mode == ImportMode.REPLACE:
            self._store.replace_all(records)
        else:
            self._store.insert_many(records)
        self._logger.info(f"Imported {len(records)} expenses ({mode.value})")
        return records


__all__ = ["ImportMode", "ExportExpensesUseCase", "ImportExpensesUseCase"]
