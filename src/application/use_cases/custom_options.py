"""Use cases to manage the banks and categories offered by the forms.

The presets are always available; users add their own entries on top of
them. Custom entries are persisted next to the expenses and deleting one
does not touch the expenses that already use it.
"""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import replace

from src.application.ports.key_value_store import (
    CUSTOM_BANKS_KEY,
    CUSTOM_CATEGORIES_KEY,
    KeyValueStorePort,
)
from src.domain.constants import BANK_PRESETS, CATEGORY_PRESETS
from src.domain.errors import ValidationError
from src.domain.models.expenses import Bank, Category
from src.domain.services.serialization import (
    dump_banks,
    dump_categories,
    load_banks,
    load_categories,
)
from src.infrastructure.logging.logger import get_app_logger


class _CustomOptionsUseCase:
    """List, add and delete user-defined options stored under one key."""

    _key = ""
    _kind = ""
    _presets: Sequence = ()
    _load: Callable[[str], list]
    _dump: Callable[[Iterable], str]

    def __init__(self, kv_store: KeyValueStorePort, logger=None) -> None:
        """Initialize the use case.

        Args:
            kv_store: Persistence backend.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._kv_store = kv_store
        self._logger = logger or get_app_logger()

    def list_custom(self) -> list:
        """Return the user-defined entries in insertion order."""
        raw = self._kv_store.get(self._key)
        return self._load(raw) if raw else []

    def options(self) -> list:
        """Return the presets followed by the user-defined entries."""
        return [*self._presets, *self.list_custom()]

    def find(self, name: str):
        """Return the option called ``name``, or None."""
        return next((item for item in self.options() if item.name == name), None)

    def add(self, item):
        """Store a new entry.

        Raises:
            ValidationError: If the name is blank or already offered,
                ignoring case.
        """
        name = item.name.strip()
        if not name:
            raise ValidationError(f"{self._kind.capitalize()} name is required")
        if any(o.name.casefold() == name.casefold() for o in self.options()):
            raise ValidationError(
                f"{self._kind.capitalize()} {name!r} already exists"
            )
        item = replace(item, name=name)
        self._kv_store.set(self._key, self._dump([*self.list_custom(), item]))
        self._logger.info(f"Added custom {self._kind} '{name}'")
        return item

    def delete(self, name: str) -> None:
        """Remove a user-defined entry.

        Raises:
            ValidationError: If ``name`` is not a custom entry; presets
                cannot be deleted.
        """
        custom = self.list_custom()
        remaining = [item for item in custom if item.name != name]
        if len(remaining) == len(custom):
            raise ValidationError(f"No custom {self._kind} named {name!r}")
        self._kv_store.set(self._key, self._dump(remaining))
        self._logger.info(f"Deleted custom {self._kind} '{name}'")


class CustomBanksUseCase(_CustomOptionsUseCase):
    """Banks offered by the expense form."""

    _key = CUSTOM_BANKS_KEY
    _kind = "bank"
    _presets: Sequence[Bank] = BANK_PRESETS
    _load = staticmethod(load_banks)
    _dump = staticmethod(dump_banks)


class CustomCategoriesUseCase(_CustomOptionsUseCase):
    """Categories offered by the expense form."""

    _key = CUSTOM_CATEGORIES_KEY
    _kind = "category"
    _presets: Sequence[Category] = CATEGORY_PRESETS
    _load = staticmethod(load_categories)
    _dump = staticmethod(dump_categories)


__all__ = ["CustomBanksUseCase", "CustomCategoriesUseCase"]
