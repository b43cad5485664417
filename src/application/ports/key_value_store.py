"""Port for the persistent key-value store backing the tracker."""

from typing import Protocol


EXPENSES_KEY = "expenses"
GOAL_AMOUNT_KEY = "goal_amount"
CUSTOM_BANKS_KEY = "custom_banks"
CUSTOM_CATEGORIES_KEY = "custom_categories"


class KeyValueStorePort(Protocol):
    """Synchronous string key-value store.

    Values are opaque serialized blobs; the application decides the format.
    """

    def get(self, key: str) -> str | None:
        """Return the value stored under ``key``, or None when absent."""

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""


__all__ = [
    "EXPENSES_KEY",
    "GOAL_AMOUNT_KEY",
    "CUSTOM_BANKS_KEY",
    "CUSTOM_CATEGORIES_KEY",
    "KeyValueStorePort",
]
