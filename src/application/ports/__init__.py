"""Application ports package."""

from .database import DatabaseEnginePort
from .key_value_store import (
    CUSTOM_BANKS_KEY,
    CUSTOM_CATEGORIES_KEY,
    EXPENSES_KEY,
    GOAL_AMOUNT_KEY,
    KeyValueStorePort,
)

__all__ = [
    "DatabaseEnginePort",
    "KeyValueStorePort",
    "EXPENSES_KEY",
    "GOAL_AMOUNT_KEY",
    "CUSTOM_BANKS_KEY",
    "CUSTOM_CATEGORIES_KEY",
]
