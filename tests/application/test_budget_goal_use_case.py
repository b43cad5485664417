"""Tests for the BudgetGoalUseCase."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.application.ports.key_value_store import GOAL_AMOUNT_KEY
from src.application.use_cases.budget_goal import (
    DEFAULT_GOAL_AMOUNT,
    BudgetGoalUseCase,
)
from src.domain.errors import ValidationError
from src.infrastructure.key_value_store import InMemoryKeyValueStore


def test_get_returns_default_when_unset() -> None:
    """The default goal applies until the user sets one."""
    use_case = BudgetGoalUseCase(InMemoryKeyValueStore(), logger=MagicMock())

    assert use_case.get() == DEFAULT_GOAL_AMOUNT


def test_set_persists_goal() -> None:
    """A new goal is written under its own key."""
    kv_store = InMemoryKeyValueStore()
    use_case = BudgetGoalUseCase(kv_store, logger=MagicMock())

    use_case.set(Decimal("3200.50"))

    assert kv_store.get(GOAL_AMOUNT_KEY) == "3200.50"
    assert use_case.get() == Decimal("3200.50")


def test_set_rejects_negative_goal() -> None:
    """Negative goals raise ValidationError and are not stored."""
    kv_store = InMemoryKeyValueStore()
    use_case = BudgetGoalUseCase(kv_store, logger=MagicMock())

    with pytest.raises(ValidationError):
        use_case.set(Decimal("-1"))

    assert kv_store.get(GOAL_AMOUNT_KEY) is None


def test_get_falls_back_on_corrupt_value() -> None:
    """Unreadable stored goals log a warning and use the default."""
    logger = MagicMock()
    use_case = BudgetGoalUseCase(
        InMemoryKeyValueStore({GOAL_AMOUNT_KEY: "lots"}),
        default_goal=Decimal("100"),
        logger=logger,
    )

    assert use_case.get() == Decimal("100")
    logger.warning.assert_called_once()
