"""Use case to read and change the monthly budget goal."""

from decimal import Decimal, InvalidOperation

from src.application.ports.key_value_store import GOAL_AMOUNT_KEY, KeyValueStorePort
from src.domain.errors import ValidationError
from src.infrastructure.logging.logger import get_app_logger


DEFAULT_GOAL_AMOUNT = Decimal("5000")


class BudgetGoalUseCase:
    """Persist the monthly budget goal next to the expenses."""

    def __init__(
        self,
        kv_store: KeyValueStorePort,
        default_goal: Decimal = DEFAULT_GOAL_AMOUNT,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            kv_store: Persistence backend.
            default_goal: Goal returned when none has been stored yet.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._kv_store = kv_store
        self._default_goal = default_goal
        self._logger = logger or get_app_logger()

    def get(self) -> Decimal:
        """Return the stored goal, or the default when unset or unreadable."""
        raw = self._kv_store.get(GOAL_AMOUNT_KEY)
        if raw is None:
            return self._default_goal
        try:
            return Decimal(raw)
        except InvalidOperation:
            self._logger.warning(
                f"Stored goal amount {raw!r} is invalid; using default"
            )
            return self._default_goal

    def set(self, amount: Decimal) -> Decimal:
        """Store a new goal.

        Raises:
            ValidationError: If ``amount`` is negative or not finite.
        """
        if not amount.is_finite() or amount < 0:
            raise ValidationError(f"Invalid goal amount: {amount}")
        self._kv_store.set(GOAL_AMOUNT_KEY, str(amount))
        self._logger.info(f"Budget goal set to {amount}")
        return amount


__all__ = ["BudgetGoalUseCase", "DEFAULT_GOAL_AMOUNT"]
