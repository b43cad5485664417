"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
import os

import dotenv

from src.infrastructure.logging.logger import get_app_logger
from src.utils.utils import get_project_root


SUPPORTED_BACKENDS = ("sqlalchemy", "memory")
DEFAULT_GOAL = Decimal("5000")


def _default_db_url() -> str:
    return f"sqlite:///{get_project_root() / 'data' / 'expenses.db'}"


@dataclass(frozen=True)
class AppSettings:
    """Settings for the expense tracker.

    Attributes:
        backend: Persistence backend identifier (sqlalchemy or memory).
        db_url: Database URL used by the sqlalchemy backend.
        default_goal: Budget goal used until the user sets one.
    """

    backend: str = "sqlalchemy"
    db_url: str = ""
    default_goal: Decimal = DEFAULT_GOAL

    @classmethod
    def from_env(cls) -> "AppSettings":
        """Build settings from environment variables and a ``.env`` file.

        Returns:
            AppSettings: Settings sourced from environment variables.

        Raises:
            ValueError: If ``EXPENSES_BACKEND`` names an unknown backend.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        backend = os.getenv("EXPENSES_BACKEND", "sqlalchemy").strip().lower()
        if backend not in SUPPORTED_BACKENDS:
            raise ValueError(
                f"Unsupported expenses backend: {backend}. "
                f"Expected one of {', '.join(SUPPORTED_BACKENDS)}."
            )
        db_url = (os.getenv("EXPENSES_DB_URL") or "").strip() or _default_db_url()
        default_goal = cls._parse_goal(
            os.getenv("EXPENSES_DEFAULT_GOAL"),
            logger=logger,
        )
        return cls(backend=backend, db_url=db_url, default_goal=default_goal)

    @staticmethod
    def _parse_goal(raw_goal: str | None, logger) -> Decimal:
        """Parse the default goal, falling back on invalid input.

        Args:
            raw_goal: Raw environment value.
            logger: Logger used for warnings.

        Returns:
            Decimal: Parsed goal or the built-in default.
        """
        if not raw_goal:
            return DEFAULT_GOAL
        try:
            goal = Decimal(raw_goal.strip())
        except InvalidOperation:
            logger.warning(
                f"Invalid EXPENSES_DEFAULT_GOAL {raw_goal!r}; using {DEFAULT_GOAL}"
            )
            return DEFAULT_GOAL
        if not goal.is_finite() or goal < 0:
            logger.warning(
                f"Invalid EXPENSES_DEFAULT_GOAL {raw_goal!r}; using {DEFAULT_GOAL}"
            )
            return DEFAULT_GOAL
        return goal


__all__ = ["AppSettings", "SUPPORTED_BACKENDS"]
