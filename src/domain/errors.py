"""Domain errors raised by the expense store and recurrence engine.

All errors are synchronous and non-retryable: they signal bad input or a
programming mistake, never a transient condition. Callers surface the message
and leave the prior state untouched.
"""


class ExpenseTrackerError(Exception):
    """Base class for expense tracker domain errors."""


class ValidationError(ExpenseTrackerError):
    """Raised when a draft, update or imported document is malformed."""


class DuplicateIdError(ExpenseTrackerError):
    """Raised when inserting a record whose id already exists."""

    def __init__(self, record_id: str) -> None:
        super().__init__(f"Duplicate expense id: {record_id}")
        self.record_id = record_id


class NotFoundError(ExpenseTrackerError):
    """Raised when an operation references an unknown expense id."""

    def __init__(self, record_id: str) -> None:
        super().__init__(f"Expense not found: {record_id}")
        self.record_id = record_id


class InvariantViolation(ExpenseTrackerError):
    """Raised when a group mutation would leave inconsistent numbering."""


__all__ = [
    "ExpenseTrackerError",
    "ValidationError",
    "DuplicateIdError",
    "NotFoundError",
    "InvariantViolation",
]
