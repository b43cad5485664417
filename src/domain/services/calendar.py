"""Calendar helpers for installment scheduling."""

import calendar
from datetime import date


def add_months(value: date, months: int) -> date:
    """Advance a date by a number of calendar months.

    The day-of-month is kept when the target month has it, otherwise it is
    clamped to the last day of that month (Jan 31 + 1 month is Feb 28/29).

    Args:
        value: Anchor date.
        months: Number of months to add; may be negative.

    Returns:
        date: The shifted calendar date.
    """
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(value.day, last_day))


def month_key(value: date) -> tuple[int, int]:
    """Return the ``(year, month)`` bucket of a date."""
    return value.year, value.month


__all__ = ["add_months", "month_key"]
