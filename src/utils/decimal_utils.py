"""Helpers for Decimal normalization."""

from decimal import Decimal, InvalidOperation


CENT = Decimal("0.01")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from storage, an import or a form.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def parse_amount(raw: str) -> Decimal:
    """Parse user input into a monetary amount.

    Commas are accepted as decimal separators. The result is rounded to
    cents.

    Raises:
        ValueError: If ``raw`` is not a finite number.
    """
    cleaned = raw.strip().replace(",", ".")
    try:
        amount = Decimal(cleaned)
    except InvalidOperation as exc:
        raise ValueError(f"Invalid amount: {raw!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {raw!r}")
    return amount.quantize(CENT)


__all__ = ["CENT", "coerce_decimal", "parse_amount"]
