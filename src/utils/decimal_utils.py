"""Helpers for Decimal normalization."""

from decimal import Decimal

ZERO = Decimal("0")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL, JSON payloads or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def sum_amounts(values) -> Decimal:
    """Sum Decimal amounts, returning zero for an empty iterable."""
    return sum(values, ZERO)


def percentage_of(part: Decimal, whole: Decimal) -> Decimal:
    """Return ``part`` as a percentage of ``whole``.

    Args:
        part: Amount to express as a share.
        whole: Reference total.

    Returns:
        Decimal: Percentage value, or zero when ``whole`` is zero.
    """
    if whole == 0:
        return ZERO
    return part / whole * Decimal("100")


__all__ = ["ZERO", "coerce_decimal", "sum_amounts", "percentage_of"]
