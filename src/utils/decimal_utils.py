"""Helpers for Decimal normalization."""

from decimal import ROUND_HALF_UP, Decimal


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from JSON documents or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize(value: Decimal, places: int) -> Decimal:
    """Round a Decimal half away from zero to a fixed number of places.

    Args:
        value: Value to round.
        places: Number of decimal places to keep.

    Returns:
        Decimal: Rounded value. Negative zero is folded to zero.
    """
    exponent = Decimal(1).scaleb(-places)
    rounded = coerce_decimal(value).quantize(exponent, rounding=ROUND_HALF_UP)
    if rounded.is_zero():
        return abs(rounded)
    return rounded


__all__ = ["coerce_decimal", "quantize"]
