"""Domain validation helpers."""

from decimal import Decimal
from logging import Logger
import re

from src.domain.errors import MalformedSnapshotError


MONTH_KEY_PATTERN = re.compile(r"^(\d{4})-(0[1-9]|1[0-2])$")


def validate_month_key(month: str) -> str:
    """Ensure a month key is a zero-padded ``YYYY-MM`` string.

    Args:
        month: Raw month key.

    Returns:
        str: The validated month key.

    Raises:
        MalformedSnapshotError: If the key does not match ``YYYY-MM``.
    """
    if not isinstance(month, str) or not MONTH_KEY_PATTERN.match(month):
        raise MalformedSnapshotError(
            f"Invalid month key {month!r}. Expected format YYYY-MM."
        )
    return month


def months_between(earlier: str, later: str) -> int:
    """Return the number of calendar months from ``earlier`` to ``later``."""
    earlier_year, earlier_month = (int(part) for part in earlier.split("-"))
    later_year, later_month = (int(part) for part in later.split("-"))
    return (later_year - earlier_year) * 12 + (later_month - earlier_month)


def validate_balance_sign(
    category: str,
    balance: Decimal,
    *,
    is_liability: bool,
    logger: Logger,
) -> None:
    """Warn when balances violate expected sign conventions.

    Assets are expected to be non-negative. Liabilities are recorded as
    positive amounts owed; negative ones are kept as magnitudes.

    Args:
        category: Resolved category of the entry.
        balance: Raw balance amount.
        is_liability: Whether the category is a liability bucket.
        logger: Logger used for warnings.
    """
    if not is_liability and balance < 0:
        logger.warning(
            f"Asset balance is negative for category={category}: {balance}"
        )
    if is_liability and balance < 0:
        logger.warning(
            f"Liability balance is negative for category={category}: "
            f"{balance}, using its magnitude"
        )


__all__ = [
    "MONTH_KEY_PATTERN",
    "validate_month_key",
    "months_between",
    "validate_balance_sign",
]
