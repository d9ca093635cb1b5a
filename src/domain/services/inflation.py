"""Domain services for HICP-based inflation normalization."""

from decimal import Decimal

from src.domain.constants import INDEX_PLACES
from src.domain.errors import MalformedSnapshotError, MissingIndexError
from src.domain.models import RealWealthRecord, Settings
from src.utils.decimal_utils import quantize


def check_inflation_index(
    month: str,
    index: Decimal | None,
    settings: Settings,
) -> Decimal | None:
    """Validate the month's index against the inflation settings.

    Args:
        month: Month key, used in error messages.
        index: HICP value of the month, if any.
        settings: Pipeline settings.

    Returns:
        Decimal | None: The index to use, or None when inflation is off.

    Raises:
        MissingIndexError: If inflation is enabled and the index is absent.
        MalformedSnapshotError: If the index is not strictly positive.
    """
    if not settings.inflation.enabled:
        return None
    if index is None:
        raise MissingIndexError(month)
    if index <= 0:
        raise MalformedSnapshotError(
            f"Inflation index for {month} must be positive: {index}"
        )
    return index


def compute_deflator(base_value: Decimal, index: Decimal | None) -> Decimal:
    """Return ``base_value / index``, or ``1`` without an index.

    A deflator below one means prices rose since the baseline period.
    """
    if index is None:
        return Decimal("1")
    return base_value / index


def monthly_inflation_rate(
    index: Decimal | None,
    previous_index: Decimal | None,
    places: int,
) -> Decimal:
    """Return the month-over-month inflation rate of consecutive indices."""
    if index is None or previous_index is None or previous_index == 0:
        return Decimal("0")
    return quantize(index / previous_index - 1, places)


def normalize_inflation(
    net_worth: Decimal,
    index: Decimal | None,
    previous_real: Decimal | None,
    settings: Settings,
) -> RealWealthRecord:
    """Compute real net worth and its change versus the previous month.

    Args:
        net_worth: Nominal net worth of the month, in base currency.
        index: Checked HICP value (None when inflation is disabled).
        previous_real: Real net worth of the previous month, if any.
        settings: Pipeline settings.

    Returns:
        RealWealthRecord: Deflator, real net worth and percent change.
    """
    deflator = compute_deflator(settings.inflation.base_value, index)
    net_worth_real = quantize(net_worth * deflator, settings.money_places)
    if previous_real is None or previous_real == 0:
        change = Decimal("0")
    else:
        change = quantize(
            (net_worth_real - previous_real) / previous_real,
            settings.ratio_places,
        )
    return RealWealthRecord(
        deflator=quantize(deflator, INDEX_PLACES),
        net_worth_real=net_worth_real,
        change_pct_from_prev=change,
    )


__all__ = [
    "check_inflation_index",
    "compute_deflator",
    "monthly_inflation_rate",
    "normalize_inflation",
]
