"""Cost-of-living (ECLI) normalization relative to New York."""

from decimal import Decimal
from logging import Logger

from src.domain.constants import (
    ECLI_NORM_LOW_THRESHOLD,
    INDEX_PLACES,
    PURCHASING_POWER_CHAINED,
    PURCHASING_POWER_SCALE_HIGH_THRESHOLD,
)
from src.domain.models import (
    EcliIndices,
    LocationAdjustment,
    PurchasingPower,
    Settings,
    SnapshotWarning,
)
from src.utils.decimal_utils import quantize


def compute_ecli_norm(ecli: EcliIndices, settings: Settings) -> Decimal:
    """Return the weighted ECLI divided by 100 (``1`` for a zero index)."""
    weights = settings.location
    weighted = (
        weights.rent_index_weight * ecli.rent_index
        + weights.groceries_index_weight * ecli.groceries_index
        + weights.cost_of_living_index_weight * ecli.cost_of_living_index
    )
    if weighted == 0:
        return Decimal("1")
    return weighted / Decimal("100")


def normalize_location(
    net_worth: Decimal,
    ecli: EcliIndices | None,
    settings: Settings,
    *,
    logger: Logger,
) -> tuple[LocationAdjustment | None, tuple[SnapshotWarning, ...]]:
    """Normalize net worth to New York purchasing power.

    Args:
        net_worth: Nominal net worth in base currency.
        ecli: Month cost-of-living indices, if recorded.
        settings: Pipeline settings.
        logger: Logger used for warnings.

    Returns:
        tuple: The adjustment (None when disabled or without indices) and
        any warnings about suspicious index values.
    """
    if not settings.location.enabled or ecli is None:
        return None, ()
    warnings: list[SnapshotWarning] = []
    ecli_norm = compute_ecli_norm(ecli, settings)
    if ecli_norm < Decimal(ECLI_NORM_LOW_THRESHOLD):
        message = f"ECLI_norm very low ({ecli_norm:.3f}), check index values"
        logger.warning(message)
        warnings.append(SnapshotWarning(code="ecli_low", message=message))
    scale = Decimal("1") / ecli_norm
    adjustment = LocationAdjustment(
        ecli_norm=quantize(ecli_norm, INDEX_PLACES),
        scale=quantize(scale, INDEX_PLACES),
        net_worth_normalized=quantize(
            net_worth * scale,
            settings.money_places,
        ),
        advantage_pct=quantize((scale - 1) * 100, settings.money_places),
    )
    return adjustment, tuple(warnings)


def combine_purchasing_power(
    net_worth: Decimal,
    deflator: Decimal,
    location: LocationAdjustment | None,
    settings: Settings,
    *,
    logger: Logger,
) -> tuple[PurchasingPower | None, tuple[SnapshotWarning, ...]]:
    """Chain the inflation deflator with the cost-of-living normalization.

    Only applies under the ``chained`` policy with inflation enabled and a
    location adjustment available.

    Returns:
        tuple: Combined record (or None) and any warnings.
    """
    if (
        settings.purchasing_power_policy != PURCHASING_POWER_CHAINED
        or not settings.inflation.enabled
        or location is None
    ):
        return None, ()
    warnings: list[SnapshotWarning] = []
    scale = deflator / location.ecli_norm
    if scale > Decimal(PURCHASING_POWER_SCALE_HIGH_THRESHOLD):
        message = f"Real purchasing power scale unusually large ({scale:.2f})"
        logger.warning(message)
        warnings.append(
            SnapshotWarning(code="purchasing_power_scale", message=message)
        )
    record = PurchasingPower(
        scale=quantize(scale, INDEX_PLACES),
        net_worth=quantize(net_worth * scale, settings.money_places),
    )
    return record, tuple(warnings)


__all__ = [
    "compute_ecli_norm",
    "normalize_location",
    "combine_purchasing_power",
]
