"""Domain services grouping net worth entries into categories."""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from logging import Logger

from src.domain.errors import UnmappedCategoryError
from src.domain.models import (
    CategoryBreakdown,
    ConvertedEntry,
    NetWorthEntry,
    Settings,
    SnapshotTotals,
    SnapshotWarning,
)
from src.domain.services.fx import convert_with_policy
from src.domain.services.normalization import resolve_category
from src.domain.services.validation import validate_balance_sign
from src.utils.decimal_utils import quantize


@dataclass(frozen=True)
class NetWorthAggregate:
    """Result of the category aggregation for one month."""

    totals: SnapshotTotals
    by_category: CategoryBreakdown
    warnings: tuple[SnapshotWarning, ...] = ()


def classify_entry(
    entry: NetWorthEntry,
    settings: Settings,
) -> tuple[str, bool]:
    """Resolve the category of a net worth entry.

    Liability buckets are checked first so that an ambiguous tag can never
    inflate assets.

    Args:
        entry: Raw net worth entry.
        settings: Pipeline settings holding the category lists.

    Returns:
        tuple[str, bool]: Canonical category name and whether it is a
        liability.

    Raises:
        UnmappedCategoryError: If the type matches no configured category.
    """
    liability = resolve_category(entry.type, settings.categories.liabilities)
    if liability is not None:
        return liability, True
    asset = resolve_category(entry.type, settings.categories.assets)
    if asset is not None:
        return asset, False
    raise UnmappedCategoryError(entry.type, entry.name)


def aggregate_net_worth(
    entries: Iterable[NetWorthEntry],
    settings: Settings,
    fx_rates: dict[str, Decimal],
    *,
    logger: Logger,
) -> NetWorthAggregate:
    """Compute category subtotals and net worth totals for a month.

    Args:
        entries: Net worth entries of the month.
        settings: Pipeline settings.
        fx_rates: Month FX table.
        logger: Logger used for warnings.

    Returns:
        NetWorthAggregate: Rounded totals, breakdown and warnings.

    Raises:
        MissingRateError: If a currency has no rate under the fail policy.
    """
    assets = {name: Decimal("0") for name in settings.categories.assets}
    liabilities = {
        name: Decimal("0") for name in settings.categories.liabilities
    }
    warnings: list[SnapshotWarning] = []

    for entry in entries:
        try:
            category, is_liability = classify_entry(entry, settings)
        except UnmappedCategoryError as exc:
            logger.warning(str(exc))
            warnings.append(
                SnapshotWarning(
                    code="unmapped_category",
                    message=str(exc),
                    entry_name=entry.name,
                )
            )
            continue
        converted, warning = convert_with_policy(
            entry.name,
            entry.type,
            entry.balance,
            entry.currency,
            fx_rates,
            settings,
            logger=logger,
        )
        if warning is not None:
            warnings.append(warning)
        validate_balance_sign(
            category,
            converted.amount,
            is_liability=is_liability,
            logger=logger,
        )
        if is_liability:
            liabilities[category] += abs(converted.amount)
        else:
            assets[category] += converted.amount

    places = settings.money_places
    assets = {name: quantize(value, places) for name, value in assets.items()}
    liabilities = {
        name: quantize(value, places) for name, value in liabilities.items()
    }
    asset_total = sum(assets.values(), Decimal("0"))
    liability_total = sum(liabilities.values(), Decimal("0"))

    return NetWorthAggregate(
        totals=SnapshotTotals(
            assets=asset_total,
            liabilities=liability_total,
            net_worth=asset_total - liability_total,
        ),
        by_category=CategoryBreakdown(
            assets=assets,
            liabilities=liabilities,
        ),
        warnings=tuple(warnings),
    )


def list_converted_entries(
    entries: Iterable[NetWorthEntry],
    settings: Settings,
    fx_rates: dict[str, Decimal],
    *,
    logger: Logger,
) -> list[ConvertedEntry]:
    """Return every net worth entry with its rounded base-currency value.

    Unmapped entries are kept so the detail view shows the full audit trail.

    Args:
        entries: Net worth entries of the month.
        settings: Pipeline settings.
        fx_rates: Month FX table.
        logger: Logger used for warnings.

    Returns:
        list[ConvertedEntry]: Entries in input order.
    """
    converted_entries: list[ConvertedEntry] = []
    for entry in entries:
        converted, _ = convert_with_policy(
            entry.name,
            entry.type,
            entry.balance,
            entry.currency,
            fx_rates,
            settings,
            logger=logger,
        )
        converted_entries.append(
            ConvertedEntry(
                name=converted.name,
                type=converted.type,
                currency=converted.currency,
                original_amount=converted.original_amount,
                rate=converted.rate,
                amount=quantize(converted.amount, settings.money_places),
            )
        )
    return converted_entries


__all__ = [
    "NetWorthAggregate",
    "classify_entry",
    "aggregate_net_worth",
    "list_converted_entries",
]
