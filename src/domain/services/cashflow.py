"""Domain services for monthly cash-flow statistics."""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from logging import Logger

from src.domain.errors import UnmappedCategoryError
from src.domain.models import (
    CashFlowEntry,
    CashFlowSummary,
    Settings,
    SnapshotWarning,
)
from src.domain.services.fx import convert_with_policy
from src.domain.services.normalization import resolve_category
from src.utils.decimal_utils import quantize


@dataclass(frozen=True)
class CashFlowAggregate:
    """Result of the cash-flow aggregation for one month."""

    summary: CashFlowSummary
    warnings: tuple[SnapshotWarning, ...] = ()


def compute_save_rate(
    net_cash_flow: Decimal,
    income: Decimal,
    places: int,
) -> Decimal:
    """Return ``net_cash_flow / income``, or zero without income."""
    if income <= 0:
        return Decimal("0")
    return quantize(net_cash_flow / income, places)


def aggregate_cash_flow(
    entries: Iterable[CashFlowEntry],
    settings: Settings,
    fx_rates: dict[str, Decimal],
    *,
    logger: Logger,
) -> CashFlowAggregate:
    """Split cash-flow entries into income and expenses.

    Income sums the amounts of positive types as recorded. Expenses sum the
    magnitudes of negative types, whatever sign they were entered with.

    Args:
        entries: Cash-flow entries of the month.
        settings: Pipeline settings.
        fx_rates: Month FX table.
        logger: Logger used for warnings.

    Returns:
        CashFlowAggregate: Rounded summary and warnings.
    """
    income = Decimal("0")
    expenses = Decimal("0")
    warnings: list[SnapshotWarning] = []

    for entry in entries:
        positive = resolve_category(
            entry.type,
            settings.categories.positive_cash_flows,
        )
        negative = resolve_category(
            entry.type,
            settings.categories.negative_cash_flows,
        )
        if positive is None and negative is None:
            exc = UnmappedCategoryError(entry.type, entry.name)
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
            entry.amount,
            entry.currency,
            fx_rates,
            settings,
            logger=logger,
        )
        if warning is not None:
            warnings.append(warning)
        if positive is not None:
            income += converted.amount
        else:
            expenses += abs(converted.amount)

    income = quantize(income, settings.money_places)
    expenses = quantize(expenses, settings.money_places)
    net_cash_flow = income - expenses
    return CashFlowAggregate(
        summary=CashFlowSummary(
            income=income,
            expenses=expenses,
            net_cash_flow=net_cash_flow,
            save_rate=compute_save_rate(
                net_cash_flow,
                income,
                settings.ratio_places,
            ),
        ),
        warnings=tuple(warnings),
    )


def total_contributions(
    entries: Iterable[CashFlowEntry],
    settings: Settings,
    fx_rates: dict[str, Decimal],
    *,
    logger: Logger,
) -> tuple[Decimal, tuple[SnapshotWarning, ...]]:
    """Sum investment contributions in the base currency.

    Returns:
        tuple: Rounded total and any conversion warnings.
    """
    total = Decimal("0")
    warnings: list[SnapshotWarning] = []
    for entry in entries:
        converted, warning = convert_with_policy(
            entry.name,
            entry.type,
            entry.amount,
            entry.currency,
            fx_rates,
            settings,
            logger=logger,
        )
        if warning is not None:
            warnings.append(warning)
        total += converted.amount
    return quantize(total, settings.money_places), tuple(warnings)


__all__ = [
    "CashFlowAggregate",
    "compute_save_rate",
    "aggregate_cash_flow",
    "total_contributions",
]
