"""Snapshot assembly and dashboard building.

``assemble_snapshots`` runs every per-month stage and folds the performance
accumulator over the months in ascending order. Any fatal error aborts the
whole run; recoverable issues end up in each snapshot's ``warnings``.
"""

from collections import Counter
from collections.abc import Iterable
from decimal import Decimal
from logging import Logger

from src.domain.errors import DuplicateMonthError
from src.domain.models import (
    ComputedSnapshot,
    Dashboard,
    DashboardMetadata,
    RawMonthlySnapshot,
    Settings,
)
from src.domain.services.cashflow import (
    aggregate_cash_flow,
    total_contributions,
)
from src.domain.services.categories import aggregate_net_worth
from src.domain.services.inflation import (
    check_inflation_index,
    normalize_inflation,
)
from src.domain.services.location import (
    combine_purchasing_power,
    normalize_location,
)
from src.domain.services.normalization import normalize_currency_code
from src.domain.services.performance import (
    PerformanceState,
    advance_performance,
)
from src.domain.services.validation import validate_month_key
from src.domain.services.yearly import compute_yearly_stats


def order_snapshots(
    raw_snapshots: Iterable[RawMonthlySnapshot],
) -> list[RawMonthlySnapshot]:
    """Validate month keys and sort raw snapshots ascending.

    Raises:
        MalformedSnapshotError: If a month key is not ``YYYY-MM``.
        DuplicateMonthError: If a month appears more than once.
    """
    snapshots = list(raw_snapshots)
    for snapshot in snapshots:
        validate_month_key(snapshot.month)
    counts = Counter(snapshot.month for snapshot in snapshots)
    duplicates = sorted(month for month, count in counts.items() if count > 1)
    if duplicates:
        raise DuplicateMonthError(duplicates)
    return sorted(snapshots, key=lambda snapshot: snapshot.month)


def assemble_snapshot(
    raw: RawMonthlySnapshot,
    settings: Settings,
    state: PerformanceState,
    previous_real: Decimal | None,
    *,
    logger: Logger,
) -> tuple[ComputedSnapshot, PerformanceState]:
    """Compute one month from its raw input and the previous accumulator.

    Args:
        raw: Raw input of the month.
        settings: Pipeline settings.
        state: Performance accumulator of the previous month.
        previous_real: Real net worth of the previous month, if any.
        logger: Logger used for warnings.

    Returns:
        tuple: The computed snapshot and the next performance state.
    """
    index = check_inflation_index(raw.month, raw.inflation_index, settings)
    net_worth = aggregate_net_worth(
        raw.net_worth_entries,
        settings,
        raw.fx_rates,
        logger=logger,
    )
    cash_flow = aggregate_cash_flow(
        raw.cash_flow_entries,
        settings,
        raw.fx_rates,
        logger=logger,
    )
    contributions, contribution_warnings = total_contributions(
        raw.investment_contributions,
        settings,
        raw.fx_rates,
        logger=logger,
    )
    real_wealth = normalize_inflation(
        net_worth.totals.net_worth,
        index,
        previous_real,
        settings,
    )
    location, location_warnings = normalize_location(
        net_worth.totals.net_worth,
        raw.ecli,
        settings,
        logger=logger,
    )
    purchasing_power, power_warnings = combine_purchasing_power(
        net_worth.totals.net_worth,
        real_wealth.deflator,
        location,
        settings,
        logger=logger,
    )
    performance, next_state, performance_warnings = advance_performance(
        state,
        month=raw.month,
        net_worth=net_worth.totals.net_worth,
        inflation_index=index,
        cash_flow=cash_flow.summary,
        contributions=contributions,
        settings=settings,
        logger=logger,
    )
    snapshot = ComputedSnapshot(
        month=raw.month,
        fx_rates=_sorted_rates(raw.fx_rates),
        inflation_index=raw.inflation_index,
        totals=net_worth.totals,
        by_category=net_worth.by_category,
        cash_flow=cash_flow.summary,
        performance=performance,
        real_wealth=real_wealth,
        location=location,
        purchasing_power=purchasing_power,
        warnings=(
            *net_worth.warnings,
            *cash_flow.warnings,
            *contribution_warnings,
            *location_warnings,
            *power_warnings,
            *performance_warnings,
        ),
    )
    return snapshot, next_state


def assemble_snapshots(
    raw_snapshots: Iterable[RawMonthlySnapshot],
    settings: Settings,
    *,
    logger: Logger,
) -> list[ComputedSnapshot]:
    """Compute every month in ascending order.

    Args:
        raw_snapshots: Raw monthly inputs, in any order.
        settings: Pipeline settings.
        logger: Logger used for warnings.

    Returns:
        list[ComputedSnapshot]: Snapshots sorted ascending by month.
    """
    state = PerformanceState.initial()
    previous_real: Decimal | None = None
    computed: list[ComputedSnapshot] = []
    for raw in order_snapshots(raw_snapshots):
        snapshot, state = assemble_snapshot(
            raw,
            settings,
            state,
            previous_real,
            logger=logger,
        )
        previous_real = snapshot.real_wealth.net_worth_real
        computed.append(snapshot)
    return computed


def build_dashboard(
    raw_snapshots: Iterable[RawMonthlySnapshot],
    settings: Settings,
    *,
    generated_at: str,
    logger: Logger,
) -> Dashboard:
    """Build the dashboard from raw monthly inputs.

    Args:
        raw_snapshots: Raw monthly inputs, in any order.
        settings: Pipeline settings.
        generated_at: ISO-8601 generation timestamp.
        logger: Logger used for warnings.

    Returns:
        Dashboard: Metadata, yearly rollups and ordered snapshots.
    """
    snapshots = assemble_snapshots(raw_snapshots, settings, logger=logger)
    return Dashboard(
        metadata=DashboardMetadata(
            generated_at=generated_at,
            settings_version=settings.settings_version,
            base_currency=normalize_currency_code(settings.base_currency)
            or settings.base_currency,
            inflation_adjusted=settings.inflation.enabled,
        ),
        yearly_stats=compute_yearly_stats(snapshots, settings),
        snapshots=snapshots,
    )


def _sorted_rates(fx_rates: dict[str, Decimal]) -> dict[str, Decimal]:
    return {code: fx_rates[code] for code in sorted(fx_rates)}


__all__ = [
    "order_snapshots",
    "assemble_snapshot",
    "assemble_snapshots",
    "build_dashboard",
]
