"""Time-weighted investment performance across consecutive months.

The engine is a left fold: ``advance_performance`` takes the accumulator of
the previous month and returns the record of the current month together
with the next accumulator. Months must be fed in ascending order, exactly
once each.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from logging import Logger

from src.domain.constants import INFLOW_POLICY_CONTRIBUTIONS, RATIO_PLACES
from src.domain.models import (
    CashFlowSummary,
    ComputedSnapshot,
    PerformanceRecord,
    PeriodGrowth,
    Settings,
    SnapshotWarning,
)
from src.domain.services.inflation import monthly_inflation_rate
from src.domain.services.validation import months_between
from src.utils.decimal_utils import quantize


@dataclass(frozen=True)
class PerformanceState:
    """Accumulator threaded from one month to the next.

    Attributes:
        previous_month: Month key of the last processed month.
        previous_net_worth: Nominal net worth of the last processed month.
        previous_index: Inflation index of the last processed month.
        twr_cumulative: Running time-weighted return factor.
    """

    previous_month: str | None = None
    previous_net_worth: Decimal | None = None
    previous_index: Decimal | None = None
    twr_cumulative: Decimal = Decimal("1")

    @classmethod
    def initial(cls) -> "PerformanceState":
        """Return the state before the first month."""
        return cls()

    @property
    def is_initial(self) -> bool:
        return self.previous_month is None


def resolve_external_inflow(
    cash_flow: CashFlowSummary,
    contributions: Decimal,
    settings: Settings,
) -> Decimal:
    """Return the month's inflow that is not an investment gain.

    The default policy approximates it with the month's net cash flow; the
    ``contributions`` policy uses the recorded investment contributions.
    """
    if settings.external_inflow_policy == INFLOW_POLICY_CONTRIBUTIONS:
        return contributions
    return cash_flow.net_cash_flow


def advance_performance(
    state: PerformanceState,
    *,
    month: str,
    net_worth: Decimal,
    inflation_index: Decimal | None,
    cash_flow: CashFlowSummary,
    contributions: Decimal,
    settings: Settings,
    logger: Logger,
) -> tuple[PerformanceRecord, PerformanceState, tuple[SnapshotWarning, ...]]:
    """Compute one month of performance and the next accumulator.

    Args:
        state: Accumulator of the previous month.
        month: Month key being processed.
        net_worth: Nominal net worth of the month.
        inflation_index: Checked HICP value (None when inflation is off).
        cash_flow: Cash-flow summary of the month.
        contributions: Investment contributions in base currency.
        settings: Pipeline settings.
        logger: Logger used for warnings.

    Returns:
        tuple: The month's ``PerformanceRecord``, the next state and any
        warnings raised while chaining.
    """
    places = settings.ratio_places
    external_inflow = resolve_external_inflow(
        cash_flow,
        contributions,
        settings,
    )
    warnings: list[SnapshotWarning] = []

    if state.is_initial:
        record = PerformanceRecord(
            external_inflow=external_inflow,
            nominal_return=Decimal("0"),
            real_return=Decimal("0"),
            inflation_rate=Decimal("0"),
            twr_cumulative=quantize(Decimal("1"), places),
        )
        return (
            record,
            _next_state(month, net_worth, inflation_index, record),
            (),
        )

    gap = months_between(state.previous_month, month)
    if gap > 1:
        message = (
            f"{gap - 1} month(s) missing between {state.previous_month} "
            f"and {month}, chaining against {state.previous_month}"
        )
        logger.warning(message)
        warnings.append(SnapshotWarning(code="month_gap", message=message))

    inflation_rate = monthly_inflation_rate(
        inflation_index,
        state.previous_index,
        places,
    )
    if state.previous_net_worth == 0:
        message = (
            f"Previous net worth is zero for {month}, "
            "returns default to zero"
        )
        logger.warning(message)
        warnings.append(SnapshotWarning(code="zero_baseline", message=message))
        nominal_return = Decimal("0")
        real_return = Decimal("0")
    else:
        nominal_return = quantize(
            (net_worth - state.previous_net_worth - external_inflow)
            / state.previous_net_worth,
            places,
        )
        real_return = nominal_return - inflation_rate

    twr_cumulative = quantize(
        state.twr_cumulative * (1 + real_return),
        places,
    )
    record = PerformanceRecord(
        external_inflow=external_inflow,
        nominal_return=nominal_return,
        real_return=real_return,
        inflation_rate=inflation_rate,
        twr_cumulative=twr_cumulative,
    )
    return (
        record,
        _next_state(month, net_worth, inflation_index, record),
        tuple(warnings),
    )


def _next_state(
    month: str,
    net_worth: Decimal,
    inflation_index: Decimal | None,
    record: PerformanceRecord,
) -> PerformanceState:
    return PerformanceState(
        previous_month=month,
        previous_net_worth=net_worth,
        previous_index=inflation_index,
        twr_cumulative=record.twr_cumulative,
    )


def compute_period_growth(
    snapshots: Sequence[ComputedSnapshot],
    start_month: str | None = None,
    end_month: str | None = None,
    *,
    inflation_adjusted: bool = True,
    places: int = RATIO_PLACES,
) -> PeriodGrowth:
    """Measure net worth growth over a window, excluding inflows.

    Inflows of the start month are part of the starting balance and are not
    subtracted.

    Args:
        snapshots: Computed snapshots, in any order.
        start_month: First month of the window (defaults to the earliest).
        end_month: Last month of the window (defaults to the latest).
        inflation_adjusted: Whether real figures are deflated by HICP. When
            false, cumulative inflation is zero and real growth equals
            nominal growth.
        places: Rounding precision of the growth ratios.

    Returns:
        PeriodGrowth: Nominal and real growth over the window.

    Raises:
        ValueError: If the window holds no snapshot.
    """
    window = sorted(
        (
            snapshot
            for snapshot in snapshots
            if (start_month is None or snapshot.month >= start_month)
            and (end_month is None or snapshot.month <= end_month)
        ),
        key=lambda snapshot: snapshot.month,
    )
    if not window:
        raise ValueError(
            f"No snapshots between {start_month} and {end_month}"
        )
    first, last = window[0], window[-1]
    start_value = first.totals.net_worth
    end_value = last.totals.net_worth
    total_inflows = sum(
        (snapshot.performance.external_inflow for snapshot in window[1:]),
        Decimal("0"),
    )
    if start_value == 0:
        nominal_growth = Decimal("0")
    else:
        nominal_growth = quantize(
            (end_value - start_value - total_inflows) / start_value,
            places,
        )
    if (
        inflation_adjusted
        and first.inflation_index
        and last.inflation_index
    ):
        cumulative_inflation = quantize(
            last.inflation_index / first.inflation_index - 1,
            places,
        )
    else:
        cumulative_inflation = Decimal("0")
    return PeriodGrowth(
        start_month=first.month,
        end_month=last.month,
        start_net_worth=start_value,
        end_net_worth=end_value,
        total_inflows=total_inflows,
        nominal_growth=nominal_growth,
        cumulative_inflation=cumulative_inflation,
        real_growth=nominal_growth - cumulative_inflation,
    )


__all__ = [
    "PerformanceState",
    "resolve_external_inflow",
    "advance_performance",
    "compute_period_growth",
]
