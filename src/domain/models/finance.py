"""Domain models for computed financial aggregates."""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class SnapshotWarning:
    """Recoverable issue recorded against a single month.

    Attributes:
        code: Stable machine-readable identifier (e.g. unmapped_category).
        message: Human-readable description.
        entry_name: Name of the entry concerned, when applicable.
    """

    code: str
    message: str
    entry_name: str | None = None


@dataclass(frozen=True)
class SnapshotTotals:
    """Summary of net worth figures.

    Attributes:
        assets: Sum of asset category subtotals.
        liabilities: Sum of liability category subtotals.
        net_worth: Assets minus liabilities.
    """

    assets: Decimal
    liabilities: Decimal
    net_worth: Decimal


@dataclass(frozen=True)
class CategoryBreakdown:
    """Subtotals per configured category, in settings order."""

    assets: dict[str, Decimal]
    liabilities: dict[str, Decimal]


@dataclass(frozen=True)
class CashFlowSummary:
    """Summary of cash-flow totals."""

    income: Decimal
    expenses: Decimal
    net_cash_flow: Decimal
    save_rate: Decimal


@dataclass(frozen=True)
class PerformanceRecord:
    """Investment performance of a month, excluding external inflows."""

    external_inflow: Decimal
    nominal_return: Decimal
    real_return: Decimal
    inflation_rate: Decimal
    twr_cumulative: Decimal


@dataclass(frozen=True)
class RealWealthRecord:
    """Inflation-adjusted net worth."""

    deflator: Decimal
    net_worth_real: Decimal
    change_pct_from_prev: Decimal


@dataclass(frozen=True)
class LocationAdjustment:
    """Net worth normalized to New York cost of living."""

    ecli_norm: Decimal
    scale: Decimal
    net_worth_normalized: Decimal
    advantage_pct: Decimal


@dataclass(frozen=True)
class PurchasingPower:
    """Net worth deflated by inflation and normalized by cost of living."""

    scale: Decimal
    net_worth: Decimal


@dataclass(frozen=True)
class ComputedSnapshot:
    """Fully computed record for one month."""

    month: str
    fx_rates: dict[str, Decimal]
    inflation_index: Decimal | None
    totals: SnapshotTotals
    by_category: CategoryBreakdown
    cash_flow: CashFlowSummary
    performance: PerformanceRecord
    real_wealth: RealWealthRecord
    location: LocationAdjustment | None = None
    purchasing_power: PurchasingPower | None = None
    warnings: tuple[SnapshotWarning, ...] = ()

    @property
    def year(self) -> int:
        """Return the calendar year of the month key."""
        return int(self.month[:4])


@dataclass(frozen=True)
class YearlyStats:
    """Cash-flow rollup for one calendar year."""

    year: int
    months_count: int
    total_income: Decimal
    total_expenses: Decimal
    total_savings: Decimal
    average_save_rate: Decimal


@dataclass(frozen=True)
class PeriodGrowth:
    """Net worth growth over a window, excluding external inflows."""

    start_month: str
    end_month: str
    start_net_worth: Decimal
    end_net_worth: Decimal
    total_inflows: Decimal
    nominal_growth: Decimal
    cumulative_inflation: Decimal
    real_growth: Decimal


@dataclass(frozen=True)
class DashboardMetadata:
    """Generation metadata of a dashboard."""

    generated_at: str
    settings_version: int
    base_currency: str
    inflation_adjusted: bool = True


@dataclass(frozen=True)
class Dashboard:
    """Root aggregate served to the UI."""

    metadata: DashboardMetadata
    yearly_stats: list[YearlyStats] = field(default_factory=list)
    snapshots: list[ComputedSnapshot] = field(default_factory=list)

    @property
    def latest(self) -> ComputedSnapshot | None:
        """Return the most recent snapshot, if any."""
        return self.snapshots[-1] if self.snapshots else None

    @property
    def months(self) -> list[str]:
        """Return the month keys in ascending order."""
        return [snapshot.month for snapshot in self.snapshots]

    def snapshot_for(self, month: str) -> ComputedSnapshot | None:
        """Return the snapshot for a month key, or None when absent."""
        for snapshot in self.snapshots:
            if snapshot.month == month:
                return snapshot
        return None

    @property
    def warnings(self) -> list[tuple[str, SnapshotWarning]]:
        """Return every snapshot warning paired with its month."""
        return [
            (snapshot.month, warning)
            for snapshot in self.snapshots
            for warning in snapshot.warnings
        ]


__all__ = [
    "SnapshotWarning",
    "SnapshotTotals",
    "CategoryBreakdown",
    "CashFlowSummary",
    "PerformanceRecord",
    "RealWealthRecord",
    "LocationAdjustment",
    "PurchasingPower",
    "ComputedSnapshot",
    "YearlyStats",
    "PeriodGrowth",
    "DashboardMetadata",
    "Dashboard",
]
