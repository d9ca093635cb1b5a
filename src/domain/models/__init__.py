"""Domain models package."""

from .finance import (
    CashFlowSummary,
    CategoryBreakdown,
    ComputedSnapshot,
    Dashboard,
    DashboardMetadata,
    LocationAdjustment,
    PerformanceRecord,
    PeriodGrowth,
    PurchasingPower,
    RealWealthRecord,
    SnapshotTotals,
    SnapshotWarning,
    YearlyStats,
)
from .settings import (
    CategorySettings,
    InflationSettings,
    LocationSettings,
    Settings,
)
from .snapshots import (
    CashFlowEntry,
    ConvertedEntry,
    EcliIndices,
    NetWorthEntry,
    RawMonthlySnapshot,
)

__all__ = [
    "CashFlowEntry",
    "CashFlowSummary",
    "CategoryBreakdown",
    "CategorySettings",
    "ComputedSnapshot",
    "ConvertedEntry",
    "Dashboard",
    "DashboardMetadata",
    "EcliIndices",
    "InflationSettings",
    "LocationAdjustment",
    "LocationSettings",
    "NetWorthEntry",
    "PerformanceRecord",
    "PeriodGrowth",
    "PurchasingPower",
    "RawMonthlySnapshot",
    "RealWealthRecord",
    "Settings",
    "SnapshotTotals",
    "SnapshotWarning",
    "YearlyStats",
]
