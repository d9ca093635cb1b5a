"""Domain services package."""

from .assembler import (
    assemble_snapshot,
    assemble_snapshots,
    build_dashboard,
    order_snapshots,
)
from .cashflow import aggregate_cash_flow, compute_save_rate
from .categories import aggregate_net_worth, list_converted_entries
from .fx import convert_amount, convert_entry, resolve_rate
from .inflation import (
    check_inflation_index,
    compute_deflator,
    monthly_inflation_rate,
    normalize_inflation,
)
from .location import combine_purchasing_power, normalize_location
from .normalization import (
    normalize_currency_code,
    normalize_type_tag,
    resolve_category,
)
from .performance import (
    PerformanceState,
    advance_performance,
    compute_period_growth,
)
from .validation import validate_balance_sign, validate_month_key
from .yearly import compute_yearly_stats

__all__ = [
    "PerformanceState",
    "advance_performance",
    "aggregate_cash_flow",
    "aggregate_net_worth",
    "assemble_snapshot",
    "assemble_snapshots",
    "build_dashboard",
    "check_inflation_index",
    "combine_purchasing_power",
    "compute_deflator",
    "compute_period_growth",
    "compute_save_rate",
    "compute_yearly_stats",
    "convert_amount",
    "convert_entry",
    "list_converted_entries",
    "monthly_inflation_rate",
    "normalize_currency_code",
    "normalize_inflation",
    "normalize_location",
    "normalize_type_tag",
    "order_snapshots",
    "resolve_category",
    "resolve_rate",
    "validate_balance_sign",
    "validate_month_key",
]
