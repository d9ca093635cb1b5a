"""Domain constants for net worth analytics."""

DEFAULT_BASE_CURRENCY = "EUR"

DEFAULT_ASSET_CATEGORIES = (
    "cash",
    "investments",
    "retirement",
    "personal",
)

DEFAULT_LIABILITY_CATEGORIES = (
    "liabilities",
)

DEFAULT_POSITIVE_CASH_FLOWS = (
    "salary",
    "pension",
)

DEFAULT_NEGATIVE_CASH_FLOWS = (
    "rent",
    "expense",
)

MONEY_PLACES = 2
RATIO_PLACES = 4
# Deflators and cost-of-living scales.
INDEX_PLACES = 6

ECLI_NORM_LOW_THRESHOLD = "0.2"
PURCHASING_POWER_SCALE_HIGH_THRESHOLD = "5"

INFLOW_POLICY_NET_CASH_FLOW = "net_cash_flow"
INFLOW_POLICY_CONTRIBUTIONS = "contributions"
PURCHASING_POWER_INDEPENDENT = "independent"
PURCHASING_POWER_CHAINED = "chained"
MISSING_RATE_FAIL = "fail"
MISSING_RATE_ASSUME_PARITY = "assume_parity"


__all__ = [
    "DEFAULT_BASE_CURRENCY",
    "DEFAULT_ASSET_CATEGORIES",
    "DEFAULT_LIABILITY_CATEGORIES",
    "DEFAULT_POSITIVE_CASH_FLOWS",
    "DEFAULT_NEGATIVE_CASH_FLOWS",
    "MONEY_PLACES",
    "RATIO_PLACES",
    "INDEX_PLACES",
    "ECLI_NORM_LOW_THRESHOLD",
    "PURCHASING_POWER_SCALE_HIGH_THRESHOLD",
    "INFLOW_POLICY_NET_CASH_FLOW",
    "INFLOW_POLICY_CONTRIBUTIONS",
    "PURCHASING_POWER_INDEPENDENT",
    "PURCHASING_POWER_CHAINED",
    "MISSING_RATE_FAIL",
    "MISSING_RATE_ASSUME_PARITY",
]
