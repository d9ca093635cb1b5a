"""Domain models for pipeline settings."""

from dataclasses import dataclass, field
from decimal import Decimal

from src.domain.constants import (
    DEFAULT_ASSET_CATEGORIES,
    DEFAULT_BASE_CURRENCY,
    DEFAULT_LIABILITY_CATEGORIES,
    DEFAULT_NEGATIVE_CASH_FLOWS,
    DEFAULT_POSITIVE_CASH_FLOWS,
    INFLOW_POLICY_CONTRIBUTIONS,
    INFLOW_POLICY_NET_CASH_FLOW,
    MISSING_RATE_ASSUME_PARITY,
    MISSING_RATE_FAIL,
    MONEY_PLACES,
    PURCHASING_POWER_CHAINED,
    PURCHASING_POWER_INDEPENDENT,
    RATIO_PLACES,
)
from src.domain.errors import ConfigurationError


def _find_overlap(left: tuple[str, ...], right: tuple[str, ...]) -> list[str]:
    lowered = {tag.strip().lower() for tag in right}
    return sorted({tag for tag in left if tag.strip().lower() in lowered})


@dataclass(frozen=True)
class CategorySettings:
    """Type tags mapped to net worth and cash-flow buckets.

    Attributes:
        assets: Asset category names, in display order.
        liabilities: Liability category names, in display order.
        positive_cash_flows: Cash-flow types counted as income.
        negative_cash_flows: Cash-flow types counted as expenses.
    """

    assets: tuple[str, ...] = DEFAULT_ASSET_CATEGORIES
    liabilities: tuple[str, ...] = DEFAULT_LIABILITY_CATEGORIES
    positive_cash_flows: tuple[str, ...] = DEFAULT_POSITIVE_CASH_FLOWS
    negative_cash_flows: tuple[str, ...] = DEFAULT_NEGATIVE_CASH_FLOWS

    def __post_init__(self) -> None:
        overlap = _find_overlap(self.assets, self.liabilities)
        if overlap:
            raise ConfigurationError(
                f"Types listed as both asset and liability: {overlap}"
            )
        overlap = _find_overlap(
            self.positive_cash_flows,
            self.negative_cash_flows,
        )
        if overlap:
            raise ConfigurationError(
                f"Types listed as both income and expense: {overlap}"
            )


@dataclass(frozen=True)
class InflationSettings:
    """HICP baseline used to deflate nominal values."""

    enabled: bool = True
    base_value: Decimal = Decimal("100")
    base_year: int | None = None
    base_month: int | None = None

    def __post_init__(self) -> None:
        if self.base_value <= 0:
            raise ConfigurationError(
                f"Inflation base value must be positive: {self.base_value}"
            )

    @property
    def reference_period(self) -> str | None:
        """Return the baseline period as ``YYYY-MM`` when known."""
        if self.base_year is None or self.base_month is None:
            return None
        return f"{self.base_year:04d}-{self.base_month:02d}"


@dataclass(frozen=True)
class LocationSettings:
    """ECLI weights for cost-of-living normalization."""

    enabled: bool = False
    rent_index_weight: Decimal = Decimal("0")
    groceries_index_weight: Decimal = Decimal("0")
    cost_of_living_index_weight: Decimal = Decimal("0")


@dataclass(frozen=True)
class Settings:
    """Immutable configuration shared by every pipeline stage."""

    base_currency: str = DEFAULT_BASE_CURRENCY
    settings_version: int = 1
    categories: CategorySettings = field(default_factory=CategorySettings)
    inflation: InflationSettings = field(default_factory=InflationSettings)
    location: LocationSettings = field(default_factory=LocationSettings)
    purchasing_power_policy: str = PURCHASING_POWER_INDEPENDENT
    external_inflow_policy: str = INFLOW_POLICY_NET_CASH_FLOW
    missing_rate_policy: str = MISSING_RATE_FAIL
    money_places: int = MONEY_PLACES
    ratio_places: int = RATIO_PLACES

    def __post_init__(self) -> None:
        if not self.base_currency or not self.base_currency.strip():
            raise ConfigurationError("Base currency must not be empty")
        self._check_choice(
            "purchasing_power_policy",
            self.purchasing_power_policy,
            (PURCHASING_POWER_INDEPENDENT, PURCHASING_POWER_CHAINED),
        )
        self._check_choice(
            "external_inflow_policy",
            self.external_inflow_policy,
            (INFLOW_POLICY_NET_CASH_FLOW, INFLOW_POLICY_CONTRIBUTIONS),
        )
        self._check_choice(
            "missing_rate_policy",
            self.missing_rate_policy,
            (MISSING_RATE_FAIL, MISSING_RATE_ASSUME_PARITY),
        )
        if self.money_places < 0 or self.ratio_places < 0:
            raise ConfigurationError("Rounding precision must be positive")

    @staticmethod
    def _check_choice(name: str, value: str, choices: tuple[str, ...]) -> None:
        if value not in choices:
            raise ConfigurationError(
                f"Invalid {name} '{value}'. Expected one of {list(choices)}"
            )


__all__ = [
    "CategorySettings",
    "InflationSettings",
    "LocationSettings",
    "Settings",
]
