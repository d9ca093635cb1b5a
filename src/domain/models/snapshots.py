"""Domain models for raw monthly inputs."""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class NetWorthEntry:
    """Balance of one account at month end, in its own currency."""

    name: str
    type: str
    currency: str
    balance: Decimal
    comment: str = ""


@dataclass(frozen=True)
class CashFlowEntry:
    """Money movement of one cash-flow line during the month."""

    name: str
    type: str
    currency: str
    amount: Decimal
    comment: str = ""


@dataclass(frozen=True)
class EcliIndices:
    """Cost-of-living indices for the place of residence (New York = 100)."""

    rent_index: Decimal
    groceries_index: Decimal
    cost_of_living_index: Decimal


@dataclass(frozen=True)
class RawMonthlySnapshot:
    """One month of validated input, as produced by the loader.

    Attributes:
        month: Reference month key in ``YYYY-MM`` format.
        fx_rates: Units of base currency per unit of each currency.
        inflation_index: HICP value for the month, if known.
        net_worth_entries: Month-end balances.
        cash_flow_entries: Income and expense movements.
        investment_contributions: Deposits into investment accounts.
        ecli: Optional cost-of-living indices.
    """

    month: str
    fx_rates: dict[str, Decimal] = field(default_factory=dict)
    inflation_index: Decimal | None = None
    net_worth_entries: tuple[NetWorthEntry, ...] = ()
    cash_flow_entries: tuple[CashFlowEntry, ...] = ()
    investment_contributions: tuple[CashFlowEntry, ...] = ()
    ecli: EcliIndices | None = None

    @property
    def year(self) -> int:
        """Return the calendar year of the month key."""
        return int(self.month[:4])


@dataclass(frozen=True)
class ConvertedEntry:
    """Entry value expressed in the base currency."""

    name: str
    type: str
    currency: str
    original_amount: Decimal
    rate: Decimal
    amount: Decimal


__all__ = [
    "NetWorthEntry",
    "CashFlowEntry",
    "EcliIndices",
    "RawMonthlySnapshot",
    "ConvertedEntry",
]
