"""Shared fixtures for the test suite."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.domain.models import (
    CashFlowEntry,
    InflationSettings,
    NetWorthEntry,
    RawMonthlySnapshot,
    Settings,
)


@pytest.fixture
def logger() -> MagicMock:
    """Logger double recording every call."""
    return MagicMock()


@pytest.fixture
def settings() -> Settings:
    """Default EUR settings with inflation enabled."""
    return Settings()


@pytest.fixture
def nominal_settings() -> Settings:
    """Settings with inflation adjustment disabled."""
    return Settings(inflation=InflationSettings(enabled=False))


@pytest.fixture
def make_snapshot():
    """Factory building raw monthly snapshots with sensible defaults."""

    def _make(
        month: str,
        cash: str = "1000",
        salary: str = "0",
        rent: str = "0",
        index: str | None = "100",
        **overrides,
    ) -> RawMonthlySnapshot:
        net_worth_entries = overrides.pop(
            "net_worth_entries",
            (NetWorthEntry("Checking", "cash", "EUR", Decimal(cash)),),
        )
        cash_flow_entries = overrides.pop(
            "cash_flow_entries",
            (
                CashFlowEntry("Salary", "salary", "EUR", Decimal(salary)),
                CashFlowEntry("Rent", "rent", "EUR", Decimal(rent)),
            ),
        )
        return RawMonthlySnapshot(
            month=month,
            fx_rates=overrides.pop("fx_rates", {}),
            inflation_index=None if index is None else Decimal(index),
            net_worth_entries=tuple(net_worth_entries),
            cash_flow_entries=tuple(cash_flow_entries),
            **overrides,
        )

    return _make
