"""Tests for cash-flow aggregation."""

from decimal import Decimal

from src.domain.models import CashFlowEntry, Settings
from src.domain.services.cashflow import (
    aggregate_cash_flow,
    compute_save_rate,
    total_contributions,
)


def test_aggregate_cash_flow_splits_income_and_expenses(
    settings,
    logger,
) -> None:
    """Income and expense types should be summed separately."""
    entries = [
        CashFlowEntry("Salary", "salary", "EUR", Decimal("3000")),
        CashFlowEntry("Pension", "Pension", "EUR", Decimal("500")),
        CashFlowEntry("Rent", "rent", "EUR", Decimal("-1000")),
        CashFlowEntry("Groceries", "expense", "USD", Decimal("200")),
    ]

    result = aggregate_cash_flow(
        entries,
        settings,
        {"USD": Decimal("0.90")},
        logger=logger,
    )

    summary = result.summary
    assert summary.income == Decimal("3500.00")
    assert summary.expenses == Decimal("1180.00")
    assert summary.net_cash_flow == Decimal("2320.00")
    assert summary.save_rate == Decimal("0.6629")
    assert result.warnings == ()


def test_aggregate_cash_flow_without_income_has_zero_save_rate(
    settings,
    logger,
) -> None:
    """A month without income should report a save rate of zero."""
    entries = [CashFlowEntry("Rent", "rent", "EUR", Decimal("900"))]

    result = aggregate_cash_flow(entries, settings, {}, logger=logger)

    assert result.summary.income == Decimal("0")
    assert result.summary.net_cash_flow == Decimal("-900.00")
    assert result.summary.save_rate == Decimal("0")


def test_aggregate_cash_flow_warns_on_unmapped_type(
    settings,
    logger,
) -> None:
    """Unknown cash-flow types should be excluded with a warning."""
    entries = [
        CashFlowEntry("Salary", "salary", "EUR", Decimal("1000")),
        CashFlowEntry("Gift", "gift", "EUR", Decimal("250")),
    ]

    result = aggregate_cash_flow(entries, settings, {}, logger=logger)

    assert result.summary.income == Decimal("1000.00")
    assert [warning.code for warning in result.warnings] == [
        "unmapped_category"
    ]
    assert result.warnings[0].entry_name == "Gift"


def test_compute_save_rate_rounds_to_ratio_places() -> None:
    """Save rate should be rounded half up."""
    assert compute_save_rate(
        Decimal("1"),
        Decimal("3"),
        4,
    ) == Decimal("0.3333")
    assert compute_save_rate(
        Decimal("2"),
        Decimal("3"),
        4,
    ) == Decimal("0.6667")


def test_total_contributions_converts_and_sums(logger) -> None:
    """Contributions should be summed in the base currency."""
    entries = [
        CashFlowEntry("ETF plan", "investments", "EUR", Decimal("300")),
        CashFlowEntry("US shares", "investments", "USD", Decimal("100")),
    ]

    total, warnings = total_contributions(
        entries,
        Settings(),
        {"USD": Decimal("0.92")},
        logger=logger,
    )

    assert total == Decimal("392.00")
    assert warnings == ()
