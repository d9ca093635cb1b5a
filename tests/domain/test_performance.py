"""Tests for the time-weighted performance engine."""

from decimal import Decimal

import pytest

from src.domain.models import CashFlowSummary, Settings
from src.domain.services.assembler import (
    assemble_snapshots,
    build_dashboard,
)
from src.domain.services.performance import (
    PerformanceState,
    advance_performance,
    compute_period_growth,
)
from src.utils.decimal_utils import quantize


def _cash_flow(net: str) -> CashFlowSummary:
    return CashFlowSummary(
        income=Decimal(net),
        expenses=Decimal("0"),
        net_cash_flow=Decimal(net),
        save_rate=Decimal("1") if Decimal(net) > 0 else Decimal("0"),
    )


def _run(months, settings, logger):
    """Fold (month, net_worth, index, net_cash_flow) tuples."""
    state = PerformanceState.initial()
    records = []
    for month, net_worth, index, net in months:
        record, state, warnings = advance_performance(
            state,
            month=month,
            net_worth=Decimal(net_worth),
            inflation_index=Decimal(index) if index else None,
            cash_flow=_cash_flow(net),
            contributions=Decimal("0"),
            settings=settings,
            logger=logger,
        )
        records.append((record, warnings))
    return records, state


def test_first_month_is_neutral(settings, logger) -> None:
    """The first month has zero returns and a TWR of one."""
    records, state = _run(
        [("2024-01", "1000", "100", "200")],
        settings,
        logger,
    )

    record, warnings = records[0]
    assert record.nominal_return == Decimal("0")
    assert record.real_return == Decimal("0")
    assert record.inflation_rate == Decimal("0")
    assert record.twr_cumulative == Decimal("1")
    assert record.external_inflow == Decimal("200")
    assert warnings == ()
    assert state.previous_month == "2024-01"


def test_returns_exclude_external_inflows(settings, logger) -> None:
    """Saved cash should not count as investment return."""
    records, _ = _run(
        [
            ("2024-01", "10000", "100", "0"),
            ("2024-02", "10600", "101", "500"),
        ],
        settings,
        logger,
    )

    record, _ = records[1]
    assert record.nominal_return == Decimal("0.0100")
    assert record.inflation_rate == Decimal("0.0100")
    assert record.real_return == Decimal("0.0000")
    assert record.twr_cumulative == Decimal("1.0000")


def test_twr_chains_real_returns(settings, logger) -> None:
    """Each TWR value is the previous one grown by the real return."""
    records, _ = _run(
        [
            ("2024-01", "10000", "100", "0"),
            ("2024-02", "10400", "100.5", "100"),
            ("2024-03", "10100", "100.7", "0"),
            ("2024-04", "11000", "101.4", "250"),
            ("2024-05", "11900", "101.2", "300"),
        ],
        settings,
        logger,
    )

    previous = Decimal("1")
    for record, _ in records:
        expected = quantize(previous * (1 + record.real_return), 4)
        assert record.twr_cumulative == expected
        previous = record.twr_cumulative
    assert records[-1][0].twr_cumulative > 1


def test_zero_previous_net_worth_yields_zero_returns(
    settings,
    logger,
) -> None:
    """A zero baseline defaults returns to zero with a warning."""
    records, _ = _run(
        [
            ("2024-01", "0", "100", "0"),
            ("2024-02", "500", "101", "500"),
        ],
        settings,
        logger,
    )

    record, warnings = records[1]
    assert record.nominal_return == Decimal("0")
    assert record.real_return == Decimal("0")
    assert record.twr_cumulative == Decimal("1")
    assert [warning.code for warning in warnings] == ["zero_baseline"]


def test_month_gap_is_reported(nominal_settings, logger) -> None:
    """Missing months chain against the previous available month."""
    records, _ = _run(
        [
            ("2024-01", "1000", None, "0"),
            ("2024-04", "1100", None, "0"),
        ],
        nominal_settings,
        logger,
    )

    record, warnings = records[1]
    assert record.nominal_return == Decimal("0.1000")
    assert record.inflation_rate == Decimal("0")
    assert [warning.code for warning in warnings] == ["month_gap"]
    assert "2 month(s) missing" in warnings[0].message


def test_contributions_policy_uses_recorded_contributions(logger) -> None:
    """The contributions policy ignores the month's net cash flow."""
    settings = Settings(external_inflow_policy="contributions")
    state = PerformanceState.initial()
    _, state, _ = advance_performance(
        state,
        month="2024-01",
        net_worth=Decimal("10000"),
        inflation_index=Decimal("100"),
        cash_flow=_cash_flow("0"),
        contributions=Decimal("0"),
        settings=settings,
        logger=logger,
    )

    record, _, _ = advance_performance(
        state,
        month="2024-02",
        net_worth=Decimal("10700"),
        inflation_index=Decimal("100"),
        cash_flow=_cash_flow("2000"),
        contributions=Decimal("500"),
        settings=settings,
        logger=logger,
    )

    assert record.external_inflow == Decimal("500")
    assert record.nominal_return == Decimal("0.0200")


def test_period_growth_excludes_inflows(make_snapshot, logger) -> None:
    """Growth over Jan-Oct with monthly savings of 3000."""
    settings = Settings()
    raws = [make_snapshot("2024-01", cash="113377", index="100")]
    for month in range(2, 10):
        raws.append(
            make_snapshot(
                f"2024-{month:02d}",
                cash=str(113377 + 9000 * (month - 1)),
                salary="3000",
                index="101",
            )
        )
    raws.append(
        make_snapshot(
            "2024-10",
            cash="208174",
            salary="3000",
            index="102.1",
        )
    )
    snapshots = assemble_snapshots(raws, settings, logger=logger)

    growth = compute_period_growth(snapshots)

    assert growth.start_month == "2024-01"
    assert growth.end_month == "2024-10"
    assert growth.total_inflows == Decimal("27000.00")
    assert growth.nominal_growth == Decimal("0.5980")
    assert growth.cumulative_inflation == Decimal("0.0210")
    assert growth.real_growth == Decimal("0.5770")


def test_period_growth_window_and_empty_window(make_snapshot, logger) -> None:
    """Windows select a sub-range; empty windows are rejected."""
    snapshots = assemble_snapshots(
        [
            make_snapshot("2024-01", cash="1000"),
            make_snapshot("2024-02", cash="1100", salary="50"),
            make_snapshot("2024-03", cash="1300", salary="100"),
        ],
        Settings(),
        logger=logger,
    )

    growth = compute_period_growth(snapshots, "2024-02", "2024-03")

    assert growth.start_net_worth == Decimal("1100.00")
    assert growth.total_inflows == Decimal("100.00")
    assert growth.nominal_growth == Decimal("0.0909")
    with pytest.raises(ValueError):
        compute_period_growth(snapshots, "2025-01", "2025-02")


def test_period_growth_ignores_index_when_inflation_disabled(
    make_snapshot,
    nominal_settings,
    logger,
) -> None:
    """Without inflation adjustment real growth matches monthly returns."""
    dashboard = build_dashboard(
        [
            make_snapshot("2024-01", cash="1000", index="100"),
            make_snapshot("2024-02", cash="1100", index="110"),
        ],
        nominal_settings,
        generated_at="2024-03-01T00:00:00+00:00",
        logger=logger,
    )

    growth = compute_period_growth(
        dashboard.snapshots,
        inflation_adjusted=dashboard.metadata.inflation_adjusted,
    )

    assert dashboard.metadata.inflation_adjusted is False
    assert dashboard.latest.performance.real_return == Decimal("0.1000")
    assert growth.nominal_growth == Decimal("0.1000")
    assert growth.cumulative_inflation == Decimal("0")
    assert growth.real_growth == Decimal("0.1000")
