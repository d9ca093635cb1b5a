"""Tests for snapshot assembly and dashboard building."""

from decimal import Decimal

import pytest

from src.domain.errors import (
    DuplicateMonthError,
    MalformedSnapshotError,
    MissingIndexError,
    MissingRateError,
)
from src.domain.models import (
    EcliIndices,
    LocationSettings,
    NetWorthEntry,
    Settings,
)
from src.domain.services.assembler import (
    assemble_snapshots,
    build_dashboard,
    order_snapshots,
)


def test_order_snapshots_sorts_months(make_snapshot) -> None:
    """Input order should not matter."""
    ordered = order_snapshots(
        [
            make_snapshot("2024-03"),
            make_snapshot("2023-12"),
            make_snapshot("2024-01"),
        ]
    )

    assert [item.month for item in ordered] == [
        "2023-12",
        "2024-01",
        "2024-03",
    ]


def test_order_snapshots_rejects_duplicates(make_snapshot) -> None:
    """Two records for the same month abort the run."""
    with pytest.raises(DuplicateMonthError) as exc_info:
        order_snapshots(
            [
                make_snapshot("2024-01"),
                make_snapshot("2024-02"),
                make_snapshot("2024-01"),
            ]
        )

    assert exc_info.value.months == ["2024-01"]


def test_order_snapshots_rejects_bad_month_keys(make_snapshot) -> None:
    """Month keys must be zero-padded YYYY-MM."""
    with pytest.raises(MalformedSnapshotError):
        order_snapshots([make_snapshot("2024-1")])


def test_assemble_snapshots_converts_foreign_entries(
    make_snapshot,
    settings,
    logger,
) -> None:
    """100 USD at 0.92 should contribute 92.00 EUR."""
    raw = make_snapshot(
        "2024-01",
        net_worth_entries=(
            NetWorthEntry("Brokerage", "investments", "USD", Decimal("100")),
        ),
        fx_rates={"USD": Decimal("0.92")},
    )

    (snapshot,) = assemble_snapshots([raw], settings, logger=logger)

    assert snapshot.totals.net_worth == Decimal("92.00")
    assert snapshot.by_category.assets["investments"] == Decimal("92.00")


def test_assemble_snapshots_keeps_net_worth_identity(
    make_snapshot,
    settings,
    logger,
) -> None:
    """Net worth always equals assets minus liabilities."""
    raw = make_snapshot(
        "2024-01",
        net_worth_entries=(
            NetWorthEntry("Checking", "cash", "EUR", Decimal("1000.555")),
            NetWorthEntry("Loan", "liabilities", "GBP", Decimal("333.333")),
            NetWorthEntry("Car", "personal", "EUR", Decimal("4999.995")),
        ),
        fx_rates={"GBP": Decimal("1.17")},
    )

    (snapshot,) = assemble_snapshots([raw], settings, logger=logger)

    totals = snapshot.totals
    assert totals.net_worth == totals.assets - totals.liabilities
    assert totals.assets == sum(snapshot.by_category.assets.values())
    assert totals.liabilities == Decimal("390.00")


def test_unmapped_entry_is_excluded_with_warning(
    make_snapshot,
    settings,
    logger,
) -> None:
    """A crypto holding without a category should not change totals."""
    raw = make_snapshot(
        "2024-01",
        net_worth_entries=(
            NetWorthEntry("Checking", "cash", "EUR", Decimal("1000")),
            NetWorthEntry("Cold wallet", "crypto", "EUR", Decimal("7000")),
        ),
    )

    (snapshot,) = assemble_snapshots([raw], settings, logger=logger)

    assert snapshot.totals.net_worth == Decimal("1000.00")
    assert [warning.code for warning in snapshot.warnings] == [
        "unmapped_category"
    ]


def test_missing_rate_aborts_run(make_snapshot, settings, logger) -> None:
    """The default policy fails on a currency without a rate."""
    raw = make_snapshot(
        "2024-01",
        net_worth_entries=(
            NetWorthEntry("Account", "cash", "CHF", Decimal("10")),
        ),
    )

    with pytest.raises(MissingRateError):
        assemble_snapshots([raw], settings, logger=logger)


def test_missing_index_aborts_run(make_snapshot, settings, logger) -> None:
    """Inflation enabled requires an index for every month."""
    with pytest.raises(MissingIndexError):
        assemble_snapshots(
            [make_snapshot("2024-01", index=None)],
            settings,
            logger=logger,
        )


def test_save_rate_is_zero_without_income(
    make_snapshot,
    settings,
    logger,
) -> None:
    """Months without income report a zero save rate."""
    (snapshot,) = assemble_snapshots(
        [make_snapshot("2024-01", salary="0", rent="800")],
        settings,
        logger=logger,
    )

    assert snapshot.cash_flow.save_rate == Decimal("0")
    assert snapshot.cash_flow.net_cash_flow == Decimal("-800.00")


def test_fx_rates_are_emitted_sorted(make_snapshot, settings, logger) -> None:
    """FX tables should have a stable key order."""
    raw = make_snapshot(
        "2024-01",
        fx_rates={"USD": Decimal("0.92"), "CHF": Decimal("1.04")},
    )

    (snapshot,) = assemble_snapshots([raw], settings, logger=logger)

    assert list(snapshot.fx_rates) == ["CHF", "USD"]


def test_location_adjustment_attached_when_enabled(
    make_snapshot,
    logger,
) -> None:
    """Months with ECLI values get a location adjustment."""
    settings = Settings(
        location=LocationSettings(
            enabled=True,
            rent_index_weight=Decimal("1"),
        ),
        purchasing_power_policy="chained",
    )
    raw = make_snapshot(
        "2024-01",
        cash="1000",
        index="125",
        ecli=EcliIndices(
            rent_index=Decimal("50"),
            groceries_index=Decimal("0"),
            cost_of_living_index=Decimal("0"),
        ),
    )

    (snapshot,) = assemble_snapshots([raw], settings, logger=logger)

    assert snapshot.location.net_worth_normalized == Decimal("2000.00")
    assert snapshot.purchasing_power.net_worth == Decimal("1600.00")


def test_build_dashboard_is_deterministic(
    make_snapshot,
    settings,
    logger,
) -> None:
    """Identical input and clock yield identical dashboards."""
    raws = [
        make_snapshot("2024-02", cash="1200", salary="300", index="101"),
        make_snapshot("2024-01", cash="1000", salary="200", index="100"),
    ]

    first = build_dashboard(
        raws,
        settings,
        generated_at="2024-03-01T00:00:00+00:00",
        logger=logger,
    )
    second = build_dashboard(
        list(reversed(raws)),
        settings,
        generated_at="2024-03-01T00:00:00+00:00",
        logger=logger,
    )

    assert first == second
    assert first.months == ["2024-01", "2024-02"]
    assert first.metadata.base_currency == "EUR"
    assert first.metadata.settings_version == 1
    assert len(first.yearly_stats) == 1
    assert first.latest.month == "2024-02"


def test_build_dashboard_empty_input(settings, logger) -> None:
    """No input produces an empty dashboard."""
    dashboard = build_dashboard(
        [],
        settings,
        generated_at="2024-03-01T00:00:00+00:00",
        logger=logger,
    )

    assert dashboard.snapshots == []
    assert dashboard.yearly_stats == []
    assert dashboard.latest is None
