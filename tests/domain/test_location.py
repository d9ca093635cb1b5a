"""Tests for cost-of-living normalization."""

from decimal import Decimal

from src.domain.models import EcliIndices, LocationSettings, Settings
from src.domain.services.location import (
    combine_purchasing_power,
    compute_ecli_norm,
    normalize_location,
)


def _location_settings(**kwargs) -> Settings:
    return Settings(
        location=LocationSettings(
            enabled=True,
            rent_index_weight=Decimal("0.3"),
            groceries_index_weight=Decimal("0.2"),
            cost_of_living_index_weight=Decimal("0.5"),
        ),
        **kwargs,
    )


def _ecli(value: str) -> EcliIndices:
    return EcliIndices(
        rent_index=Decimal(value),
        groceries_index=Decimal(value),
        cost_of_living_index=Decimal(value),
    )


def test_compute_ecli_norm_weights_indices() -> None:
    """The weighted index is normalized around New York = 100."""
    ecli = EcliIndices(
        rent_index=Decimal("40"),
        groceries_index=Decimal("60"),
        cost_of_living_index=Decimal("60"),
    )

    assert compute_ecli_norm(ecli, _location_settings()) == Decimal("0.54")


def test_compute_ecli_norm_zero_falls_back_to_one() -> None:
    """A zero weighted index should not divide by zero."""
    assert compute_ecli_norm(_ecli("0"), _location_settings()) == 1


def test_normalize_location_scales_net_worth(logger) -> None:
    """Cheaper places should increase normalized net worth."""
    adjustment, warnings = normalize_location(
        Decimal("10000"),
        _ecli("50"),
        _location_settings(),
        logger=logger,
    )

    assert adjustment.ecli_norm == Decimal("0.5")
    assert adjustment.scale == Decimal("2")
    assert adjustment.net_worth_normalized == Decimal("20000.00")
    assert adjustment.advantage_pct == Decimal("100.00")
    assert warnings == ()


def test_normalize_location_warns_on_low_index(logger) -> None:
    """Implausibly low indices should be flagged."""
    adjustment, warnings = normalize_location(
        Decimal("1000"),
        _ecli("10"),
        _location_settings(),
        logger=logger,
    )

    assert adjustment is not None
    assert [warning.code for warning in warnings] == ["ecli_low"]


def test_normalize_location_disabled_returns_none(settings, logger) -> None:
    """Without location settings no adjustment is produced."""
    adjustment, warnings = normalize_location(
        Decimal("1000"),
        _ecli("50"),
        settings,
        logger=logger,
    )

    assert adjustment is None
    assert warnings == ()


def test_combine_purchasing_power_chained(logger) -> None:
    """The chained policy divides the deflator by the ECLI norm."""
    settings = _location_settings(purchasing_power_policy="chained")
    adjustment, _ = normalize_location(
        Decimal("10000"),
        _ecli("50"),
        settings,
        logger=logger,
    )

    record, warnings = combine_purchasing_power(
        Decimal("10000"),
        Decimal("0.8"),
        adjustment,
        settings,
        logger=logger,
    )

    assert record.scale == Decimal("1.6")
    assert record.net_worth == Decimal("16000.00")
    assert warnings == ()


def test_combine_purchasing_power_warns_on_large_scale(logger) -> None:
    """Scales above five should be flagged."""
    settings = _location_settings(purchasing_power_policy="chained")
    adjustment, _ = normalize_location(
        Decimal("100"),
        _ecli("15"),
        settings,
        logger=logger,
    )

    record, warnings = combine_purchasing_power(
        Decimal("100"),
        Decimal("1"),
        adjustment,
        settings,
        logger=logger,
    )

    assert record is not None
    assert [warning.code for warning in warnings] == [
        "purchasing_power_scale"
    ]


def test_combine_purchasing_power_independent_returns_none(logger) -> None:
    """The default policy keeps both adjustments separate."""
    settings = _location_settings()
    adjustment, _ = normalize_location(
        Decimal("10000"),
        _ecli("50"),
        settings,
        logger=logger,
    )

    record, warnings = combine_purchasing_power(
        Decimal("10000"),
        Decimal("0.8"),
        adjustment,
        settings,
        logger=logger,
    )

    assert record is None
    assert warnings == ()
