"""Domain services for calendar-year cash-flow rollups."""

from collections.abc import Iterable
from decimal import Decimal

from src.domain.models import ComputedSnapshot, Settings, YearlyStats
from src.utils.decimal_utils import quantize


def compute_yearly_stats(
    snapshots: Iterable[ComputedSnapshot],
    settings: Settings,
) -> list[YearlyStats]:
    """Fold monthly cash-flow results into one record per calendar year.

    Years are keyed by the ``YYYY`` prefix of the month key and emitted in
    ascending order. Partial years keep their true month count.

    Args:
        snapshots: Computed snapshots, in any order.
        settings: Pipeline settings (rounding precision).

    Returns:
        list[YearlyStats]: One entry per year present in the input.
    """
    grouped: dict[int, list[ComputedSnapshot]] = {}
    for snapshot in sorted(snapshots, key=lambda item: item.month):
        grouped.setdefault(snapshot.year, []).append(snapshot)

    stats: list[YearlyStats] = []
    for year in sorted(grouped):
        months = grouped[year]
        total_income = sum(
            (item.cash_flow.income for item in months),
            Decimal("0"),
        )
        total_expenses = sum(
            (item.cash_flow.expenses for item in months),
            Decimal("0"),
        )
        total_savings = sum(
            (item.cash_flow.net_cash_flow for item in months),
            Decimal("0"),
        )
        save_rates = sum(
            (item.cash_flow.save_rate for item in months),
            Decimal("0"),
        )
        stats.append(
            YearlyStats(
                year=year,
                months_count=len(months),
                total_income=quantize(total_income, settings.money_places),
                total_expenses=quantize(
                    total_expenses,
                    settings.money_places,
                ),
                total_savings=quantize(total_savings, settings.money_places),
                average_save_rate=quantize(
                    save_rates / len(months),
                    settings.ratio_places,
                ),
            )
        )
    return stats


__all__ = ["compute_yearly_stats"]
