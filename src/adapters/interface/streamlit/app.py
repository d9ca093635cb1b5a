"""Streamlit dashboard entry point."""

from collections.abc import Mapping, Sequence
from decimal import Decimal

import streamlit as st
import altair as alt

from src.application.use_cases.get_snapshot_entries import (
    SnapshotEntriesView,
)
from src.domain.errors import PipelineError
from src.domain.models import Dashboard, PeriodGrowth
from src.domain.services.performance import compute_period_growth
from src.infrastructure.container import (
    build_dashboard_use_case,
    build_snapshot_entries_use_case,
)
from src.infrastructure.logging.logger import get_usage_logger


PALETTE = [
    "#1b9aaa",
    "#2e7d32",
    "#f4a261",
    "#e76f51",
    "#457b9d",
    "#f6c453",
    "#6c8ead",
    "#a0c4ff",
]


def _fetch_dashboard() -> Dashboard:
    """Build the dashboard from the configured snapshot directory."""
    use_case = build_dashboard_use_case(write_output=False)
    return use_case.execute()


@st.cache_data(show_spinner=False)
def _load_dashboard(schema_version: int = 1) -> Dashboard:
    """Cached wrapper around _fetch_dashboard for Streamlit sessions."""
    _ = schema_version
    return _fetch_dashboard()


def _fetch_snapshot_entries(month: str) -> SnapshotEntriesView:
    """Load the converted entries of one month."""
    use_case = build_snapshot_entries_use_case()
    return use_case.execute(month)


@st.cache_data(show_spinner=False)
def _load_snapshot_entries(month: str) -> SnapshotEntriesView:
    """Cached wrapper around _fetch_snapshot_entries."""
    return _fetch_snapshot_entries(month)


def _format_currency(value: Decimal, currency_code: str) -> str:
    """Format currency values for display."""
    symbol = "€" if currency_code == "EUR" else currency_code
    return f"{value:,.2f} {symbol}"


def _format_percent(ratio: Decimal) -> str:
    """Format a ratio as a signed percentage."""
    percent = ratio * Decimal("100")
    sign = "+" if percent > 0 else ""
    return f"{sign}{percent:.2f}%"


def _prepare_net_worth_series(
    dashboard: Dashboard,
) -> list[dict[str, str | float]]:
    """Flatten nominal and real net worth into Altair rows."""
    rows: list[dict[str, str | float]] = []
    for snapshot in dashboard.snapshots:
        rows.append(
            {
                "month": snapshot.month,
                "series": "Nominal",
                "amount": float(snapshot.totals.net_worth),
            }
        )
        rows.append(
            {
                "month": snapshot.month,
                "series": "Real",
                "amount": float(snapshot.real_wealth.net_worth_real),
            }
        )
    return rows


def _render_net_worth_chart(dashboard: Dashboard) -> None:
    """Render the nominal and real net worth lines."""
    data = _prepare_net_worth_series(dashboard)
    if not data:
        st.info("No snapshots available for the chart.")
        return
    chart = alt.Chart(alt.Data(values=data)).mark_line(point=True).encode(
        x=alt.X("month:O", title=None),
        y=alt.Y(
            "amount:Q",
            title=f"Net worth ({dashboard.metadata.base_currency})",
        ),
        color=alt.Color(
            "series:N",
            scale=alt.Scale(range=PALETTE[:2]),
            legend=alt.Legend(orient="bottom", title=None),
        ),
        tooltip=[
            alt.Tooltip("month:O"),
            alt.Tooltip("series:N"),
            alt.Tooltip("amount:Q", format=",.2f"),
        ],
    ).properties(height=360)
    st.subheader("Net Worth Over Time")
    st.altair_chart(chart, width="stretch")


def _prepare_donut_chart_data(
    amounts: Mapping[str, Decimal],
    currency_code: str,
    max_categories: int = 6,
) -> tuple[list[dict[str, str | float]], Decimal]:
    """Prepare donut chart data with a Top-N + Other grouping.

    Args:
        amounts: Base-currency totals keyed by category.
        currency_code: Currency used for labels.
        max_categories: Maximum categories to keep before grouping into Other.

    Returns:
        Tuple with Altair-ready chart data and the total amount.
    """
    sorted_items = sorted(
        ((name, amount) for name, amount in amounts.items() if amount > 0),
        key=lambda item: item[1],
        reverse=True,
    )
    top_items = sorted_items[:max_categories]
    other_amount = sum(
        (amount for _, amount in sorted_items[max_categories:]),
        start=Decimal("0"),
    )
    if other_amount != 0:
        top_items = [*top_items, ("Other", other_amount)]
    total_amount = sum(
        (amount for _, amount in sorted_items),
        start=Decimal("0"),
    )
    data: list[dict[str, str | float]] = []
    for category, amount in top_items:
        share = (
            (amount / total_amount) * Decimal("100")
            if total_amount
            else Decimal("0")
        )
        data.append(
            {
                "category": category,
                "amount": float(amount),
                "amount_label": _format_currency(amount, currency_code),
                "share_label": f"{share:.1f}%",
            }
        )
    return data, total_amount


def _render_asset_category_chart(
    amounts: Mapping[str, Decimal],
    currency_code: str,
    title: str,
    chart_size: int = 320,
) -> None:
    """Render a donut chart of asset amounts by category."""
    data, _ = _prepare_donut_chart_data(amounts, currency_code)
    if not data:
        st.info("No asset amounts available for the chart.")
        return
    hover = alt.selection_point(
        name="hover",
        fields=["category"],
        on="view:mouseover",
        clear="view:mouseout",
        empty=False,
    )
    base = alt.Chart(alt.Data(values=data)).mark_arc(
        innerRadius=chart_size * 0.4,
        cornerRadius=8,
        padAngle=0.02,
    ).encode(
        theta=alt.Theta("amount:Q"),
        color=alt.Color(
            "category:N",
            scale=alt.Scale(range=PALETTE),
            legend=alt.Legend(orient="bottom", title=None, columns=3),
        ),
        opacity=alt.condition(hover, alt.value(1.0), alt.value(0.4)),
        order=alt.Order("amount:Q", sort="descending"),
        tooltip=[
            alt.Tooltip("category:N"),
            alt.Tooltip("amount_label:N"),
            alt.Tooltip("share_label:N"),
        ],
    )
    hover_text = alt.Chart(alt.Data(values=data)).transform_filter(
        hover
    ).mark_text(
        align="center",
        baseline="middle",
        fontSize=16,
        fontWeight="bold",
    ).encode(text="amount_label:N")
    chart = alt.layer(base, hover_text).add_params(hover).properties(
        width=chart_size,
        height=chart_size,
    )
    st.subheader(title)
    st.altair_chart(chart, width="stretch")


def _yearly_rows(dashboard: Dashboard) -> list[dict[str, str | int]]:
    """Return table rows for the yearly statistics."""
    currency = dashboard.metadata.base_currency
    return [
        {
            "Year": stats.year,
            "Months": stats.months_count,
            "Income": _format_currency(stats.total_income, currency),
            "Expenses": _format_currency(stats.total_expenses, currency),
            "Savings": _format_currency(stats.total_savings, currency),
            "Avg. save rate": _format_percent(stats.average_save_rate),
        }
        for stats in dashboard.yearly_stats
    ]


def _entry_rows(view: SnapshotEntriesView) -> list[dict[str, str]]:
    """Return table rows for a month's converted entries."""
    return [
        {
            "Name": entry.name,
            "Type": entry.type,
            "Amount": f"{entry.original_amount:,.2f} {entry.currency}",
            "Rate": str(entry.rate),
            "Value": _format_currency(entry.amount, view.base_currency),
        }
        for entry in view.entries
    ]


def _render_headline(dashboard: Dashboard) -> None:
    """Render the latest-month metrics."""
    latest = dashboard.latest
    currency = dashboard.metadata.base_currency
    st.caption(f"Latest snapshot: {latest.month}")
    net_worth_col, real_col, save_col, twr_col = st.columns(4)
    net_worth_col.metric(
        "Net Worth",
        _format_currency(latest.totals.net_worth, currency),
        _format_percent(latest.performance.nominal_return),
    )
    real_col.metric(
        "Real Net Worth",
        _format_currency(latest.real_wealth.net_worth_real, currency),
        _format_percent(latest.real_wealth.change_pct_from_prev),
    )
    save_col.metric(
        "Save Rate",
        _format_percent(latest.cash_flow.save_rate),
    )
    twr_col.metric(
        "Real TWR (cumulative)",
        _format_percent(latest.performance.twr_cumulative - 1),
    )


def _render_period_growth(growth: PeriodGrowth, currency: str) -> None:
    """Render growth metrics for the selected window."""
    st.subheader(f"Growth {growth.start_month} to {growth.end_month}")
    inflow_col, nominal_col, inflation_col, real_col = st.columns(4)
    inflow_col.metric(
        "Inflows",
        _format_currency(growth.total_inflows, currency),
    )
    nominal_col.metric(
        "Nominal growth",
        _format_percent(growth.nominal_growth),
    )
    inflation_col.metric(
        "Inflation",
        _format_percent(growth.cumulative_inflation),
        delta_color="inverse",
    )
    real_col.metric("Real growth", _format_percent(growth.real_growth))


def _render_dashboard(dashboard: Dashboard) -> None:
    """Render the dashboard page."""
    months: Sequence[str] = dashboard.months
    _render_headline(dashboard)

    start_month = st.sidebar.selectbox("From", months, index=0)
    end_month = st.sidebar.selectbox("To", months, index=len(months) - 1)
    if start_month > end_month:
        st.warning("The start month must not be after the end month.")
    else:
        growth = compute_period_growth(
            dashboard.snapshots,
            start_month,
            end_month,
            inflation_adjusted=dashboard.metadata.inflation_adjusted,
        )
        _render_period_growth(growth, dashboard.metadata.base_currency)

    _render_net_worth_chart(dashboard)
    latest = dashboard.latest
    _render_asset_category_chart(
        latest.by_category.assets,
        dashboard.metadata.base_currency,
        f"Assets by Category ({latest.month})",
    )
    st.subheader("Yearly Statistics")
    st.dataframe(_yearly_rows(dashboard), width="stretch", hide_index=True)

    warnings = dashboard.warnings
    if warnings:
        st.subheader("Warnings")
        for month, warning in warnings:
            st.caption(f"{month} [{warning.code}] {warning.message}")


def _render_entries(dashboard: Dashboard) -> None:
    """Render the per-month entries page."""
    months = list(reversed(dashboard.months))
    month = st.sidebar.selectbox("Month", months, index=0)
    try:
        view = _load_snapshot_entries(month)
    except PipelineError as exc:
        st.error(f"Unable to load entries for {month}: {exc}")
        return
    st.subheader(f"Entries for {view.month}")
    snapshot = dashboard.snapshot_for(month)
    if snapshot is not None:
        currency = dashboard.metadata.base_currency
        assets_col, liabilities_col, net_worth_col = st.columns(3)
        assets_col.metric(
            "Assets",
            _format_currency(snapshot.totals.assets, currency),
        )
        liabilities_col.metric(
            "Liabilities",
            _format_currency(snapshot.totals.liabilities, currency),
        )
        net_worth_col.metric(
            "Net Worth",
            _format_currency(snapshot.totals.net_worth, currency),
        )
    st.caption(f"{len(view.entries)} entries in {view.base_currency}")
    st.dataframe(_entry_rows(view), width="stretch", hide_index=True)


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Net Worth Dashboard", layout="wide")
    st.title("Net Worth Dashboard")

    if st.sidebar.button("Reload data"):
        st.cache_data.clear()
    page = st.sidebar.selectbox("Page", ["Dashboard", "Entries"])
    get_usage_logger().info(f"page_view page={page}")

    try:
        dashboard = _load_dashboard(schema_version=1)
    except PipelineError as exc:
        st.error(f"Unable to build the dashboard: {exc}")
        return
    if not dashboard.snapshots:
        st.warning("No snapshots found. Add monthly files first.")
        return

    if page == "Dashboard":
        _render_dashboard(dashboard)
    else:
        _render_entries(dashboard)


if __name__ == "__main__":  # pragma: no cover
    main()
