"""
AIPE investment view.

Loads the investment feed (falling back to the embedded sample feed when the
remote feed is unreachable) and shows portfolio cards, performance, volume
and returns charts, the filterable asset table and per-asset risk metrics.
"""

import logging
from typing import Any, Dict, List, Optional

import pandas as pd
import streamlit as st

from analytics.filters import (
    ALL,
    filter_investment_assets,
    filter_time_series_by_asset,
    get_asset_ids,
    get_asset_types,
)
from analytics.sheets import get_sheet
from analytics.summaries import build_risk_profiles, calculate_portfolio_summary, summarize_returns
from config.constants import INVESTMENT_VIEW_CURRENCY, RISK_LEVELS
from config.settings import Settings, get_settings
from display.formatters import (
    currency_symbol,
    format_currency,
    format_large_number,
    format_signed_percent,
)
from display.table_formatter import SummaryCard, change_card, investment_asset_rows
from market_data.data_fetcher import FetchResult, MarketDataError

from chart_utils import create_price_chart, create_returns_chart, create_volume_chart
from streamlit_utils import load_investment_feed, render_error_banner, render_summary_cards, render_table

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Failed to load investment data"


def _load_feed(settings: Settings) -> Optional[FetchResult]:
    with st.spinner("Loading AIPE Investment Market data..."):
        try:
            return load_investment_feed(settings.get_investment_feed_url())
        except MarketDataError as e:
            logger.error(f"Investment feed load failed: {e}")
            render_error_banner(LOAD_ERROR_MESSAGE)
            return None


def _render_source_badge(result: Optional[FetchResult]) -> None:
    if result is None:
        return
    if result.is_fallback:
        st.warning("⚠️ Live feed unavailable, showing sample data")
    else:
        st.markdown(":green[● Live Data]")
    st.caption(f"Last updated: {result.fetched_at.strftime('%H:%M:%S')}")


def _render_cards(assets: List[Dict[str, Any]], time_series: List[Dict[str, Any]], currency: str) -> None:
    summary = calculate_portfolio_summary(assets)
    asset_types = get_asset_types(assets, "AssetType")
    sign = "+" if summary.total_change >= 0 else ""

    render_summary_cards([
        SummaryCard("Portfolio Value",
                    format_large_number(summary.total_value, currency, include_thousands=True),
                    f"Across {summary.assets_count} assets"),
        change_card("Total Change", summary.total_change,
                    f"{sign}{format_currency(summary.total_change, currency)}",
                    f"{format_signed_percent(summary.total_change_percent)} average"),
        SummaryCard("Asset Classes", str(len(asset_types)),
                    ", ".join(str(t) for t in asset_types) or "No data"),
        SummaryCard("Market Activity", str(len(time_series)), "Data points available"),
    ])


def _render_charts(feed: Dict[str, Any], assets: List[Dict[str, Any]], currency: str) -> None:
    time_series = get_sheet(feed, "TimeSeries")
    returns = get_sheet(feed, "Returns")

    performance_tab, volume_tab, returns_tab = st.tabs(["Performance", "Volume", "Returns"])

    with performance_tab:
        title_col, asset_col = st.columns([3, 1])
        with title_col:
            st.subheader("Price Performance")
            st.caption("Historical price movements")
        with asset_col:
            selected_asset = st.selectbox(
                "Select Asset",
                [ALL] + get_asset_ids(assets),
                format_func=lambda a: "All Assets" if a == ALL else str(a),
                key="aipe_asset",
            )
        series = filter_time_series_by_asset(time_series, selected_asset)
        st.plotly_chart(create_price_chart(series, currency_symbol=currency_symbol(currency)),
                        key="aipe_price_chart")

    with volume_tab:
        st.subheader("Trading Volume")
        st.caption("Daily trading volume trends")
        st.plotly_chart(create_volume_chart(series), key="aipe_volume_chart")

    with returns_tab:
        st.subheader("Asset Returns")
        st.caption("Performance across different time periods")
        st.plotly_chart(create_returns_chart(returns), key="aipe_returns_chart")
        returns_table = summarize_returns(returns)
        if not returns_table.empty:
            st.dataframe(returns_table, hide_index=True)


def _render_assets(assets: List[Dict[str, Any]], currency: str) -> None:
    st.subheader("Investment Assets")
    st.caption("Comprehensive view of your investment portfolio")

    search_col, type_col, risk_col = st.columns([2, 1, 1])
    with search_col:
        search = st.text_input("Search", placeholder="Search assets...", key="aipe_search",
                               label_visibility="collapsed")
    with type_col:
        asset_type = st.selectbox(
            "Asset Type",
            [ALL] + get_asset_types(assets, "AssetType"),
            format_func=lambda t: "All Types" if t == ALL else str(t),
            key="aipe_type",
            label_visibility="collapsed",
        )
    with risk_col:
        risk = st.selectbox(
            "Risk Level",
            [ALL] + RISK_LEVELS,
            format_func=lambda r: "All Risk Levels" if r == ALL else f"{r} Risk",
            key="aipe_risk",
            label_visibility="collapsed",
        )

    filtered = filter_investment_assets(assets, search, asset_type, risk)
    render_table(investment_asset_rows(filtered, currency))


def _render_risk_metrics(feed: Dict[str, Any], assets: List[Dict[str, Any]]) -> None:
    profiles = build_risk_profiles(assets, get_sheet(feed, "Risks"))
    if not profiles:
        return
    with st.expander("Risk Metrics"):
        df = pd.DataFrame([
            {
                "Asset": p.asset_name or p.asset_id,
                "ID": p.asset_id,
                "Risk": p.risk or "N/A",
                "VaR": p.var,
                "Beta": p.beta,
                "Volatility": p.volatility,
            }
            for p in profiles
        ])
        st.dataframe(df, hide_index=True)


def render(settings: Optional[Settings] = None) -> None:
    """Render the AIPE investment dashboard."""
    settings = settings or get_settings()
    currency = settings.get('dashboard.investment_currency', INVESTMENT_VIEW_CURRENCY)

    st.title("📈 AIPE Investment Market")
    st.caption("Advanced Investment Portfolio & Analytics Platform")

    result = _load_feed(settings)
    _render_source_badge(result)

    feed = result.data if result else {}
    assets = get_sheet(feed, "Assets")

    _render_cards(assets, get_sheet(feed, "TimeSeries"), currency)
    _render_charts(feed, assets, currency)
    _render_assets(assets, currency)
    _render_risk_metrics(feed, assets)
