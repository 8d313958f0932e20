"""
Market dashboard view: status badge, market summary cards, price history
with range buttons and the tabbed asset table.
"""

import logging
from typing import Any, Dict, Optional

import streamlit as st

from analytics.filters import (
    ALL,
    MARKET_TABS,
    filter_market_assets,
    filter_time_series_by_range,
    get_asset_types,
    select_tab_assets,
)
from analytics.sheets import get_sheet
from analytics.summaries import calculate_market_summary
from config.constants import DATE_RANGES, DEFAULT_DATE_RANGE, MARKET_VIEW_CURRENCY
from config.settings import Settings, get_settings
from display.formatters import currency_symbol, format_large_number, format_signed_percent
from display.table_formatter import SummaryCard, change_card, market_asset_rows
from market_data.data_fetcher import MarketDataError
from market_data.market_hours import MarketHours

from chart_utils import create_empty_chart, create_price_chart
from streamlit_utils import (
    load_market_feed,
    render_error_banner,
    render_market_status,
    render_summary_cards,
    render_table,
)

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Failed to load market data. Please try again later."


def _load_feed(settings: Settings) -> Dict[str, Any]:
    """Fetch the market feed, showing the error banner on failure."""
    with st.spinner("Loading market data..."):
        try:
            return load_market_feed(settings.get_market_feed_url()).data
        except MarketDataError as e:
            logger.error(f"Market feed load failed: {e}")
            render_error_banner(LOAD_ERROR_MESSAGE)
            return {}


def _render_cards(feed: Dict[str, Any], currency: str) -> None:
    summary = calculate_market_summary(feed)
    render_summary_cards([
        SummaryCard("Total Market Cap", format_large_number(summary.total_market_cap, currency),
                    "Combined market capitalization"),
        change_card("Market Sentiment", summary.average_change,
                    format_signed_percent(summary.average_change),
                    "Average change across all assets"),
        SummaryCard("Gainers", str(summary.positive_assets), "Assets with positive returns", "positive"),
        SummaryCard("Losers", str(summary.negative_assets), "Assets with negative returns", "negative"),
    ])


def _render_performance(feed: Dict[str, Any], currency: str) -> None:
    st.subheader("Market Performance")
    st.caption("Historical price movements")
    date_range = st.radio(
        "Range",
        DATE_RANGES,
        index=DATE_RANGES.index(DEFAULT_DATE_RANGE),
        horizontal=True,
        key="market_range",
        label_visibility="collapsed",
    )
    series = filter_time_series_by_range(get_sheet(feed, "TimeSeries"), date_range)
    if series:
        fig = create_price_chart(series, currency_symbol=currency_symbol(currency), show_weekend_shading=True)
    else:
        fig = create_empty_chart("No price history available")
    st.plotly_chart(fig, key="market_price_chart")


def _render_assets(feed: Dict[str, Any], currency: str) -> None:
    st.subheader("Market Assets")
    st.caption("Comprehensive view of the Chinese investment market")

    tab = st.radio(
        "Asset class",
        list(MARKET_TABS),
        format_func=str.title,
        horizontal=True,
        key="market_tab",
        label_visibility="collapsed",
    )
    assets = select_tab_assets(feed, tab)

    search_col, type_col = st.columns([3, 1])
    with search_col:
        search = st.text_input("Search", placeholder="Search assets...", key="market_search",
                               label_visibility="collapsed")
    with type_col:
        # Keyed per tab so a type from one sheet never lingers on another
        asset_type = st.selectbox(
            "Asset Type",
            [ALL] + get_asset_types(assets),
            format_func=lambda t: "All Types" if t == ALL else str(t),
            key=f"market_type_{tab}",
            label_visibility="collapsed",
        )

    filtered = filter_market_assets(assets, search, asset_type)
    render_table(market_asset_rows(filtered, tab, currency))


def render(settings: Optional[Settings] = None) -> None:
    """Render the market dashboard."""
    settings = settings or get_settings()
    currency = settings.get('dashboard.market_currency', MARKET_VIEW_CURRENCY)

    title_col, status_col = st.columns([4, 1])
    with title_col:
        st.title("📊 Market Dashboard")
    with status_col:
        render_market_status(MarketHours(settings).get_market_status())

    feed = _load_feed(settings)
    _render_cards(feed, currency)
    _render_performance(feed, currency)
    _render_assets(feed, currency)
