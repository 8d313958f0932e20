#!/usr/bin/env python3
"""
Streamlit utilities shared by the dashboard views: cached feed loaders and
rendering helpers for cards, badges and styled tables.
"""

import logging
from typing import List, Optional

import pandas as pd
import streamlit as st
from dotenv import load_dotenv

from config.settings import get_settings
from display.table_formatter import SummaryCard, TableRow
from market_data.data_fetcher import FetchResult, MarketDataError, MarketDataFetcher
from market_data.mock_data import get_mock_feed
from log_handler import log_execution_time

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

_CACHE_TTL = get_settings().get_cache_ttl()

TONE_CSS = {
    "positive": "color: #16a34a",
    "negative": "color: #dc2626",
    "green": "background-color: #dcfce7; color: #166534",
    "orange": "background-color: #fef9c3; color: #854d0e",
    "red": "background-color: #fee2e2; color: #991b1b",
    "gray": "background-color: #f3f4f6; color: #1f2937",
}

MARKDOWN_TONES = {
    "positive": "green",
    "negative": "red",
}


@st.cache_data(ttl=_CACHE_TTL, show_spinner=False)
@log_execution_time('streamlit_utils')
def load_market_feed(url: str) -> FetchResult:
    """Load the market feed; raises MarketDataError on failure.

    Failures are not cached, so the next rerun retries the request.
    """
    return MarketDataFetcher().fetch_feed(url)


@st.cache_data(ttl=_CACHE_TTL, show_spinner=False)
@log_execution_time('streamlit_utils')
def _load_live_investment_feed(url: str) -> FetchResult:
    return MarketDataFetcher().fetch_feed(url)


def load_investment_feed(url: str) -> FetchResult:
    """Load the investment feed, falling back to the embedded mock feed.

    Only live results are cached; while the feed is down every rerun tries
    it again.
    """
    try:
        return _load_live_investment_feed(url)
    except MarketDataError as e:
        logger.warning(f"Investment feed unavailable, using sample data: {e}")
        return FetchResult(get_mock_feed(), "mock", url=url, error=str(e))


def clear_feed_cache() -> None:
    """Drop cached feeds so the next load hits the network."""
    load_market_feed.clear()
    _load_live_investment_feed.clear()
    logger.info("Feed cache cleared")


def render_error_banner(message: str) -> None:
    st.error(f"⚠️ {message}")


def render_market_status(status: str) -> None:
    """Status badge: green when open, gray when closed."""
    if status == "Open":
        st.markdown(":green[● Market Open]")
    else:
        st.markdown(":gray[● Market Closed]")


def render_summary_cards(cards: List[SummaryCard]) -> None:
    """Render cards as a row of metrics with optional colored captions."""
    if not cards:
        return
    columns = st.columns(len(cards))
    for column, card in zip(columns, cards):
        with column:
            st.metric(card.title, card.value)
            if card.detail:
                color = MARKDOWN_TONES.get(card.tone)
                st.caption(f":{color}[{card.detail}]" if color else card.detail)


def rows_to_dataframe(rows: List[TableRow], columns: Optional[List[str]] = None) -> pd.DataFrame:
    if not rows:
        return pd.DataFrame(columns=columns or [])
    columns = columns or list(rows[0].cells.keys())
    return pd.DataFrame([row.cells for row in rows], columns=columns)


def _tone_styles(df: pd.DataFrame, rows: List[TableRow]) -> pd.DataFrame:
    styles = pd.DataFrame("", index=df.index, columns=df.columns)
    for i, row in enumerate(rows):
        for column, tone in row.tones.items():
            if column in styles.columns:
                styles.iloc[i, styles.columns.get_loc(column)] = TONE_CSS.get(tone, "")
    return styles


def render_table(rows: List[TableRow], empty_message: str = "No assets found") -> None:
    """Render table rows as a styled dataframe, or an info box when empty."""
    if not rows:
        st.info(empty_message)
        return
    df = rows_to_dataframe(rows)
    styled = df.style.apply(lambda frame: _tone_styles(frame, rows), axis=None)
    st.dataframe(styled, hide_index=True)
