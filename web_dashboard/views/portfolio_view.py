"""
Static portfolio view backed by the embedded demo portfolio.
"""

from typing import Optional

import streamlit as st

from analytics.filters import ALL, filter_portfolio_assets, get_asset_types
from config.constants import INVESTMENT_VIEW_CURRENCY, RISK_LEVELS
from config.settings import Settings, get_settings
from display.formatters import currency_symbol, format_large_number, format_signed_percent
from display.table_formatter import SummaryCard, change_card, portfolio_asset_rows
from market_data.mock_data import DEMO_ASSETS, DEMO_PORTFOLIO_SUMMARY, DEMO_TIME_SERIES

from chart_utils import create_price_chart, create_volume_chart
from streamlit_utils import render_summary_cards, render_table


def render(settings: Optional[Settings] = None) -> None:
    """Render the demo portfolio dashboard."""
    settings = settings or get_settings()
    currency = settings.get('dashboard.investment_currency', INVESTMENT_VIEW_CURRENCY)
    summary = DEMO_PORTFOLIO_SUMMARY

    st.title("💼 Investment Portfolio")
    st.caption("Monitor and analyze your investment portfolio")

    day_change = summary["day_change"]
    day_sign = "+" if day_change >= 0 else ""
    render_summary_cards([
        SummaryCard("Total Portfolio Value", format_large_number(summary["total_value"], currency),
                    f"{format_signed_percent(summary['total_return_percent'])} from last month"),
        SummaryCard("Total Return", format_large_number(summary["total_return"], currency),
                    f"{format_signed_percent(summary['total_return_percent'])} total return", "positive"),
        change_card("Day Change", day_change, f"{day_sign}{format_large_number(day_change, currency)}",
                    f"{format_signed_percent(summary['day_change_percent'])} today"),
        SummaryCard("Active Assets", str(len(DEMO_ASSETS)),
                    f"Across {len(get_asset_types(DEMO_ASSETS, 'type'))} asset classes"),
    ])

    price_col, volume_col = st.columns(2)
    with price_col:
        st.subheader("Portfolio Performance")
        st.caption(f"Price movement over the last {len(DEMO_TIME_SERIES)} trading days")
        st.plotly_chart(create_price_chart(DEMO_TIME_SERIES, currency_symbol=currency_symbol(currency)),
                        key="portfolio_price_chart")
    with volume_col:
        st.subheader("Trading Volume")
        st.caption("Daily trading volume trends")
        st.plotly_chart(create_volume_chart(DEMO_TIME_SERIES), key="portfolio_volume_chart")

    st.subheader("Investment Assets")
    search_col, type_col, risk_col = st.columns([2, 1, 1])
    with search_col:
        search = st.text_input("Search", placeholder="Search assets...", key="portfolio_search",
                               label_visibility="collapsed")
    with type_col:
        asset_type = st.selectbox(
            "Asset Type",
            [ALL] + get_asset_types(DEMO_ASSETS, "type"),
            format_func=lambda t: "All Types" if t == ALL else str(t),
            key="portfolio_type",
            label_visibility="collapsed",
        )
    with risk_col:
        risk = st.selectbox(
            "Risk Level",
            [ALL] + RISK_LEVELS,
            format_func=lambda r: "All Risk Levels" if r == ALL else f"{r} Risk",
            key="portfolio_risk",
            label_visibility="collapsed",
        )

    filtered = filter_portfolio_assets(DEMO_ASSETS, search, asset_type, risk)
    render_table(portfolio_asset_rows(filtered, currency))
