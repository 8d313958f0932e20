"""
Modern sheets view.

Every array in the market feed is a sheet; the first few become tabs. Field
roles (name, code, value, change, type) are detected from each sheet's first
record, so any sheet shape can be charted and tabulated.
"""

import logging
from typing import Any, Dict, List, Optional

import streamlit as st

from analytics.filters import ALL, filter_records, get_record_types
from analytics.sheets import available_sheets, build_chart_data, extract_sheets, get_change_field, get_main_value_field
from analytics.summaries import calculate_sheet_summary
from config.constants import MAX_CHART_ROWS, MAX_CHART_SERIES, MAX_SHEET_TABS, MAX_TABLE_ROWS
from config.settings import Settings, get_settings
from display.formatters import format_compact_number
from display.table_formatter import SummaryCard, sheet_rows
from market_data.data_fetcher import MarketDataError

from chart_utils import CHART_TYPES, create_sheet_chart
from streamlit_utils import load_market_feed, render_error_banner, render_summary_cards, render_table

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "无法加载市场数据，请稍后重试。"

CHART_TYPE_LABELS = {
    "area": "面积图",
    "bar": "柱状图",
    "line": "折线图",
}


def _load_feed(settings: Settings) -> Dict[str, Any]:
    with st.spinner("加载市场数据中..."):
        try:
            return load_market_feed(settings.get_market_feed_url()).data
        except MarketDataError as e:
            logger.error(f"Sheet feed load failed: {e}")
            render_error_banner(LOAD_ERROR_MESSAGE)
            return {}


def _render_cards(records: List[Dict[str, Any]]) -> None:
    summary = calculate_sheet_summary(records)
    render_summary_cards([
        SummaryCard("数据总量", str(summary.total_items), "当前数据表记录数"),
        SummaryCard("平均值", format_compact_number(summary.average_value), "数值平均值"),
        SummaryCard("上涨数量", str(summary.positive_count), "正收益资产数量", "positive"),
        SummaryCard("下跌数量", str(summary.negative_count), "负收益资产数量", "negative"),
    ])


def _render_chart(sheet: str, records: List[Dict[str, Any]]) -> None:
    chart_data = build_chart_data(records, MAX_CHART_ROWS, MAX_CHART_SERIES)
    fig = create_sheet_chart(chart_data, get_main_value_field(records), get_change_field(records),
                             chart_type=st.session_state.get("modern_chart_type", "area"))
    if fig is None:
        return

    title_col, type_col = st.columns([3, 2])
    with title_col:
        st.subheader("数据可视化")
        st.caption(f"{sheet} - 显示前{MAX_CHART_ROWS}条记录")
    with type_col:
        st.radio(
            "Chart type",
            CHART_TYPES,
            format_func=lambda t: CHART_TYPE_LABELS.get(t, t),
            horizontal=True,
            key="modern_chart_type",
            label_visibility="collapsed",
        )
    st.plotly_chart(fig, key="modern_sheet_chart")


def render(settings: Optional[Settings] = None) -> None:
    """Render the dynamic sheets dashboard."""
    settings = settings or get_settings()

    st.title("🔷 AIPE 投资市场")
    st.caption("智能投资分析平台")

    feed = _load_feed(settings)
    sheets = extract_sheets(feed)
    tabs = available_sheets(feed)[:MAX_SHEET_TABS]

    selected = ""
    if tabs:
        selected = st.radio("数据表", tabs, horizontal=True, key="modern_sheet", label_visibility="collapsed")
    records = sheets.get(selected, [])

    _render_cards(records)

    search_col, type_col = st.columns([3, 1])
    with search_col:
        search = st.text_input("Search", placeholder="搜索数据...", key="modern_search",
                               label_visibility="collapsed")
    with type_col:
        type_filter = st.selectbox(
            "资产类型",
            [ALL] + get_record_types(records),
            format_func=lambda t: "全部类型" if t == ALL else str(t),
            key=f"modern_type_{selected}",
            label_visibility="collapsed",
        )
    filtered = filter_records(records, search, type_filter)

    _render_chart(selected, filtered)

    st.subheader("数据详情")
    st.caption("浏览和搜索数据")
    render_table(sheet_rows(filtered, MAX_TABLE_ROWS), empty_message="暂无数据，请尝试调整搜索条件或选择其他数据表")
    if len(filtered) > MAX_TABLE_ROWS:
        st.caption(f"显示前{MAX_TABLE_ROWS}条记录，共{len(filtered)}条数据")
