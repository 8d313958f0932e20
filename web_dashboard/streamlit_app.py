#!/usr/bin/env python3
"""
Streamlit Market Dashboard
Sidebar-selected views over the market and investment JSON feeds
"""

import logging
import sys
import time
from pathlib import Path

import streamlit as st

# Add parent directory and this directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from config.constants import VERSION, VIEW_AIPE, VIEW_MARKET, VIEW_MODERN, VIEW_PORTFOLIO
from config.settings import get_settings
from log_handler import get_log_handler, log_message, setup_logging
from streamlit_utils import clear_feed_cache
from views import aipe_view, market_view, modern_view, portfolio_view

logger = logging.getLogger(__name__)

VIEWS = {
    VIEW_MARKET: ("📊 Market", market_view),
    VIEW_AIPE: ("📈 AIPE Investment", aipe_view),
    VIEW_PORTFOLIO: ("💼 Portfolio", portfolio_view),
    VIEW_MODERN: ("🔷 Modern", modern_view),
}

# Page configuration
st.set_page_config(
    page_title="AIPE Market Dashboard",
    page_icon="📈",
    layout="wide",
    initial_sidebar_state="expanded",
    menu_items={
        'Get Help': None,
        'Report a bug': None,
        'About': None
    }
)


def render_sidebar(default_view: str) -> str:
    """Sidebar navigation; returns the selected view key."""
    st.sidebar.title("Navigation")

    view_keys = list(VIEWS)
    index = view_keys.index(default_view) if default_view in VIEWS else 0
    selected = st.sidebar.radio(
        "View",
        view_keys,
        index=index,
        format_func=lambda key: VIEWS[key][0],
        key="selected_view",
    )

    st.sidebar.markdown("---")
    if st.sidebar.button("🔄 Refresh Data", key="refresh_data"):
        clear_feed_cache()
        log_message("Manual refresh requested", module='__main__')
        st.rerun()

    with st.sidebar.expander("📋 Recent Logs"):
        logs = get_log_handler().get_formatted_logs(n=20)
        if logs:
            st.code("\n".join(logs), language=None)
        else:
            st.caption("No log messages yet")

    return selected


def render_error_page(error: Exception) -> None:
    """Fallback page shown when a view fails unexpectedly."""
    st.error("Something went wrong")
    st.caption(str(error))
    if st.button("Try again", key="try_again"):
        clear_feed_cache()
        st.rerun()


def main():
    """Main dashboard function"""
    settings = get_settings()
    logging_config = settings.get_logging_config()
    setup_logging(
        level=getattr(logging, str(logging_config.get('level', 'INFO')).upper(), logging.INFO),
        timezone_name=settings.get('market_hours.timezone', 'Asia/Shanghai'),
    )
    start_time = time.time()

    selected = render_sidebar(settings.get('dashboard.default_view', VIEW_MARKET))
    _, view = VIEWS[selected]

    try:
        view.render(settings)
    except Exception as e:
        logger.exception(f"View '{selected}' failed: {e}")
        render_error_page(e)

    st.markdown("---")
    st.caption(f"AIPE Market Dashboard • v{VERSION}")

    duration = time.time() - start_time
    log_message(f"PERF: {selected} view rendered in {duration:.3f}s",
                level='INFO' if duration > 1.0 else 'DEBUG', module='__main__')


if __name__ == "__main__":
    main()
