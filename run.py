#!/usr/bin/env python3
"""
Command-line entry point for the AIPE Market Dashboard
=======================================================

Renders any dashboard view in the terminal (Rich tables and summary panels,
or JSON for scripting) and launches the Streamlit web app.

Usage:
    python run.py market --tab bonds --range 3M
    python run.py aipe --risk High --json
    python run.py portfolio --search apple
    python run.py sheets --sheet Stocks --type 股票
    python run.py web --port 8501
"""

import argparse
import logging
import subprocess
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from analytics.filters import (
    ALL,
    DEFAULT_MARKET_TAB,
    MARKET_TABS,
    filter_investment_assets,
    filter_market_assets,
    filter_portfolio_assets,
    filter_records,
    filter_time_series_by_asset,
    filter_time_series_by_range,
    select_tab_assets,
)
from analytics.sheets import available_sheets, get_sheet, parse_float
from analytics.summaries import (
    calculate_market_summary,
    calculate_portfolio_summary,
    calculate_sheet_summary,
)
from config.constants import (
    DATE_RANGES,
    DEFAULT_DATE_RANGE,
    INVESTMENT_VIEW_CURRENCY,
    MARKET_VIEW_CURRENCY,
    MAX_TABLE_ROWS,
    RISK_LEVELS,
    VERSION,
)
from config.settings import Settings, configure_system
from display.console_output import _safe_emoji, print_error, print_header, print_warning, set_force_fallback
from display.formatters import (
    NOT_AVAILABLE,
    format_compact_number,
    format_currency,
    format_large_number,
    format_signed_number,
    format_signed_percent,
)
from display.table_formatter import (
    SummaryCard,
    TableFormatter,
    change_card,
    investment_asset_rows,
    market_asset_rows,
    portfolio_asset_rows,
    sheet_rows,
)
from market_data.data_fetcher import MarketDataError, MarketDataFetcher
from market_data.market_hours import MarketHours
from market_data.mock_data import DEMO_ASSETS, DEMO_PORTFOLIO_SUMMARY

PROJECT_ROOT = Path(__file__).resolve().parent
STREAMLIT_APP = PROJECT_ROOT / "web_dashboard" / "streamlit_app.py"

logger = logging.getLogger(__name__)


def setup_logging(settings: Settings) -> None:
    """Setup logging configuration.

    Logs go to the configured file and stderr, keeping stdout clean for
    JSON output.

    Args:
        settings: System settings containing logging configuration
    """
    log_config = settings.get_logging_config()

    logging.basicConfig(
        level=getattr(logging, str(log_config.get('level', 'INFO')).upper(), logging.INFO),
        format=log_config.get('format', '%(asctime)s - %(name)s - %(levelname)s - %(message)s'),
        handlers=[
            logging.FileHandler(log_config.get('file', 'dashboard.log'), encoding='utf-8'),
            logging.StreamHandler(sys.stderr)
        ]
    )

    logger.debug(f"Logging configured - Level: {log_config.get('level', 'INFO')}")


def _series_card(series: List[Dict[str, Any]], currency: str) -> SummaryCard:
    """Card summarizing a price series: latest price and change over the window."""
    prices = [p for p in (parse_float(point.get("Price")) for point in series) if p is not None]
    if not prices:
        return SummaryCard("Latest Price", NOT_AVAILABLE, "No data points")
    change = prices[-1] - prices[0]
    return change_card(
        "Latest Price",
        change,
        format_currency(prices[-1], currency),
        f"{len(prices)} data points, {format_signed_number(change)} over range",
    )


def _emit(output: Optional[str]) -> None:
    if output is not None:
        print(output)


def cmd_market(args: argparse.Namespace, settings: Settings) -> int:
    currency = settings.get('dashboard.market_currency', MARKET_VIEW_CURRENCY)
    feed = MarketDataFetcher(settings).fetch_market_feed().data

    summary = calculate_market_summary(feed)
    series = filter_time_series_by_range(get_sheet(feed, "TimeSeries"), args.range)
    status = MarketHours(settings).get_market_status()
    cards = [
        SummaryCard("Market Status", status, tone="positive" if status == "Open" else "neutral"),
        SummaryCard("Total Market Cap", format_large_number(summary.total_market_cap, currency)),
        change_card("Market Sentiment", summary.average_change, format_signed_percent(summary.average_change),
                    "Average change across all assets"),
        SummaryCard("Gainers / Losers", f"{summary.positive_assets} / {summary.negative_assets}"),
        _series_card(series, currency),
    ]

    assets = filter_market_assets(select_tab_assets(feed, args.tab), args.search, args.type)
    formatter = TableFormatter("json" if args.json else "display")
    _emit(formatter.render_report(
        f"Market Dashboard ({args.range})",
        cards,
        market_asset_rows(assets, args.tab, currency),
        f"{MARKET_TABS[args.tab]} ({len(assets)})",
    ))
    return 0


def cmd_aipe(args: argparse.Namespace, settings: Settings) -> int:
    currency = settings.get('dashboard.investment_currency', INVESTMENT_VIEW_CURRENCY)
    result = MarketDataFetcher(settings).fetch_investment_feed()
    if result.is_fallback and not args.json:
        print_warning(f"Live feed unavailable, showing sample data ({result.error})")

    assets = get_sheet(result.data, "Assets")
    summary = calculate_portfolio_summary(assets)
    series = filter_time_series_by_asset(get_sheet(result.data, "TimeSeries"), args.asset)
    sign = "+" if summary.total_change >= 0 else ""
    cards = [
        SummaryCard("Portfolio Value", format_large_number(summary.total_value, currency, include_thousands=True),
                    f"Across {summary.assets_count} assets"),
        change_card("Total Change", summary.total_change, f"{sign}{format_currency(summary.total_change, currency)}",
                    f"{format_signed_percent(summary.total_change_percent)} average"),
        _series_card(series, currency),
        SummaryCard("Data Source", "Sample" if result.is_fallback else "Live"),
    ]

    filtered = filter_investment_assets(assets, args.search, args.type, args.risk)
    formatter = TableFormatter("json" if args.json else "display")
    _emit(formatter.render_report(
        "AIPE Investment Market",
        cards,
        investment_asset_rows(filtered, currency),
        f"Investment Assets ({len(filtered)})",
    ))
    return 0


def cmd_portfolio(args: argparse.Namespace, settings: Settings) -> int:
    currency = settings.get('dashboard.investment_currency', INVESTMENT_VIEW_CURRENCY)
    summary = DEMO_PORTFOLIO_SUMMARY
    cards = [
        SummaryCard("Total Portfolio Value", format_large_number(summary["total_value"], currency)),
        SummaryCard("Total Return", format_large_number(summary["total_return"], currency),
                    f"{format_signed_percent(summary['total_return_percent'])} total return", "positive"),
        change_card("Day Change", summary["day_change"], format_large_number(summary["day_change"], currency),
                    f"{format_signed_percent(summary['day_change_percent'])} today"),
        SummaryCard("Active Assets", str(len(DEMO_ASSETS))),
    ]

    filtered = filter_portfolio_assets(DEMO_ASSETS, args.search, args.type, args.risk)
    formatter = TableFormatter("json" if args.json else "display")
    _emit(formatter.render_report(
        "Investment Portfolio",
        cards,
        portfolio_asset_rows(filtered, currency),
        f"Investment Assets ({len(filtered)})",
    ))
    return 0


def cmd_sheets(args: argparse.Namespace, settings: Settings) -> int:
    feed = MarketDataFetcher(settings).fetch_market_feed().data
    sheets = available_sheets(feed)
    if not sheets:
        print_warning("Feed contains no sheets")
        return 0

    sheet = args.sheet or sheets[0]
    if sheet not in sheets:
        print_error(f"Unknown sheet '{sheet}'. Available: {', '.join(sheets)}")
        return 2

    records = get_sheet(feed, sheet)
    summary = calculate_sheet_summary(records)
    cards = [
        SummaryCard("数据总量", str(summary.total_items), "当前数据表记录数"),
        SummaryCard("平均值", format_compact_number(summary.average_value), "数值平均值"),
        SummaryCard("上涨数量", str(summary.positive_count), "正收益资产数量", "positive"),
        SummaryCard("下跌数量", str(summary.negative_count), "负收益资产数量", "negative"),
    ]

    filtered = filter_records(records, args.search, args.type)
    footer = None
    if len(filtered) > MAX_TABLE_ROWS:
        footer = f"显示前{MAX_TABLE_ROWS}条记录，共{len(filtered)}条数据"

    formatter = TableFormatter("json" if args.json else "display")
    _emit(formatter.render_report(
        sheet,
        cards,
        sheet_rows(filtered, MAX_TABLE_ROWS),
        f"{sheet} ({len(filtered)})",
        empty_message="暂无数据",
        footer=footer,
    ))
    return 0


def cmd_web(args: argparse.Namespace, settings: Settings) -> int:
    """Launch the Streamlit dashboard."""
    command = [sys.executable, "-m", "streamlit", "run", str(STREAMLIT_APP), "--server.port", str(args.port)]
    print_header("AIPE Market Dashboard", "📈")
    print(f"{_safe_emoji('🚀')} Running: {' '.join(command)}")

    try:
        return subprocess.run(command, cwd=PROJECT_ROOT).returncode
    except KeyboardInterrupt:
        print_warning("Dashboard stopped by user")
        return 130


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        description="AIPE Market Dashboard - terminal views and web app launcher",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run.py market                        # Stocks tab, 1M price window
  python run.py market --tab bonds --range 6M
  python run.py aipe --risk High --json       # JSON output for scripting
  python run.py sheets --sheet Stocks
  python run.py web --port 8502               # Launch the Streamlit app
        """
    )
    parser.add_argument('--config', type=str, default=None, help='Path to configuration file')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    parser.add_argument('--plain', action='store_true', help='Plain text output without Rich formatting')
    parser.add_argument('--version', action='version', version=f'AIPE Market Dashboard {VERSION}')

    subparsers = parser.add_subparsers(dest='command', required=True)

    market = subparsers.add_parser('market', help='Market overview with tabbed asset table')
    market.add_argument('--tab', choices=list(MARKET_TABS), default=DEFAULT_MARKET_TAB, help='Asset class tab')
    market.add_argument('--range', choices=DATE_RANGES + ['ALL'], default=DEFAULT_DATE_RANGE,
                        help='Price history window')
    market.add_argument('--search', default='', help='Search by name or symbol')
    market.add_argument('--type', default=ALL, help='Asset type filter')
    market.add_argument('--json', action='store_true', help='Output as JSON')
    market.set_defaults(handler=cmd_market)

    aipe = subparsers.add_parser('aipe', help='AIPE investment assets (falls back to sample data)')
    aipe.add_argument('--search', default='', help='Search by asset name or ID')
    aipe.add_argument('--type', default=ALL, help='Asset type filter')
    aipe.add_argument('--risk', choices=[ALL] + RISK_LEVELS, default=ALL, help='Risk level filter')
    aipe.add_argument('--asset', default=ALL, help='Asset ID for the price history card')
    aipe.add_argument('--json', action='store_true', help='Output as JSON')
    aipe.set_defaults(handler=cmd_aipe)

    portfolio = subparsers.add_parser('portfolio', help='Static demo portfolio')
    portfolio.add_argument('--search', default='', help='Search by name or symbol')
    portfolio.add_argument('--type', default=ALL, help='Asset type filter')
    portfolio.add_argument('--risk', choices=[ALL] + RISK_LEVELS, default=ALL, help='Risk level filter')
    portfolio.add_argument('--json', action='store_true', help='Output as JSON')
    portfolio.set_defaults(handler=cmd_portfolio)

    sheets = subparsers.add_parser('sheets', help='Any feed sheet as a generic table')
    sheets.add_argument('--sheet', default=None, help='Sheet name (defaults to the first sheet)')
    sheets.add_argument('--search', default='', help='Search across all fields')
    sheets.add_argument('--type', default=ALL, help='Asset type filter')
    sheets.add_argument('--json', action='store_true', help='Output as JSON')
    sheets.set_defaults(handler=cmd_sheets)

    web = subparsers.add_parser('web', help='Launch the Streamlit dashboard')
    web.add_argument('--port', type=int, default=8501, help='Server port')
    web.set_defaults(handler=cmd_web)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    load_dotenv(PROJECT_ROOT / ".env")
    load_dotenv(PROJECT_ROOT / "web_dashboard" / ".env")

    settings = configure_system(args.config)
    if args.debug:
        settings.set('logging.level', 'DEBUG')
    if args.plain:
        set_force_fallback(True)
    setup_logging(settings)

    try:
        return args.handler(args, settings)
    except MarketDataError as e:
        print_error(str(e))
        logger.error(f"{args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
