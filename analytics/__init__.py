"""Derived-data computations for the dashboard views."""

from .sheets import (
    extract_sheets,
    available_sheets,
    get_sheet,
    parse_float,
    is_numeric,
    detect_field,
    get_table_columns,
    get_numeric_columns,
    build_chart_data,
)
from .filters import (
    ALL,
    MARKET_TABS,
    select_tab_assets,
    filter_market_assets,
    filter_investment_assets,
    filter_portfolio_assets,
    filter_records,
    filter_time_series_by_asset,
    filter_time_series_by_range,
    get_asset_types,
    get_record_types,
    get_asset_ids,
)
from .summaries import (
    MarketSummary,
    PortfolioSummary,
    SheetSummary,
    RiskProfile,
    calculate_market_summary,
    calculate_portfolio_summary,
    calculate_sheet_summary,
    build_risk_profiles,
    summarize_returns,
)

__all__ = [
    'extract_sheets',
    'available_sheets',
    'get_sheet',
    'parse_float',
    'is_numeric',
    'detect_field',
    'get_table_columns',
    'get_numeric_columns',
    'build_chart_data',
    'ALL',
    'MARKET_TABS',
    'select_tab_assets',
    'filter_market_assets',
    'filter_investment_assets',
    'filter_portfolio_assets',
    'filter_records',
    'filter_time_series_by_asset',
    'filter_time_series_by_range',
    'get_asset_types',
    'get_record_types',
    'get_asset_ids',
    'MarketSummary',
    'PortfolioSummary',
    'SheetSummary',
    'RiskProfile',
    'calculate_market_summary',
    'calculate_portfolio_summary',
    'calculate_sheet_summary',
    'build_risk_profiles',
    'summarize_returns',
]
