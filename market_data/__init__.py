"""
Market data module for fetching the dashboard feed.

This module provides:
- MarketDataFetcher: JSON feed fetching with optional fallback data
- MarketHours: Market open/closed detection for the status badge
- get_mock_feed: Embedded fallback feed
"""

from .data_fetcher import MarketDataFetcher, FetchResult, MarketDataError
from .market_hours import MarketHours
from .mock_data import get_mock_feed

__all__ = [
    'MarketDataFetcher',
    'FetchResult',
    'MarketDataError',
    'MarketHours',
    'get_mock_feed',
]
