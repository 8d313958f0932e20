import os
import sys

import pytest

# Repo root for the packages, web_dashboard for the Streamlit modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'web_dashboard')))

FEED_ENV_VARS = [
    'MARKET_FEED_URL',
    'INVESTMENT_FEED_URL',
    'DASHBOARD_FETCH_TIMEOUT',
    'DASHBOARD_CACHE_TTL',
    'DASHBOARD_TIMEZONE',
    'DASHBOARD_DEFAULT_VIEW',
    'DASHBOARD_DEV',
]


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Start every test with a fresh global Settings and no dashboard env overrides."""
    import config.settings

    for name in FEED_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config.settings, '_settings', None)
    yield


@pytest.fixture
def market_feed():
    """A small market feed with every sheet the market view reads."""
    return {
        "Stocks": [
            {"Name": "贵州茅台", "Symbol": "600519", "Type": "Consumer", "Price": 1688.0,
             "ChangePercent": 1.5, "MarketCap": 2.1e12, "PE": 28.4},
            {"Name": "中国平安", "Symbol": "601318", "Type": "Financial", "Price": 42.1,
             "ChangePercent": -0.8, "MarketCap": 7.6e11, "PE": 8.9},
        ],
        "Indices": [
            {"Name": "上证指数", "Symbol": "000001", "Type": "Index", "Price": 3050.2,
             "ChangePercent": 0.3, "MarketCap": 0},
        ],
        "Bonds": [
            {"Name": "10Y CGB", "Symbol": "019666", "Type": "Government", "Price": 101.2,
             "ChangePercent": 0.0, "Yield": 2.35, "Maturity": "2034-05-15"},
        ],
        "Sectors": [
            {"Name": "Technology", "Companies": 412, "Performance": -1.2, "ChangePercent": -1.2},
        ],
        "TimeSeries": [
            {"Date": "2024-01-02", "Price": 3000.0, "Volume": 1000000},
            {"Date": "2024-02-01", "Price": 3020.0, "Volume": 1100000},
            {"Date": "2024-03-01", "Price": 3050.2, "Volume": 1200000},
        ],
        "Meta": {"generated": "2024-03-01"},
    }
