"""
Embedded sample data.

get_mock_feed() is the fallback feed for the investment view when the remote
feed is unreachable. The DEMO_* constants back the static portfolio view.
"""

import copy
from typing import Any, Dict, List

_MOCK_FEED: Dict[str, List[Dict[str, Any]]] = {
    "Assets": [
        {
            "AssetID": "AAPL",
            "AssetName": "Apple Inc.",
            "AssetType": "Stock",
            "Sector": "Technology",
            "CurrentPrice": 175.43,
            "PreviousClose": 173.28,
            "Change": 2.15,
            "ChangePercent": 1.24,
            "Volume": 45678900,
            "MarketCap": 2800000000000,
            "Risk": "Medium",
            "LastUpdated": "2024-01-15T16:00:00Z",
        },
        {
            "AssetID": "MSFT",
            "AssetName": "Microsoft Corporation",
            "AssetType": "Stock",
            "Sector": "Technology",
            "CurrentPrice": 384.52,
            "PreviousClose": 385.75,
            "Change": -1.23,
            "ChangePercent": -0.32,
            "Volume": 23456789,
            "MarketCap": 2900000000000,
            "Risk": "Medium",
            "LastUpdated": "2024-01-15T16:00:00Z",
        },
        {
            "AssetID": "SPY",
            "AssetName": "SPDR S&P 500 ETF",
            "AssetType": "ETF",
            "Sector": "Diversified",
            "CurrentPrice": 478.23,
            "PreviousClose": 474.78,
            "Change": 3.45,
            "ChangePercent": 0.73,
            "Volume": 67890123,
            "MarketCap": 450000000000,
            "Risk": "Low",
            "LastUpdated": "2024-01-15T16:00:00Z",
        },
    ],
    "TimeSeries": [
        {"Date": "2024-01-01", "AssetID": "SPY", "Price": 470.25, "Volume": 45000000},
        {"Date": "2024-01-02", "AssetID": "SPY", "Price": 472.18, "Volume": 42000000},
        {"Date": "2024-01-03", "AssetID": "SPY", "Price": 468.92, "Volume": 48000000},
        {"Date": "2024-01-04", "AssetID": "SPY", "Price": 475.33, "Volume": 51000000},
        {"Date": "2024-01-05", "AssetID": "SPY", "Price": 473.67, "Volume": 46000000},
        {"Date": "2024-01-08", "AssetID": "SPY", "Price": 476.89, "Volume": 49000000},
        {"Date": "2024-01-09", "AssetID": "SPY", "Price": 478.23, "Volume": 52000000},
    ],
    "Returns": [
        {"AssetID": "AAPL", "Period": "1D", "Return": 1.24},
        {"AssetID": "AAPL", "Period": "1W", "Return": 3.45},
        {"AssetID": "AAPL", "Period": "1M", "Return": 8.92},
        {"AssetID": "AAPL", "Period": "YTD", "Return": 12.34},
    ],
    "Risks": [
        {"AssetID": "AAPL", "VaR": 2.5, "Beta": 1.2, "Volatility": 0.25},
        {"AssetID": "MSFT", "VaR": 2.1, "Beta": 0.9, "Volatility": 0.22},
        {"AssetID": "SPY", "VaR": 1.8, "Beta": 1.0, "Volatility": 0.18},
    ],
}


def get_mock_feed() -> Dict[str, List[Dict[str, Any]]]:
    """Return a fresh copy of the fallback feed."""
    return copy.deepcopy(_MOCK_FEED)


# Static portfolio view data
DEMO_ASSETS: List[Dict[str, Any]] = [
    {
        "id": "1",
        "name": "Apple Inc.",
        "type": "Stock",
        "symbol": "AAPL",
        "current_price": 175.43,
        "change": 2.15,
        "change_percent": 1.24,
        "volume": 45678900,
        "market_cap": 2800000000000,
        "risk": "Medium",
        "sector": "Technology",
        "last_updated": "2024-01-15T16:00:00Z",
    },
    {
        "id": "2",
        "name": "Microsoft Corporation",
        "type": "Stock",
        "symbol": "MSFT",
        "current_price": 384.52,
        "change": -1.23,
        "change_percent": -0.32,
        "volume": 23456789,
        "market_cap": 2900000000000,
        "risk": "Medium",
        "sector": "Technology",
        "last_updated": "2024-01-15T16:00:00Z",
    },
    {
        "id": "3",
        "name": "SPDR S&P 500 ETF",
        "type": "ETF",
        "symbol": "SPY",
        "current_price": 478.23,
        "change": 3.45,
        "change_percent": 0.73,
        "volume": 67890123,
        "market_cap": 450000000000,
        "risk": "Low",
        "sector": "Diversified",
        "last_updated": "2024-01-15T16:00:00Z",
    },
    {
        "id": "4",
        "name": "Bitcoin",
        "type": "Crypto",
        "symbol": "BTC",
        "current_price": 42350.67,
        "change": -1250.33,
        "change_percent": -2.87,
        "volume": 12345678,
        "market_cap": 830000000000,
        "risk": "High",
        "sector": "Cryptocurrency",
        "last_updated": "2024-01-15T16:00:00Z",
    },
    {
        "id": "5",
        "name": "US Treasury 10Y",
        "type": "Bond",
        "symbol": "TNX",
        "current_price": 4.25,
        "change": 0.05,
        "change_percent": 1.19,
        "volume": 1234567,
        "market_cap": 0,
        "risk": "Low",
        "sector": "Government",
        "last_updated": "2024-01-15T16:00:00Z",
    },
]

DEMO_TIME_SERIES: List[Dict[str, Any]] = [
    {"Date": "2024-01-01", "Price": 470.25, "Volume": 45000000},
    {"Date": "2024-01-02", "Price": 472.18, "Volume": 42000000},
    {"Date": "2024-01-03", "Price": 468.92, "Volume": 48000000},
    {"Date": "2024-01-04", "Price": 475.33, "Volume": 51000000},
    {"Date": "2024-01-05", "Price": 473.67, "Volume": 46000000},
    {"Date": "2024-01-08", "Price": 476.89, "Volume": 49000000},
    {"Date": "2024-01-09", "Price": 478.23, "Volume": 52000000},
    {"Date": "2024-01-10", "Price": 474.56, "Volume": 47000000},
    {"Date": "2024-01-11", "Price": 477.12, "Volume": 50000000},
    {"Date": "2024-01-12", "Price": 479.45, "Volume": 53000000},
    {"Date": "2024-01-15", "Price": 478.23, "Volume": 67890123},
]

DEMO_PORTFOLIO_SUMMARY: Dict[str, float] = {
    "total_value": 1250000,
    "total_return": 125000,
    "total_return_percent": 11.11,
    "day_change": 15750,
    "day_change_percent": 1.28,
}
