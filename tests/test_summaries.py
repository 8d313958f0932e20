"""Tests for the summary statistics behind the dashboard cards."""

import pytest

from analytics.summaries import (
    MarketSummary,
    PortfolioSummary,
    SheetSummary,
    build_risk_profiles,
    calculate_market_summary,
    calculate_portfolio_summary,
    calculate_sheet_summary,
    summarize_returns,
)
from market_data.mock_data import get_mock_feed


def test_market_summary_over_stocks_and_indices(market_feed):
    summary = calculate_market_summary(market_feed)

    assert summary.total_market_cap == pytest.approx(2.86e12)
    assert summary.average_change == pytest.approx(1.0 / 3)
    assert summary.positive_assets == 2
    assert summary.negative_assets == 1


def test_market_summary_ignores_bonds_and_sectors(market_feed):
    market_feed["Bonds"].append({"ChangePercent": -50, "MarketCap": 1e15})
    assert calculate_market_summary(market_feed).negative_assets == 1


def test_market_summary_empty_feed():
    assert calculate_market_summary({}) == MarketSummary()
    assert calculate_market_summary(None).to_dict() == {
        "total_market_cap": 0.0,
        "average_change": 0.0,
        "positive_assets": 0,
        "negative_assets": 0,
    }


def test_market_summary_treats_missing_numbers_as_zero():
    feed = {"Stocks": [{"ChangePercent": "n/a"}, {"ChangePercent": 2, "MarketCap": "100"}]}
    summary = calculate_market_summary(feed)
    assert summary.total_market_cap == 100
    assert summary.average_change == 1
    assert summary.positive_assets == 1
    assert summary.negative_assets == 0


def test_portfolio_summary_on_mock_assets():
    summary = calculate_portfolio_summary(get_mock_feed()["Assets"])

    assert summary.assets_count == 3
    assert summary.total_value == pytest.approx(175.43 + 384.52 + 478.23)
    assert summary.total_change == pytest.approx(2.15 - 1.23 + 3.45)
    assert summary.total_change_percent == pytest.approx((1.24 - 0.32 + 0.73) / 3)


def test_portfolio_summary_empty():
    assert calculate_portfolio_summary([]) == PortfolioSummary()


def test_sheet_summary():
    records = [
        {"名称": "A", "价格": "10", "涨跌幅": 0.02},
        {"名称": "B", "价格": 30, "涨跌幅": -0.01},
        {"名称": "C", "价格": "n/a", "涨跌幅": 0},
        {"名称": "D", "价格": 20},
    ]

    summary = calculate_sheet_summary(records)

    assert summary.total_items == 4
    assert summary.total_value == 60
    assert summary.average_value == 15
    assert summary.max_value == 30
    assert summary.min_value == 10
    assert summary.positive_count == 1
    assert summary.negative_count == 1


def test_sheet_summary_without_value_or_change_fields():
    summary = calculate_sheet_summary([{"Label": "x"}, {"Label": "y"}])
    assert summary == SheetSummary(total_items=2)


def test_sheet_summary_empty():
    assert calculate_sheet_summary([]) == SheetSummary()


def test_risk_profiles_join_assets():
    feed = get_mock_feed()

    profiles = build_risk_profiles(feed["Assets"], feed["Risks"] + [{"AssetID": "TSLA", "VaR": "3.1"}, {"VaR": 1}])

    assert [p.asset_id for p in profiles] == ["AAPL", "MSFT", "SPY", "TSLA"]
    assert profiles[0].asset_name == "Apple Inc."
    assert profiles[0].risk == "Medium"
    assert profiles[0].beta == 1.2
    assert profiles[3].asset_name is None
    assert profiles[3].var == 3.1
    assert profiles[3].volatility is None


def test_summarize_returns_pivots_periods_in_order():
    returns = get_mock_feed()["Returns"] + [{"AssetID": "MSFT", "Period": "1W", "Return": 2.0}]

    table = summarize_returns(returns)

    assert list(table.columns) == ["AssetID", "1D", "1W", "1M", "YTD"]
    aapl = table[table["AssetID"] == "AAPL"].iloc[0]
    assert aapl["YTD"] == 12.34
    msft = table[table["AssetID"] == "MSFT"].iloc[0]
    assert msft["1W"] == 2.0


def test_summarize_returns_empty():
    assert summarize_returns([]).empty
    assert summarize_returns([{"AssetID": "A"}]).empty
