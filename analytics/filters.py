"""
Record filters for the dashboard tables and charts.

Search matching is case-insensitive substring matching. An empty search
matches every record; type and risk filters use "all" as the wildcard.
"""

from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from config.constants import DEFAULT_DATE_RANGE
from .sheets import Record, get_record_type, get_sheet

ALL = "all"

# Market view tab -> feed sheet
MARKET_TABS = {
    "stocks": "Stocks",
    "indices": "Indices",
    "bonds": "Bonds",
    "sectors": "Sectors",
}
DEFAULT_MARKET_TAB = "stocks"

_RANGE_OFFSETS = {
    "1W": pd.DateOffset(days=7),
    "1M": pd.DateOffset(months=1),
    "3M": pd.DateOffset(months=3),
    "6M": pd.DateOffset(months=6),
    "1Y": pd.DateOffset(years=1),
}


def _matches_search(record: Record, search: str, fields: Iterable[str]) -> bool:
    if not search:
        return True
    needle = search.lower()
    for field in fields:
        value = record.get(field)
        if value is not None and needle in str(value).lower():
            return True
    return False


def _matches_choice(value: Any, choice: Optional[str]) -> bool:
    return not choice or choice == ALL or value == choice


def select_tab_assets(feed: Optional[Dict[str, Any]], tab: str) -> List[Record]:
    """Records behind a market view tab; unknown tabs show stocks."""
    sheet = MARKET_TABS.get(tab, MARKET_TABS[DEFAULT_MARKET_TAB])
    return get_sheet(feed, sheet)


def filter_market_assets(assets: List[Record], search: str = "", asset_type: str = ALL) -> List[Record]:
    """Filter market-feed assets by Name/Symbol/Ticker search and Type."""
    return [
        asset for asset in assets
        if _matches_search(asset, search, ("Name", "Symbol", "Ticker"))
        and _matches_choice(asset.get("Type"), asset_type)
    ]


def filter_investment_assets(
    assets: List[Record],
    search: str = "",
    asset_type: str = ALL,
    risk: str = ALL,
) -> List[Record]:
    """Filter investment-feed assets by AssetName/AssetID, AssetType and Risk."""
    return [
        asset for asset in assets
        if _matches_search(asset, search, ("AssetName", "AssetID"))
        and _matches_choice(asset.get("AssetType"), asset_type)
        and _matches_choice(asset.get("Risk"), risk)
    ]


def filter_portfolio_assets(
    assets: List[Record],
    search: str = "",
    asset_type: str = ALL,
    risk: str = ALL,
) -> List[Record]:
    """Filter demo portfolio assets by name/symbol, type and risk."""
    return [
        asset for asset in assets
        if _matches_search(asset, search, ("name", "symbol"))
        and _matches_choice(asset.get("type"), asset_type)
        and _matches_choice(asset.get("risk"), risk)
    ]


def filter_records(records: List[Record], search: str = "", type_filter: str = ALL) -> List[Record]:
    """Generic sheet filter.

    The search term is matched against all of a record's values joined by
    spaces; the type is read from any of the known type keys.
    """
    needle = search.lower() if search else ""
    result = []
    for record in records:
        if needle:
            haystack = " ".join("" if v is None else str(v) for v in record.values()).lower()
            if needle not in haystack:
                continue
        if type_filter and type_filter != ALL and get_record_type(record) != type_filter:
            continue
        result.append(record)
    return result


def filter_time_series_by_asset(series: List[Record], asset_id: str = ALL) -> List[Record]:
    if not asset_id or asset_id == ALL:
        return list(series)
    return [point for point in series if point.get("AssetID") == asset_id]


def filter_time_series_by_range(series: List[Record], date_range: str = DEFAULT_DATE_RANGE) -> List[Record]:
    """Window a time series to a range ending at its latest date.

    Supported ranges: 1W, 1M, 3M, 6M, 1Y, YTD and ALL; anything else is
    treated as 1M. Points without a parsable Date are dropped and the result
    is sorted by date ascending.
    """
    if not series:
        return []

    dates = pd.to_datetime(
        pd.Series([point.get("Date") for point in series], dtype="object"),
        errors="coerce",
        utc=True,
        format="mixed",
    )
    valid = dates.notna()
    if not valid.any():
        return []

    max_date = dates[valid].max()
    code = (date_range or "").upper()
    if code == "ALL":
        start_date = dates[valid].min()
    elif code == "YTD":
        start_date = pd.Timestamp(year=max_date.year, month=1, day=1, tz=max_date.tz)
    else:
        start_date = max_date - _RANGE_OFFSETS.get(code, _RANGE_OFFSETS[DEFAULT_DATE_RANGE])

    in_window = valid & (dates >= start_date) & (dates <= max_date)
    ordered = dates[in_window].sort_values(kind="stable")
    return [series[i] for i in ordered.index]


def get_asset_types(records: List[Record], field: str = "Type") -> List[Any]:
    """Distinct truthy values of `field`, first-seen order."""
    seen = []
    for record in records:
        value = record.get(field)
        if value and value not in seen:
            seen.append(value)
    return seen


def get_record_types(records: List[Record]) -> List[Any]:
    """Distinct asset types across the known type keys."""
    seen = []
    for record in records:
        value = get_record_type(record)
        if value and value not in seen:
            seen.append(value)
    return seen


def get_asset_ids(records: List[Record]) -> List[Any]:
    return get_asset_types(records, "AssetID")
