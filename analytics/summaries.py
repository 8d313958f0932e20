"""
Summary statistics behind the dashboard cards.

All reductions treat missing or unparsable numeric fields as 0 and return
an all-zero summary for empty input.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

import pandas as pd

from .sheets import Record, get_change_field, get_sheet, get_value_field, number_or_zero, parse_float


@dataclass
class MarketSummary:
    total_market_cap: float = 0.0
    average_change: float = 0.0
    positive_assets: int = 0
    negative_assets: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class PortfolioSummary:
    total_value: float = 0.0
    total_change: float = 0.0
    total_change_percent: float = 0.0
    assets_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SheetSummary:
    total_items: int = 0
    total_value: float = 0.0
    positive_count: int = 0
    negative_count: int = 0
    average_value: float = 0.0
    max_value: float = 0.0
    min_value: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class RiskProfile:
    asset_id: str
    asset_name: Optional[str]
    risk: Optional[str]
    var: Optional[float]
    beta: Optional[float]
    volatility: Optional[float]


def calculate_market_summary(feed: Optional[Dict[str, Any]]) -> MarketSummary:
    """Summary over the market feed's Stocks and Indices sheets."""
    assets = get_sheet(feed, "Stocks") + get_sheet(feed, "Indices")
    if not assets:
        return MarketSummary()

    changes = [number_or_zero(asset.get("ChangePercent")) for asset in assets]
    return MarketSummary(
        total_market_cap=sum(number_or_zero(asset.get("MarketCap")) for asset in assets),
        average_change=sum(changes) / len(changes),
        positive_assets=sum(1 for change in changes if change > 0),
        negative_assets=sum(1 for change in changes if change < 0),
    )


def calculate_portfolio_summary(assets: List[Record]) -> PortfolioSummary:
    """Totals over investment-feed assets.

    total_value sums CurrentPrice and total_change sums Change, one unit per
    asset; total_change_percent is the mean ChangePercent.
    """
    if not assets:
        return PortfolioSummary()

    return PortfolioSummary(
        total_value=sum(number_or_zero(asset.get("CurrentPrice")) for asset in assets),
        total_change=sum(number_or_zero(asset.get("Change")) for asset in assets),
        total_change_percent=sum(number_or_zero(asset.get("ChangePercent")) for asset in assets) / len(assets),
        assets_count=len(assets),
    )


def calculate_sheet_summary(records: List[Record]) -> SheetSummary:
    """Summary over a dynamically-typed sheet.

    The value and change fields are detected on the first record. Values
    that do not parse as numbers are skipped for totals and extremes.
    """
    if not records:
        return SheetSummary()

    value_field = get_value_field(records)
    change_field = get_change_field(records)

    total_value = 0.0
    positive_count = 0
    negative_count = 0
    max_value: Optional[float] = None
    min_value: Optional[float] = None

    for record in records:
        if value_field:
            value = parse_float(record.get(value_field))
            if value is not None:
                total_value += value
                max_value = value if max_value is None else max(max_value, value)
                min_value = value if min_value is None else min(min_value, value)

        if change_field:
            change = parse_float(record.get(change_field))
            if change is not None:
                if change > 0:
                    positive_count += 1
                elif change < 0:
                    negative_count += 1

    return SheetSummary(
        total_items=len(records),
        total_value=total_value,
        positive_count=positive_count,
        negative_count=negative_count,
        average_value=total_value / len(records),
        max_value=max_value if max_value is not None else 0.0,
        min_value=min_value if min_value is not None else 0.0,
    )


def build_risk_profiles(assets: List[Record], risks: List[Record]) -> List[RiskProfile]:
    """Join Risks records with their asset's name and risk level."""
    by_id = {asset.get("AssetID"): asset for asset in assets if asset.get("AssetID")}
    profiles = []
    for row in risks:
        asset_id = row.get("AssetID")
        if not asset_id:
            continue
        asset = by_id.get(asset_id, {})
        profiles.append(RiskProfile(
            asset_id=asset_id,
            asset_name=asset.get("AssetName"),
            risk=asset.get("Risk"),
            var=parse_float(row.get("VaR")),
            beta=parse_float(row.get("Beta")),
            volatility=parse_float(row.get("Volatility")),
        ))
    return profiles


def summarize_returns(returns: List[Record]) -> pd.DataFrame:
    """Pivot Returns records to one row per asset and one column per period.

    Periods keep their first-seen order; duplicate (asset, period) pairs keep
    the last value.
    """
    rows = [
        {"AssetID": r.get("AssetID"), "Period": r.get("Period"), "Return": parse_float(r.get("Return"))}
        for r in returns
        if r.get("AssetID") and r.get("Period")
    ]
    if not rows:
        return pd.DataFrame()

    df = pd.DataFrame(rows)
    periods = list(dict.fromkeys(df["Period"]))
    pivot = df.pivot_table(index="AssetID", columns="Period", values="Return", aggfunc="last", sort=False)
    return pivot.reindex(columns=periods).reset_index().rename_axis(columns=None)
