"""Value formatting for dashboard cards, tables and chart labels.

These functions return plain strings so the same output works in Rich
tables, Streamlit widgets and JSON payloads.
"""

import math
from typing import Any, Callable, Optional

from analytics.sheets import is_numeric, parse_float

CURRENCY_SYMBOLS = {
    "USD": "$",
    "CNY": "¥",
    "CAD": "$",
    "EUR": "€",
    "HKD": "HK$",
}

PERCENT_COLUMN_MARKERS = ("涨跌幅", "收益率", "比例")

RISK_COLORS = {
    "low": "green",
    "medium": "orange",
    "high": "red",
}

NOT_AVAILABLE = "N/A"


def currency_symbol(currency: str) -> str:
    return CURRENCY_SYMBOLS.get((currency or "").upper(), "")


def format_currency(value: float, currency: str = "USD") -> str:
    """Format a money amount: $1,234.56, -¥12.30."""
    symbol = currency_symbol(currency)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def format_large_number(value: float, currency: str = "USD", include_thousands: bool = False) -> str:
    """Abbreviate large money amounts with T/B/M (and optionally K) suffixes.

    Values below the smallest threshold, including negatives, fall back to
    format_currency.
    """
    symbol = currency_symbol(currency)
    if value >= 1e12:
        return f"{symbol}{value / 1e12:.2f}T"
    if value >= 1e9:
        return f"{symbol}{value / 1e9:.2f}B"
    if value >= 1e6:
        return f"{symbol}{value / 1e6:.2f}M"
    if include_thousands and value >= 1e3:
        return f"{symbol}{value / 1e3:.2f}K"
    return format_currency(value, currency)


def format_compact_number(value: float) -> str:
    """Abbreviate a plain number: 1.50B, 2.00M, 3.25K, 12.00."""
    if value >= 1e9:
        return f"{value / 1e9:.2f}B"
    if value >= 1e6:
        return f"{value / 1e6:.2f}M"
    if value >= 1e3:
        return f"{value / 1e3:.2f}K"
    return f"{value:.2f}"


def format_ratio_percent(value: float) -> str:
    """Render a ratio as a percentage: 0.0123 -> 1.23%."""
    return f"{value * 100:.2f}%"


def format_signed_percent(value: Optional[float]) -> str:
    value = value or 0
    return f"{'+' if value >= 0 else ''}{value:.2f}%"


def format_signed_number(value: Optional[float]) -> str:
    value = value or 0
    return f"{'+' if value >= 0 else ''}{value:.2f}"


def format_volume_millions(value: float) -> str:
    return f"{value / 1e6:.2f}M"


def format_optional(value: Any, formatter: Callable[[float], str]) -> str:
    """Apply formatter to a numeric value, or N/A when missing or zero."""
    number = parse_float(value)
    if not number or math.isinf(number):
        return NOT_AVAILABLE
    return formatter(number)


def change_tone(value: Optional[float]) -> str:
    """Classify a change as positive, negative or neutral."""
    if value is None or value == 0:
        return "neutral"
    return "positive" if value > 0 else "negative"


def get_risk_color(risk: Optional[str]) -> str:
    """Badge color for a risk level."""
    return RISK_COLORS.get((risk or "").lower(), "gray")


def is_percentage_column(column: str) -> bool:
    return any(marker in column for marker in PERCENT_COLUMN_MARKERS)


def format_cell(column: str, value: Any) -> tuple:
    """Format a generic table cell.

    Returns:
        Tuple of (display text, tone) where tone is "positive", "negative"
        or "" for uncolored cells
    """
    if is_numeric(value):
        number = float(value)
        if is_percentage_column(column):
            tone = "positive" if number > 0 else "negative" if number < 0 else ""
            return format_ratio_percent(number), tone
        return f"{number:,.2f}".rstrip("0").rstrip("."), ""

    if value is None or value == "":
        return NOT_AVAILABLE, ""
    return str(value), ""
