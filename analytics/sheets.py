"""
Sheet extraction and dynamic field detection.

Feeds are loosely typed: the same concept may appear under different keys
depending on the sheet (Chinese or English names, "Price" vs "Close", ...).
These helpers pick fields by probing the first record of a sheet.
"""

import math
import re
from typing import Any, Dict, Iterable, List, Optional

Record = Dict[str, Any]

NAME_FIELDS = ["名称", "Name", "股票名称", "基金名称", "产品名称"]
CODE_FIELDS = ["代码", "Code", "Symbol", "股票代码", "基金代码"]
VALUE_FIELDS = ["价格", "Price", "价值", "Value", "收盘价", "Close", "净值"]
CHANGE_FIELDS = ["涨跌幅", "Change", "变化率", "涨跌", "日涨跌幅"]
TYPE_FIELDS = ["资产类型", "类型", "Type", "AssetType"]

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_WHOLE_NUMBER = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?\s*$")


def extract_sheets(feed: Optional[Dict[str, Any]]) -> Dict[str, List[Record]]:
    """Keep only the list-valued keys of a feed, in feed order."""
    if not feed:
        return {}
    return {key: value for key, value in feed.items() if isinstance(value, list)}


def available_sheets(feed: Optional[Dict[str, Any]]) -> List[str]:
    return list(extract_sheets(feed).keys())


def get_sheet(feed: Optional[Dict[str, Any]], name: str) -> List[Record]:
    if not feed:
        return []
    value = feed.get(name)
    return value if isinstance(value, list) else []


def parse_float(value: Any) -> Optional[float]:
    """Parse the leading number of a value.

    "12.5%" -> 12.5, " -3 " -> -3.0, "abc" -> None. Booleans and None are
    not numbers.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return None if math.isnan(number) else number
    match = _LEADING_NUMBER.match(str(value))
    if not match:
        return None
    return float(match.group(1))


def number_or_zero(value: Any) -> float:
    """Numeric value of a field, with missing or unparsable values as 0."""
    number = parse_float(value)
    if number is None or math.isinf(number):
        return 0.0
    return number


def is_numeric(value: Any) -> bool:
    """True when the whole value is a finite number."""
    if value is None or isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return math.isfinite(value)
    if isinstance(value, str) and _WHOLE_NUMBER.match(value):
        return math.isfinite(float(value))
    return False


def detect_field(record: Optional[Record], candidates: Iterable[str]) -> str:
    """Return the first candidate key present in record, or ""."""
    if not record:
        return ""
    for field in candidates:
        if field in record:
            return field
    return ""


def get_table_columns(records: List[Record]) -> List[str]:
    if not records:
        return []
    return list(records[0].keys())


def get_numeric_columns(records: List[Record]) -> List[str]:
    """Columns whose value in the first record is numeric."""
    if not records:
        return []
    first = records[0]
    return [key for key, value in first.items() if is_numeric(value)]


def get_name_field(records: List[Record]) -> str:
    if not records:
        return ""
    field = detect_field(records[0], NAME_FIELDS)
    if field:
        return field
    keys = list(records[0].keys())
    return keys[0] if keys else ""


def get_code_field(records: List[Record]) -> str:
    if not records:
        return ""
    return detect_field(records[0], CODE_FIELDS)


def get_value_field(records: List[Record]) -> str:
    if not records:
        return ""
    return detect_field(records[0], VALUE_FIELDS)


def get_change_field(records: List[Record]) -> str:
    if not records:
        return ""
    return detect_field(records[0], CHANGE_FIELDS)


def get_main_value_field(records: List[Record]) -> str:
    """Value field for charts, falling back to the first numeric column."""
    field = get_value_field(records)
    if field:
        return field
    numeric = get_numeric_columns(records)
    return numeric[0] if numeric else ""


def get_record_type(record: Record) -> Any:
    """Asset type of a record under any of the known type keys."""
    for field in TYPE_FIELDS:
        value = record.get(field)
        if value:
            return value
    return None


def build_chart_data(records: List[Record], limit: int = 20, max_series: int = 5) -> List[Record]:
    """Chart rows for the first `limit` records.

    Each row carries a display name, a code and up to `max_series` numeric
    columns (detected on the first record) coerced to float.
    """
    if not records:
        return []

    numeric_columns = get_numeric_columns(records)
    if not numeric_columns:
        return []

    name_field = get_name_field(records)
    code_field = get_code_field(records)

    rows = []
    for index, record in enumerate(records[:limit]):
        code = record.get(code_field, "") if code_field else ""
        name = record.get(name_field) or code or f"项目{index + 1}"
        row: Record = {"name": name, "code": code}
        for column in numeric_columns[:max_series]:
            row[column] = number_or_zero(record.get(column))
        rows.append(row)
    return rows
