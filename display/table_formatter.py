"""Table formatter module for dashboard cards and asset tables.

Row builders turn feed records into display-ready rows (column -> text) and
are shared by the Rich console renderer and the Streamlit views. The
TableFormatter renders those rows as Rich tables and summary-card panels, or
as JSON for scripting.
"""

import json
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from rich.columns import Columns
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from analytics.sheets import get_table_columns, parse_float
from .console_output import _safe_emoji, get_console, has_rich_support, print_info
from .formatters import (
    NOT_AVAILABLE,
    change_tone,
    format_cell,
    format_currency,
    format_large_number,
    format_optional,
    format_signed_number,
    format_signed_percent,
    format_volume_millions,
    get_risk_color,
)

TONE_STYLES = {
    "positive": "green",
    "negative": "red",
    "neutral": "white",
    "": "white",
    # risk badge colors
    "green": "green",
    "orange": "dark_orange",
    "red": "red",
    "gray": "grey50",
}

@dataclass
class SummaryCard:
    """One dashboard summary card."""
    title: str
    value: str
    detail: str = ""
    tone: str = "neutral"


@dataclass
class TableRow:
    """Display cells for one record plus per-column tones."""
    cells: Dict[str, str]
    tones: Dict[str, str]


def market_asset_rows(assets: List[Dict[str, Any]], tab: str, currency: str = "CNY") -> List[TableRow]:
    """Rows for the market view's asset table."""
    rows = []
    for asset in assets:
        change = parse_float(asset.get("ChangePercent")) or 0
        price = parse_float(asset.get("Price"))
        cells = {
            "Name": str(asset.get("Name") or NOT_AVAILABLE),
            "Symbol": str(asset.get("Symbol") or asset.get("Ticker") or NOT_AVAILABLE),
            "Price": f"{price:.2f}" if price is not None else NOT_AVAILABLE,
            "Change": format_signed_percent(change),
        }
        tones = {"Change": "positive" if change >= 0 else "negative"}

        if tab == "stocks":
            cells["Market Cap"] = format_optional(asset.get("MarketCap"), lambda v: format_large_number(v, currency))
            cells["P/E Ratio"] = format_optional(asset.get("PE"), lambda v: f"{v:.2f}")
        elif tab == "bonds":
            cells["Yield"] = format_optional(asset.get("Yield"), lambda v: f"{v:.2f}%")
            cells["Maturity"] = str(asset.get("Maturity") or NOT_AVAILABLE)
        elif tab == "sectors":
            performance = parse_float(asset.get("Performance")) or 0
            cells["Companies"] = str(asset.get("Companies") or NOT_AVAILABLE)
            cells["Performance"] = format_signed_percent(performance)
            tones["Performance"] = "positive" if performance >= 0 else "negative"

        rows.append(TableRow(cells, tones))
    return rows


def investment_asset_rows(assets: List[Dict[str, Any]], currency: str = "USD") -> List[TableRow]:
    """Rows for the investment feed's asset table."""
    rows = []
    for asset in assets:
        change = parse_float(asset.get("Change")) or 0
        change_percent = parse_float(asset.get("ChangePercent")) or 0
        cells = {
            "Asset": str(asset.get("AssetName") or NOT_AVAILABLE),
            "ID": str(asset.get("AssetID") or NOT_AVAILABLE),
            "Type": str(asset.get("AssetType") or NOT_AVAILABLE),
            "Price": format_optional(asset.get("CurrentPrice"), lambda v: format_currency(v, currency)),
            "Change": f"{format_signed_number(change)} ({format_signed_percent(change_percent)})",
            "Volume": format_optional(asset.get("Volume"), format_volume_millions),
            "Market Cap": format_optional(
                asset.get("MarketCap"), lambda v: format_large_number(v, currency, include_thousands=True)
            ),
            "Risk": str(asset.get("Risk") or NOT_AVAILABLE),
            "Sector": str(asset.get("Sector") or NOT_AVAILABLE),
        }
        tones = {
            "Change": "positive" if change >= 0 else "negative",
            "Risk": get_risk_color(asset.get("Risk")),
        }
        rows.append(TableRow(cells, tones))
    return rows


def portfolio_asset_rows(assets: List[Dict[str, Any]], currency: str = "USD") -> List[TableRow]:
    """Rows for the static demo portfolio table."""
    rows = []
    for asset in assets:
        change = parse_float(asset.get("change")) or 0
        change_percent = parse_float(asset.get("change_percent")) or 0
        cells = {
            "Asset": str(asset.get("name") or NOT_AVAILABLE),
            "Symbol": str(asset.get("symbol") or NOT_AVAILABLE),
            "Type": str(asset.get("type") or NOT_AVAILABLE),
            "Price": format_optional(asset.get("current_price"), lambda v: format_currency(v, currency)),
            "Change": f"{format_signed_number(change)} ({format_signed_percent(change_percent)})",
            "Volume": format_optional(asset.get("volume"), format_volume_millions),
            "Market Cap": format_optional(
                asset.get("market_cap"), lambda v: format_large_number(v, currency, include_thousands=True)
            ),
            "Risk": str(asset.get("risk") or NOT_AVAILABLE),
            "Sector": str(asset.get("sector") or NOT_AVAILABLE),
        }
        tones = {
            "Change": "positive" if change >= 0 else "negative",
            "Risk": get_risk_color(asset.get("risk")),
        }
        rows.append(TableRow(cells, tones))
    return rows


def sheet_rows(records: List[Dict[str, Any]], limit: int = 50) -> List[TableRow]:
    """Rows for a dynamically-typed sheet, columns taken from the first record."""
    columns = get_table_columns(records)
    rows = []
    for record in records[:limit]:
        cells = {}
        tones = {}
        for column in columns:
            text, tone = format_cell(column, record.get(column))
            cells[column] = text
            if tone:
                tones[column] = tone
        rows.append(TableRow(cells, tones))
    return rows


def rows_to_records(rows: Sequence[TableRow]) -> List[Dict[str, str]]:
    return [row.cells for row in rows]


class TableFormatter:
    """Renders dashboard cards and tables to the console or to JSON."""

    def __init__(self, output_format: str = "display"):
        """Initialize the table formatter.

        Args:
            output_format: "display" for Rich/plain console output, "json"
                to return JSON strings instead of printing
        """
        self.output_format = output_format
        self.console = get_console()

    def render_summary_cards(self, cards: List[SummaryCard], title: str) -> Optional[str]:
        """Render summary cards as a row of panels."""
        if self.output_format == "json":
            return json.dumps({"title": title, "cards": [asdict(card) for card in cards]},
                              indent=2, ensure_ascii=False)

        if has_rich_support() and self.console:
            panels = [
                Panel(
                    Text.assemble(
                        (card.value, f"bold {TONE_STYLES.get(card.tone, 'white')}"),
                        ("\n" + card.detail if card.detail else "", "dim"),
                    ),
                    title=card.title,
                    expand=True,
                )
                for card in cards
            ]
            self.console.print(Columns(panels, equal=True, expand=True, title=title))
        else:
            print(title)
            for card in cards:
                detail = f" ({card.detail})" if card.detail else ""
                print(f"  {card.title}: {card.value}{detail}")
        return None

    def render_table(
        self,
        rows: List[TableRow],
        title: str,
        columns: Optional[List[str]] = None,
        empty_message: str = "No assets found",
        footer: Optional[str] = None,
    ) -> Optional[str]:
        """Render table rows.

        Args:
            rows: Rows from one of the row builders
            title: Table title
            columns: Column order (defaults to the first row's columns)
            empty_message: Message shown when there are no rows
            footer: Optional caption printed under the table
        """
        if columns is None:
            columns = list(rows[0].cells.keys()) if rows else []

        if self.output_format == "json":
            return json.dumps({
                "title": title,
                "timestamp": datetime.now().isoformat(),
                "columns": columns,
                "rows": rows_to_records(rows),
                "metadata": {"total_rows": len(rows)},
            }, indent=2, ensure_ascii=False)

        if not rows:
            print_info(empty_message)
            return None

        if has_rich_support() and self.console:
            table = Table(
                title=f"{_safe_emoji('📊')} {title}",
                show_header=True,
                header_style="bold magenta",
            )
            for column in columns:
                table.add_column(column, no_wrap=False, overflow="ellipsis", max_width=32)
            for index, row in enumerate(rows):
                row_style = "on grey11" if index % 2 == 1 else None
                table.add_row(
                    *[Text(row.cells.get(column, NOT_AVAILABLE), style=self._tone_style(row.tones.get(column, "")))
                      for column in columns],
                    style=row_style,
                )
            self.console.print(table)
            if footer:
                self.console.print(footer, style="dim")
        else:
            print(title)
            print(" | ".join(columns))
            for row in rows:
                print(" | ".join(row.cells.get(column, NOT_AVAILABLE) for column in columns))
            if footer:
                print(footer)
        return None

    def render_report(
        self,
        title: str,
        cards: List[SummaryCard],
        rows: List[TableRow],
        table_title: str,
        empty_message: str = "No assets found",
        footer: Optional[str] = None,
    ) -> Optional[str]:
        """Render a whole view: summary cards followed by its table.

        In JSON mode both parts are returned as a single document.
        """
        if self.output_format == "json":
            columns = list(rows[0].cells.keys()) if rows else []
            return json.dumps({
                "title": title,
                "timestamp": datetime.now().isoformat(),
                "cards": [asdict(card) for card in cards],
                "table": {
                    "title": table_title,
                    "columns": columns,
                    "rows": rows_to_records(rows),
                    "footer": footer,
                },
                "metadata": {"total_rows": len(rows)},
            }, indent=2, ensure_ascii=False)

        self.render_summary_cards(cards, title)
        self.render_table(rows, table_title, empty_message=empty_message, footer=footer)
        return None

    @staticmethod
    def _tone_style(tone: str) -> str:
        return TONE_STYLES.get(tone, "white")


def change_card(title: str, value: float, text: str, detail: str = "") -> SummaryCard:
    """Summary card whose color follows the sign of value."""
    tone = change_tone(value)
    return SummaryCard(title=title, value=text, detail=detail, tone=tone)
