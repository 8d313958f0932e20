"""Tests for table row builders and the console/JSON table formatter."""

import json
import unittest
from unittest.mock import patch

from display.console_output import set_force_fallback
from display.table_formatter import (
    SummaryCard,
    TableFormatter,
    TableRow,
    change_card,
    investment_asset_rows,
    market_asset_rows,
    portfolio_asset_rows,
    rows_to_records,
    sheet_rows,
)
from market_data.mock_data import DEMO_ASSETS, get_mock_feed


class TestMarketRows(unittest.TestCase):

    def test_stock_columns(self):
        rows = market_asset_rows([
            {"Name": "贵州茅台", "Symbol": "600519", "Price": 1688, "ChangePercent": 1.5,
             "MarketCap": 2.1e12, "PE": 28.4},
        ], "stocks")

        self.assertEqual(list(rows[0].cells), ["Name", "Symbol", "Price", "Change", "Market Cap", "P/E Ratio"])
        self.assertEqual(rows[0].cells["Price"], "1688.00")
        self.assertEqual(rows[0].cells["Change"], "+1.50%")
        self.assertEqual(rows[0].cells["Market Cap"], "¥2.10T")
        self.assertEqual(rows[0].cells["P/E Ratio"], "28.40")
        self.assertEqual(rows[0].tones["Change"], "positive")

    def test_bond_and_sector_columns(self):
        bond = market_asset_rows([{"Name": "CGB", "Ticker": "019666", "Yield": 2.35, "ChangePercent": -0.1}],
                                 "bonds")[0]
        self.assertEqual(bond.cells["Symbol"], "019666")
        self.assertEqual(bond.cells["Yield"], "2.35%")
        self.assertEqual(bond.cells["Maturity"], "N/A")
        self.assertEqual(bond.tones["Change"], "negative")

        sector = market_asset_rows([{"Name": "Tech", "Companies": 412, "Performance": -1.2}], "sectors")[0]
        self.assertEqual(sector.cells["Companies"], "412")
        self.assertEqual(sector.cells["Performance"], "-1.20%")
        self.assertEqual(sector.tones["Performance"], "negative")

    def test_index_columns_and_missing_values(self):
        row = market_asset_rows([{}], "indices")[0]
        self.assertEqual(list(row.cells), ["Name", "Symbol", "Price", "Change"])
        self.assertEqual(row.cells["Name"], "N/A")
        self.assertEqual(row.cells["Price"], "N/A")
        self.assertEqual(row.cells["Change"], "+0.00%")

    def test_zero_price_is_shown(self):
        row = market_asset_rows([{"Name": "Halted", "Price": 0}], "indices")[0]
        self.assertEqual(row.cells["Price"], "0.00")


class TestInvestmentRows(unittest.TestCase):

    def test_mock_assets(self):
        rows = investment_asset_rows(get_mock_feed()["Assets"])
        msft = rows[1]

        self.assertEqual(msft.cells["Asset"], "Microsoft Corporation")
        self.assertEqual(msft.cells["Price"], "$384.52")
        self.assertEqual(msft.cells["Change"], "-1.23 (-0.32%)")
        self.assertEqual(msft.cells["Volume"], "23.46M")
        self.assertEqual(msft.cells["Market Cap"], "$2.90T")
        self.assertEqual(msft.tones, {"Change": "negative", "Risk": "orange"})

    def test_portfolio_rows_show_na_for_zero_market_cap(self):
        rows = portfolio_asset_rows(DEMO_ASSETS)
        bond = rows[-1]
        self.assertEqual(bond.cells["Symbol"], "TNX")
        self.assertEqual(bond.cells["Market Cap"], "N/A")
        self.assertEqual(bond.tones["Risk"], "green")


class TestSheetRows(unittest.TestCase):

    def test_columns_and_limit(self):
        records = [{"名称": f"资产{i}", "涨跌幅": 0.01 * (i - 30)} for i in range(60)]

        rows = sheet_rows(records, limit=50)

        self.assertEqual(len(rows), 50)
        self.assertEqual(list(rows[0].cells), ["名称", "涨跌幅"])
        self.assertEqual(rows[0].cells["涨跌幅"], "-30.00%")
        self.assertEqual(rows[0].tones, {"涨跌幅": "negative"})
        self.assertEqual(rows[30].tones, {})

    def test_columns_come_from_first_record(self):
        rows = sheet_rows([{"A": 1}, {"A": 2, "B": 3}])
        self.assertEqual(list(rows[1].cells), ["A"])


class TestTableFormatter(unittest.TestCase):

    def setUp(self):
        self.rows = [
            TableRow({"Name": "A", "Change": "+1.00%"}, {"Change": "positive"}),
            TableRow({"Name": "B", "Change": "-2.00%"}, {"Change": "negative"}),
        ]
        self.cards = [SummaryCard("Gainers", "1"), change_card("Average", -0.5, "-0.50%")]

    def tearDown(self):
        set_force_fallback(False)

    def test_change_card_tone(self):
        self.assertEqual(self.cards[1].tone, "negative")
        self.assertEqual(change_card("x", 0, "0").tone, "neutral")

    def test_json_table(self):
        output = TableFormatter("json").render_table(self.rows, "Assets")
        payload = json.loads(output)

        self.assertEqual(payload["title"], "Assets")
        self.assertEqual(payload["columns"], ["Name", "Change"])
        self.assertEqual(payload["rows"], rows_to_records(self.rows))
        self.assertEqual(payload["metadata"]["total_rows"], 2)

    def test_json_cards(self):
        payload = json.loads(TableFormatter("json").render_summary_cards(self.cards, "Summary"))
        self.assertEqual(payload["cards"][1]["tone"], "negative")

    def test_json_report_combines_cards_and_table(self):
        output = TableFormatter("json").render_report("数据", self.cards, self.rows, "表", footer="页脚")
        payload = json.loads(output)

        self.assertEqual(payload["title"], "数据")
        self.assertEqual(len(payload["cards"]), 2)
        self.assertEqual(payload["table"]["rows"][1]["Name"], "B")
        self.assertEqual(payload["table"]["footer"], "页脚")
        # Chinese text is kept readable
        self.assertIn("页脚", output)

    def test_plain_output(self):
        set_force_fallback(True)
        with patch('builtins.print') as mock_print:
            result = TableFormatter().render_table(self.rows, "Assets", footer="2 rows")

        self.assertIsNone(result)
        printed = [call.args[0] for call in mock_print.call_args_list]
        self.assertIn("Name | Change", printed)
        self.assertIn("B | -2.00%", printed)
        self.assertEqual(printed[-1], "2 rows")

    def test_plain_empty_table_prints_message(self):
        set_force_fallback(True)
        with patch('builtins.print') as mock_print:
            TableFormatter().render_table([], "Assets", empty_message="No assets found")

        self.assertIn("No assets found", mock_print.call_args_list[0].args[0])

    def test_rich_output(self):
        formatter = TableFormatter()
        with patch.object(formatter.console, 'print') as mock_print:
            formatter.render_report("Summary", self.cards, self.rows, "Assets")

        self.assertEqual(mock_print.call_count, 2)


if __name__ == '__main__':
    unittest.main()
