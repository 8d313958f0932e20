"""Tests for sheet extraction, number parsing and dynamic field detection."""

import unittest

from analytics.sheets import (
    available_sheets,
    build_chart_data,
    detect_field,
    extract_sheets,
    get_change_field,
    get_code_field,
    get_main_value_field,
    get_name_field,
    get_numeric_columns,
    get_record_type,
    get_sheet,
    get_table_columns,
    get_value_field,
    is_numeric,
    number_or_zero,
    parse_float,
)

CN_SHEET = [
    {"名称": "贵州茅台", "代码": "600519", "价格": "1688.00", "涨跌幅": 0.015, "资产类型": "股票", "市值": 2.1e12},
    {"名称": "招商银行", "代码": "600036", "价格": "32.10", "涨跌幅": -0.004, "资产类型": "股票", "市值": 8.1e11},
    {"名称": "易方达蓝筹", "代码": "005827", "价格": "1.95", "涨跌幅": 0, "资产类型": "基金", "市值": None},
]


class TestExtractSheets(unittest.TestCase):

    def test_keeps_only_list_values_in_order(self):
        feed = {"Stocks": [{"a": 1}], "Meta": {"v": 1}, "Bonds": [], "Note": "x"}
        self.assertEqual(extract_sheets(feed), {"Stocks": [{"a": 1}], "Bonds": []})
        self.assertEqual(available_sheets(feed), ["Stocks", "Bonds"])

    def test_empty_or_missing_feed(self):
        self.assertEqual(extract_sheets(None), {})
        self.assertEqual(extract_sheets({}), {})
        self.assertEqual(available_sheets(None), [])

    def test_get_sheet(self):
        feed = {"Stocks": [{"a": 1}], "Meta": {"v": 1}}
        self.assertEqual(get_sheet(feed, "Stocks"), [{"a": 1}])
        self.assertEqual(get_sheet(feed, "Meta"), [])
        self.assertEqual(get_sheet(feed, "Missing"), [])
        self.assertEqual(get_sheet(None, "Stocks"), [])


class TestNumberParsing(unittest.TestCase):

    def test_parse_float(self):
        self.assertEqual(parse_float(3), 3.0)
        self.assertEqual(parse_float("12.5"), 12.5)
        self.assertEqual(parse_float("12.5%"), 12.5)
        self.assertEqual(parse_float(" -3 "), -3.0)
        self.assertEqual(parse_float(".5"), 0.5)
        self.assertEqual(parse_float("1e3"), 1000.0)

    def test_parse_float_rejects_non_numbers(self):
        self.assertIsNone(parse_float(None))
        self.assertIsNone(parse_float(True))
        self.assertIsNone(parse_float("abc"))
        self.assertIsNone(parse_float(""))
        self.assertIsNone(parse_float(float("nan")))

    def test_number_or_zero(self):
        self.assertEqual(number_or_zero("7.25"), 7.25)
        self.assertEqual(number_or_zero(None), 0.0)
        self.assertEqual(number_or_zero("n/a"), 0.0)
        self.assertEqual(number_or_zero(float("inf")), 0.0)

    def test_is_numeric(self):
        self.assertTrue(is_numeric(1))
        self.assertTrue(is_numeric(0.5))
        self.assertTrue(is_numeric("42"))
        self.assertTrue(is_numeric(" -1.5 "))
        self.assertFalse(is_numeric("12.5%"))
        self.assertFalse(is_numeric("600519A"))
        self.assertFalse(is_numeric(""))
        self.assertFalse(is_numeric(None))
        self.assertFalse(is_numeric(False))
        self.assertFalse(is_numeric(float("nan")))


class TestFieldDetection(unittest.TestCase):

    def test_detect_field_uses_candidate_order(self):
        record = {"Close": 1, "Price": 2}
        self.assertEqual(detect_field(record, ["Price", "Close"]), "Price")
        self.assertEqual(detect_field(record, ["Value"]), "")
        self.assertEqual(detect_field(None, ["Price"]), "")

    def test_chinese_fields(self):
        self.assertEqual(get_name_field(CN_SHEET), "名称")
        self.assertEqual(get_code_field(CN_SHEET), "代码")
        self.assertEqual(get_value_field(CN_SHEET), "价格")
        self.assertEqual(get_change_field(CN_SHEET), "涨跌幅")

    def test_english_fields(self):
        records = [{"Symbol": "AAPL", "Name": "Apple", "Close": 190.1, "Change": 1.2}]
        self.assertEqual(get_name_field(records), "Name")
        self.assertEqual(get_code_field(records), "Symbol")
        self.assertEqual(get_value_field(records), "Close")
        self.assertEqual(get_change_field(records), "Change")

    def test_name_falls_back_to_first_key(self):
        self.assertEqual(get_name_field([{"Ticker": "X", "Score": 3}]), "Ticker")

    def test_empty_records(self):
        self.assertEqual(get_name_field([]), "")
        self.assertEqual(get_code_field([]), "")
        self.assertEqual(get_value_field([]), "")
        self.assertEqual(get_change_field([]), "")
        self.assertEqual(get_main_value_field([]), "")
        self.assertEqual(get_table_columns([]), [])
        self.assertEqual(get_numeric_columns([]), [])

    def test_numeric_columns_from_first_record(self):
        self.assertEqual(get_numeric_columns(CN_SHEET), ["代码", "价格", "涨跌幅", "市值"])

    def test_main_value_falls_back_to_first_numeric_column(self):
        records = [{"Label": "a", "Score": "3.5", "Weight": 2}]
        self.assertEqual(get_main_value_field(records), "Score")
        self.assertEqual(get_main_value_field([{"Label": "a"}]), "")

    def test_table_columns_follow_first_record(self):
        self.assertEqual(get_table_columns(CN_SHEET), list(CN_SHEET[0].keys()))

    def test_record_type_keys(self):
        self.assertEqual(get_record_type({"资产类型": "股票"}), "股票")
        self.assertEqual(get_record_type({"类型": "基金"}), "基金")
        self.assertEqual(get_record_type({"Type": "ETF"}), "ETF")
        self.assertEqual(get_record_type({"AssetType": "Bond"}), "Bond")
        self.assertIsNone(get_record_type({"Name": "x"}))


class TestChartData(unittest.TestCase):

    def test_rows_carry_name_code_and_numeric_series(self):
        rows = build_chart_data(CN_SHEET)

        self.assertEqual(len(rows), 3)
        self.assertEqual(rows[0]["name"], "贵州茅台")
        self.assertEqual(rows[0]["code"], "600519")
        self.assertEqual(rows[0]["价格"], 1688.0)
        self.assertEqual(rows[1]["涨跌幅"], -0.004)
        # Missing numeric values chart as 0
        self.assertEqual(rows[2]["市值"], 0.0)

    def test_limit_and_series_cap(self):
        records = [{"n": f"r{i}", "a": i, "b": i, "c": i, "d": i, "e": i, "f": i, "g": i} for i in range(30)]

        rows = build_chart_data(records, limit=20, max_series=5)

        self.assertEqual(len(rows), 20)
        self.assertEqual(set(rows[0].keys()), {"name", "code", "a", "b", "c", "d", "e"})

    def test_name_falls_back_to_code_then_index(self):
        records = [
            {"名称": "", "代码": "000001", "价格": 1},
            {"名称": None, "代码": "", "价格": 2},
        ]
        rows = build_chart_data(records)
        self.assertEqual(rows[0]["name"], "000001")
        self.assertEqual(rows[1]["name"], "项目2")

    def test_no_numeric_columns(self):
        self.assertEqual(build_chart_data([{"Name": "x", "Note": "y"}]), [])
        self.assertEqual(build_chart_data([]), [])


if __name__ == '__main__':
    unittest.main()
