"""Tests for the run.py command-line interface."""

import io
import json
import os
import unittest
from contextlib import redirect_stdout
from unittest.mock import MagicMock, patch

import requests

import run

FEED = {
    "Stocks": [
        {"Name": "贵州茅台", "Symbol": "600519", "Type": "Consumer", "Price": 1688.0,
         "ChangePercent": 1.5, "MarketCap": 2.1e12, "PE": 28.4},
        {"Name": "中国平安", "Symbol": "601318", "Type": "Financial", "Price": 42.1,
         "ChangePercent": -0.8, "MarketCap": 7.6e11, "PE": 8.9},
    ],
    "Indices": [],
    "TimeSeries": [
        {"Date": "2024-01-02", "Price": 3000.0},
        {"Date": "2024-01-30", "Price": 3050.0},
    ],
    "Rows": [{"名称": f"资产{i}", "价格": i, "涨跌幅": 0.01} for i in range(60)],
}


def _ok_response(payload):
    response = MagicMock()
    response.ok = True
    response.status_code = 200
    response.json.return_value = payload
    return response


@patch('run.setup_logging')
class TestCommands(unittest.TestCase):

    def run_json(self, argv):
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            exit_code = run.main(argv)
        self.assertEqual(exit_code, 0)
        return json.loads(buffer.getvalue())

    @patch('market_data.data_fetcher.requests.get')
    def test_market_json(self, mock_get, _setup_logging):
        mock_get.return_value = _ok_response(FEED)

        payload = self.run_json(['market', '--type', 'Financial', '--json'])

        self.assertEqual(payload["table"]["rows"][0]["Name"], "中国平安")
        self.assertEqual(payload["metadata"]["total_rows"], 1)
        cards = {card["title"]: card for card in payload["cards"]}
        self.assertEqual(cards["Gainers / Losers"]["value"], "1 / 1")
        self.assertEqual(cards["Latest Price"]["value"], "¥3,050.00")
        self.assertEqual(cards["Latest Price"]["tone"], "positive")

    @patch('market_data.data_fetcher.requests.get')
    def test_market_failure_exits_1(self, mock_get, _setup_logging):
        mock_get.side_effect = requests.exceptions.ConnectionError("down")

        with patch('run.print_error') as mock_error:
            self.assertEqual(run.main(['market']), 1)

        self.assertIn("Failed to fetch market data", mock_error.call_args[0][0])

    @patch('market_data.data_fetcher.requests.get')
    def test_aipe_falls_back_to_sample_data(self, mock_get, _setup_logging):
        mock_get.side_effect = requests.exceptions.ConnectionError("down")

        payload = self.run_json(['aipe', '--risk', 'Medium', '--json'])

        cards = {card["title"]: card for card in payload["cards"]}
        self.assertEqual(cards["Data Source"]["value"], "Sample")
        self.assertEqual([row["ID"] for row in payload["table"]["rows"]], ["AAPL", "MSFT"])

    def test_portfolio_search(self, _setup_logging):
        payload = self.run_json(['portfolio', '--search', 'treasury', '--json'])

        self.assertEqual([row["Symbol"] for row in payload["table"]["rows"]], ["TNX"])

    @patch('market_data.data_fetcher.requests.get')
    def test_sheets_footer_when_truncated(self, mock_get, _setup_logging):
        mock_get.return_value = _ok_response(FEED)

        payload = self.run_json(['sheets', '--sheet', 'Rows', '--json'])

        self.assertEqual(len(payload["table"]["rows"]), 50)
        self.assertEqual(payload["table"]["footer"], "显示前50条记录，共60条数据")
        self.assertEqual(payload["table"]["rows"][0]["涨跌幅"], "1.00%")

    @patch('market_data.data_fetcher.requests.get')
    def test_sheets_defaults_to_first_sheet(self, mock_get, _setup_logging):
        mock_get.return_value = _ok_response(FEED)

        payload = self.run_json(['sheets', '--json'])

        self.assertEqual(payload["title"], "Stocks")

    @patch('market_data.data_fetcher.requests.get')
    def test_unknown_sheet(self, mock_get, _setup_logging):
        mock_get.return_value = _ok_response(FEED)

        with patch('run.print_error') as mock_error:
            self.assertEqual(run.main(['sheets', '--sheet', 'Nope']), 2)

        self.assertIn("Available: Stocks, Indices, TimeSeries, Rows", mock_error.call_args[0][0])

    @patch.dict(os.environ, {'DASHBOARD_DEV': 'true'})
    def test_dev_mode_logs_at_debug(self, mock_setup_logging):
        self.run_json(['portfolio', '--json'])

        settings = mock_setup_logging.call_args[0][0]
        self.assertEqual(settings.get('logging.level'), 'DEBUG')

    @patch('run.subprocess.run')
    def test_web_launches_streamlit(self, mock_run, _setup_logging):
        mock_run.return_value = MagicMock(returncode=0)

        with redirect_stdout(io.StringIO()):
            self.assertEqual(run.main(['web', '--port', '8600']), 0)

        command = mock_run.call_args[0][0]
        self.assertEqual(command[1:4], ["-m", "streamlit", "run"])
        self.assertTrue(command[4].endswith("streamlit_app.py"))
        self.assertEqual(command[-2:], ["--server.port", "8600"])


class TestParser(unittest.TestCase):

    def test_subcommand_required(self):
        with redirect_stdout(io.StringIO()), patch('sys.stderr', new_callable=io.StringIO):
            with self.assertRaises(SystemExit):
                run.build_parser().parse_args([])

    def test_market_defaults(self):
        args = run.build_parser().parse_args(['market'])
        self.assertEqual(args.tab, 'stocks')
        self.assertEqual(args.range, '1M')
        self.assertEqual(args.type, 'all')
        self.assertFalse(args.json)

    def test_invalid_range_rejected(self):
        with patch('sys.stderr', new_callable=io.StringIO):
            with self.assertRaises(SystemExit):
                run.build_parser().parse_args(['market', '--range', '5Y'])


if __name__ == '__main__':
    unittest.main()
