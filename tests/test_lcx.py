import unittest
from unittest.mock import MagicMock

import requests

from core.config_service import Config
from core.errors import MarketDataError
from exchanges.lcx.client import LCX_SOURCE, LcxClient

PAIRS_PAYLOAD = {
    "status": "success",
    "data": [
        {"Symbol": "ETH/USDC", "Base": "ETH", "Quote": "USDC"},
        {"Symbol": "BTC/USDT", "Base": "BTC", "Quote": "USDT"},
        {"Symbol": "LCX/EUR", "Base": "LCX", "Quote": "EUR"},
    ],
}


def make_response(status_code: int = 200, payload=None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.reason = "Reason"
    response.headers = {}
    response.json.return_value = payload if payload is not None else {}
    return response


class LcxClientTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = LcxClient()
        self.client.session = MagicMock()

    def test_api_version_header(self) -> None:
        client = LcxClient(api_version="2.0.0")
        self.assertEqual(client.session.headers["API-VERSION"], "2.0.0")
        self.assertEqual(LcxClient().session.headers["API-VERSION"], "1.1.0")
        self.assertEqual(client.session.headers["Accept"], "application/json")

    def test_from_config(self) -> None:
        config = Config(providers={"lcx_api_version": "1.2.0"}, http={"timeout_seconds": 5, "max_workers": 2})
        client = LcxClient.from_config(config)
        self.assertEqual(client.session.headers["API-VERSION"], "1.2.0")
        self.assertEqual(client.timeout, 5)
        self.assertEqual(client.max_workers, 2)
        self.assertEqual(client.base_url, "https://exchange-api.lcx.com")

    def test_endpoints(self) -> None:
        self.client.session.get.return_value = make_response(200, {"data": {}})
        self.client.get_order_book("BTC/USDT")
        self.client.get_ticker("BTC/USDT")
        self.client.get_trades("BTC/USDT")
        urls = [c.args[0] for c in self.client.session.get.call_args_list]
        self.assertEqual(
            urls,
            [
                "https://exchange-api.lcx.com/api/book",
                "https://exchange-api.lcx.com/api/ticker",
                "https://exchange-api.lcx.com/api/trades",
            ],
        )
        self.assertEqual(self.client.session.get.call_args.kwargs["params"], {"pair": "BTC/USDT"})

    def test_find_exact_pair_normalizes_input(self) -> None:
        self.client.session.get.return_value = make_response(200, PAIRS_PAYLOAD)
        self.assertEqual(self.client.find_exact_pair("btc usdt"), "BTC/USDT")
        self.assertEqual(self.client.find_exact_pair("btc/usdt"), "BTC/USDT")

    def test_find_exact_pair_partial_match(self) -> None:
        self.client.session.get.return_value = make_response(200, PAIRS_PAYLOAD)
        self.assertEqual(self.client.find_exact_pair("lcx"), "LCX/EUR")

    def test_find_exact_pair_no_match(self) -> None:
        self.client.session.get.return_value = make_response(200, PAIRS_PAYLOAD)
        self.assertIsNone(self.client.find_exact_pair("doge"))

    def test_find_exact_pair_returns_none_on_error(self) -> None:
        self.client.session.get.side_effect = requests.ConnectionError("down")
        self.assertIsNone(self.client.find_exact_pair("btc usdt"))

    def test_find_exact_pair_returns_none_on_unexpected_payload(self) -> None:
        self.client.session.get.return_value = make_response(200, [{"Symbol": "BTC/USDT"}])
        self.assertIsNone(self.client.find_exact_pair("btc usdt"))
        self.client.session.get.return_value = make_response(200, {"data": {"Symbol": "BTC/USDT"}})
        self.assertIsNone(self.client.find_exact_pair("btc usdt"))

    def test_get_pairs_rejects_non_object_payload(self) -> None:
        self.client.session.get.return_value = make_response(200, ["BTC/USDT"])
        with self.assertRaises(MarketDataError):
            self.client.get_pairs()

    def test_find_exact_pair_skips_malformed_entries(self) -> None:
        payload = {"data": [{"Symbol": None}, {"Symbol": 42}, "BTC/USDT", {"Symbol": "BTC/USDT"}]}
        self.client.session.get.return_value = make_response(200, payload)
        self.assertEqual(self.client.find_exact_pair("btc usdt"), "BTC/USDT")

    def test_get_tickers_collects_failures(self) -> None:
        def fake_get(url, params=None, timeout=None):
            if params["pair"] == "BTC/USDT":
                return make_response(200, {"data": {"lastPrice": 65000}})
            return make_response(404)

        self.client.session.get.side_effect = fake_get
        result = self.client.get_tickers(["BTC/USDT", "NOPE/USDT"])
        self.assertEqual(result["source"], LCX_SOURCE)
        self.assertEqual(result["successfulCount"], 1)
        self.assertEqual(result["failedCount"], 1)
        self.assertEqual(result["successful"][0]["pair"], "BTC/USDT")
        self.assertEqual(result["failed"][0]["pair"], "NOPE/USDT")
        self.assertIn("404", result["failed"][0]["error"])


if __name__ == "__main__":
    unittest.main()
