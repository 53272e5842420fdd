import unittest

from exchanges.binance.models import Candle, MarketSnapshot, OrderBook, PairInfo, Ticker, Trade


class BinanceModelTests(unittest.TestCase):
    def test_binance_exchange_info_parsing(self) -> None:
        data = {
            "symbol": "BTCUSDT",
            "baseAsset": "BTC",
            "quoteAsset": "USDT",
            "status": "TRADING",
            "filters": [
                {"filterType": "PRICE_FILTER", "tickSize": "0.01"},
                {"filterType": "LOT_SIZE", "stepSize": "0.001"},
                {"filterType": "NOTIONAL", "minNotional": "5"},
            ],
        }
        pair = PairInfo.from_exchange_info(data)
        self.assertEqual(pair.symbol, "BTCUSDT")
        self.assertTrue(pair.is_trading)
        self.assertEqual(pair.filters.tick_size, 0.01)
        self.assertEqual(pair.filters.step_size, 0.001)
        self.assertEqual(pair.filters.min_notional, 5.0)

    def test_pair_without_filters(self) -> None:
        pair = PairInfo.from_exchange_info({"symbol": "ETHUSDT", "status": "BREAK"})
        self.assertFalse(pair.is_trading)
        self.assertIsNone(pair.filters.tick_size)
        self.assertEqual(pair.filters.raw_filters, [])

    def test_ticker_from_binance_payload(self) -> None:
        payload = {
            "symbol": "BTCUSDT",
            "priceChange": "-120.5",
            "priceChangePercent": "-0.18",
            "lastPrice": "65000.10",
            "highPrice": "66000",
            "lowPrice": "64000",
            "openPrice": "65120.6",
            "volume": "1234.5",
            "quoteVolume": "80000000",
            "closeTime": 1700000000000,
        }
        ticker = Ticker.from_payload(payload)
        self.assertEqual(ticker.last_price, 65000.10)
        self.assertEqual(ticker.price_change, -120.5)
        self.assertEqual(ticker.high, 66000.0)
        self.assertEqual(ticker.close_time, 1700000000000)
        self.assertEqual(ticker.source, "binance")

    def test_ticker_from_fallback_payload_keeps_source(self) -> None:
        payload = {"symbol": "BTCUSDT", "lastPrice": "65000", "priceChangePercent": None, "source": "coingecko"}
        ticker = Ticker.from_payload(payload)
        self.assertEqual(ticker.last_price, 65000.0)
        self.assertIsNone(ticker.price_change_percent)
        self.assertIsNone(ticker.volume)
        self.assertEqual(ticker.source, "coingecko")

    def test_order_book_levels(self) -> None:
        payload = {"lastUpdateId": 7, "bids": [["100.0", "2"], ["99.5", "1"]], "asks": [["101.0", "3"]]}
        book = OrderBook.from_payload(payload, symbol="BTCUSDT")
        self.assertEqual(book.symbol, "BTCUSDT")
        self.assertEqual(book.bids[0], (100.0, 2.0))
        self.assertEqual(book.best_bid, 100.0)
        self.assertEqual(book.best_ask, 101.0)
        self.assertEqual(book.last_update_id, 7)

    def test_trade_side_from_buyer_maker(self) -> None:
        sold = Trade.from_payload({"price": "100", "qty": "0.5", "time": 1, "isBuyerMaker": True})
        bought = Trade.from_payload({"price": "101", "qty": "0.1", "time": 2, "isBuyerMaker": False})
        self.assertEqual(sold.side, "sell")
        self.assertEqual(bought.side, "buy")
        self.assertEqual(sold.quantity, 0.5)

    def test_candle_from_kline(self) -> None:
        row = [1700000000000, "100", "110", "95", "105", "12.5", 1700086399999, "1300", 42, "6", "630", "0"]
        candle = Candle.from_kline(row)
        self.assertEqual(candle.open, 100.0)
        self.assertEqual(candle.low, 95.0)
        self.assertEqual(candle.close_time, 1700086399999)

    def test_snapshot_spread_and_partial_flag(self) -> None:
        ticker = Ticker.from_payload({"symbol": "BTCUSDT", "lastPrice": "100.5"})
        book = OrderBook.from_payload({"bids": [["100.0", "1"]], "asks": [["101.0", "1"]]}, symbol="BTCUSDT")
        snapshot = MarketSnapshot(symbol="BTCUSDT", ticker=ticker, book=book)
        self.assertEqual(snapshot.spread, 1.0)
        self.assertFalse(snapshot.is_partial)

        stub_book = OrderBook.from_payload({"symbol": "BTCUSDT", "bids": [], "asks": [], "source": "coingecko"})
        partial = MarketSnapshot(symbol="BTCUSDT", ticker=ticker, book=stub_book)
        self.assertIsNone(partial.spread)
        self.assertTrue(partial.is_partial)


if __name__ == "__main__":
    unittest.main()
