"""Binance REST integration, the primary market data provider."""

from .http_client import BINANCE_BASE_URL, BinanceHttpClient
from .models import Candle, MarketSnapshot, OrderBook, PairFilters, PairInfo, Ticker, Trade

__all__ = [
    "BINANCE_BASE_URL",
    "BinanceHttpClient",
    "Candle",
    "MarketSnapshot",
    "OrderBook",
    "PairFilters",
    "PairInfo",
    "Ticker",
    "Trade",
]
