from __future__ import annotations

from typing import Dict, List

from exchanges.http_client import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, JsonHttpClient

BINANCE_BASE_URL = "https://api.binance.com"


class BinanceHttpClient(JsonHttpClient):
    provider = "binance"

    def __init__(
        self,
        *,
        base_url: str = BINANCE_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = 2,
        backoff_seconds: float = 1.0,
        user_agent: str = DEFAULT_USER_AGENT,
        logger=None,
    ) -> None:
        super().__init__(
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
            backoff_seconds=backoff_seconds,
            user_agent=user_agent,
            logger=logger,
        )

    def fetch_exchange_info(self) -> Dict:
        return self.get_json("/api/v3/exchangeInfo")

    def fetch_ticker_24h(self, symbol: str) -> Dict:
        return self.get_json("/api/v3/ticker/24hr", params={"symbol": symbol})

    def fetch_order_book(self, symbol: str, limit: int = 100) -> Dict:
        return self.get_json("/api/v3/depth", params={"symbol": symbol, "limit": limit})

    def fetch_trades(self, symbol: str, limit: int = 100) -> List[Dict]:
        return self.get_json("/api/v3/trades", params={"symbol": symbol, "limit": limit})

    def fetch_klines(self, symbol: str, interval: str = "1d", limit: int = 100) -> List[list]:
        return self.get_json("/api/v3/klines", params={"symbol": symbol, "interval": interval, "limit": limit})
