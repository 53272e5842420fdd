from __future__ import annotations

from typing import Dict, Iterable, Sequence

from core.errors import MarketDataError
from exchanges.http_client import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, JsonHttpClient

COINGECKO_BASE_URL = "https://api.coingecko.com"
DEFAULT_QUOTE_SUFFIXES = ("USDT", "BUSD", "USDC", "FDUSD", "TUSD", "USD", "EUR", "BTC", "ETH", "BNB")


def symbol_to_coin_id(symbol: str, quote_suffixes: Iterable[str] = DEFAULT_QUOTE_SUFFIXES) -> str:
    """Guess a CoinGecko id by dropping the quote asset from an exchange symbol.

    This is a heuristic: ``BTCUSDT`` becomes ``btc`` while CoinGecko lists
    Bitcoin as ``bitcoin``, so uncommon or ambiguous pairs will not resolve.
    """

    upper = symbol.strip().upper()
    for suffix in quote_suffixes:
        suffix = suffix.upper()
        if upper.endswith(suffix) and len(upper) > len(suffix):
            return upper[: -len(suffix)].lower()
    return upper.lower()


def reshape_simple_price(symbol: str, coin_id: str, payload: Dict) -> Dict:
    """Map a ``/simple/price`` entry onto Binance 24hr ticker field names."""

    entry = payload.get(coin_id) if isinstance(payload, dict) else None
    if not entry or "usd" not in entry:
        raise MarketDataError(f"coingecko has no usd price for '{coin_id}'")
    return {
        "symbol": symbol,
        "lastPrice": str(entry["usd"]),
        "priceChangePercent": _as_str(entry.get("usd_24h_change")),
        "quoteVolume": _as_str(entry.get("usd_24h_vol")),
        "marketCap": _as_str(entry.get("usd_market_cap")),
        "source": CoinGeckoClient.provider,
    }


def _as_str(value) -> str | None:
    return None if value is None else str(value)


class CoinGeckoClient(JsonHttpClient):
    provider = "coingecko"

    def __init__(
        self,
        *,
        base_url: str = COINGECKO_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = 0,
        backoff_seconds: float = 1.0,
        user_agent: str = DEFAULT_USER_AGENT,
        quote_suffixes: Sequence[str] = DEFAULT_QUOTE_SUFFIXES,
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
        self.quote_suffixes = tuple(quote_suffixes)

    def fetch_simple_price(self, coin_ids: Iterable[str]) -> Dict:
        params = {
            "ids": ",".join(coin_ids),
            "vs_currencies": "usd",
            "include_24hr_change": "true",
            "include_24hr_vol": "true",
            "include_market_cap": "true",
        }
        return self.get_json("/api/v3/simple/price", params=params)

    def fetch_ticker(self, symbol: str) -> Dict:
        coin_id = symbol_to_coin_id(symbol, self.quote_suffixes)
        payload = self.fetch_simple_price([coin_id])
        return reshape_simple_price(symbol, coin_id, payload)
