from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List

from core.config_service import Config
from core.logger import provider_logger
from core.errors import DataUnavailable, HttpError, MarketDataError, ProviderUnreachable, RequestTimeout
from exchanges.batch import fetch_all
from exchanges.binance.http_client import BinanceHttpClient
from exchanges.binance.models import Candle, MarketSnapshot, OrderBook, Ticker, Trade
from exchanges.coingecko.client import CoinGeckoClient
from exchanges.http_client import RATE_LIMIT_STATUSES
from exchanges.mock import static_exchange_info


def should_fall_back(exc: MarketDataError) -> bool:
    """Blocks, timeouts, transport errors and server-side failures move on to the fallback."""
    if isinstance(exc, (RequestTimeout, ProviderUnreachable)):
        return True
    if isinstance(exc, HttpError):
        return exc.status_code == 451 or exc.status_code >= 500 or exc.status_code in RATE_LIMIT_STATUSES
    return False


class MarketDataFetcher:
    """Binance market data with CoinGecko substitution when Binance is blocked or down.

    Successful Binance responses are returned untouched. Substituted payloads
    carry a ``source`` field naming the provider that produced them.
    """

    def __init__(
        self,
        primary: BinanceHttpClient,
        secondary: CoinGeckoClient,
        *,
        use_static_symbols: bool = True,
        max_workers: int = 8,
        logger=None,
    ) -> None:
        self.primary = primary
        self.secondary = secondary
        self.use_static_symbols = use_static_symbols
        self.max_workers = max_workers
        self.logger = logger

    @classmethod
    def from_config(cls, config: Config, *, logger=None) -> "MarketDataFetcher":
        http = config.http
        primary = BinanceHttpClient(
            base_url=config.providers.binance_base_url,
            timeout=http.timeout_seconds,
            max_retries=http.max_retries,
            backoff_seconds=http.backoff_seconds,
            user_agent=http.user_agent,
            logger=logger or provider_logger("binance"),
        )
        secondary = CoinGeckoClient(
            base_url=config.providers.coingecko_base_url,
            timeout=http.timeout_seconds,
            user_agent=http.user_agent,
            quote_suffixes=config.fallback.quote_suffixes,
            logger=logger or provider_logger("coingecko"),
        )
        return cls(
            primary,
            secondary,
            use_static_symbols=config.fallback.use_static_symbols,
            max_workers=http.max_workers,
            logger=logger or provider_logger("fetcher"),
        )

    @property
    def providers(self) -> tuple[str, str]:
        return (self.primary.provider, self.secondary.provider)

    def _log(self, level: str, msg: str, *args) -> None:
        if self.logger:
            getattr(self.logger, level)(msg, *args)

    def _with_fallback(self, kind: str, symbol: str, primary_call: Callable[[], Any], fallback_call: Callable[[], Any]) -> Any:
        try:
            return primary_call()
        except MarketDataError as exc:
            if not should_fall_back(exc):
                raise
            self._log("warning", "%s for %s failed on %s (%s), using %s", kind, symbol, self.primary.provider, exc, self.secondary.provider)
        try:
            return fallback_call()
        except MarketDataError as exc:
            self._log("error", "%s fallback for %s failed: %s", kind, symbol, exc)
            raise DataUnavailable(kind, symbol, self.providers) from exc

    def _stub(self, label: str, symbol: str, **extra: Any) -> Dict[str, Any]:
        payload = {
            "symbol": symbol,
            "message": f"{label} not available from {self.secondary.provider}",
            "source": self.secondary.provider,
        }
        payload.update(extra)
        return payload

    def get_ticker(self, symbol: str) -> Dict:
        return self._with_fallback(
            "ticker",
            symbol,
            lambda: self.primary.fetch_ticker_24h(symbol),
            lambda: self.secondary.fetch_ticker(symbol),
        )

    def get_order_book(self, symbol: str, limit: int = 100) -> Dict:
        return self._with_fallback(
            "order book",
            symbol,
            lambda: self.primary.fetch_order_book(symbol, limit),
            lambda: self._stub("Order book", symbol, bids=[], asks=[]),
        )

    def get_trades(self, symbol: str, limit: int = 100) -> List[Dict] | Dict:
        return self._with_fallback(
            "trades",
            symbol,
            lambda: self.primary.fetch_trades(symbol, limit),
            lambda: self._stub("Trades", symbol),
        )

    def get_klines(self, symbol: str, interval: str = "1d", limit: int = 100) -> List[list] | Dict:
        return self._with_fallback(
            "klines",
            symbol,
            lambda: self.primary.fetch_klines(symbol, interval, limit),
            lambda: self._stub("Klines", symbol, interval=interval),
        )

    def get_candles(self, symbol: str, interval: str = "1d", limit: int = 100) -> List[Candle]:
        """Typed klines. Empty when only the fallback placeholder is available."""
        rows = self.get_klines(symbol, interval, limit)
        return [Candle.from_kline(row) for row in rows] if isinstance(rows, list) else []

    def get_exchange_info(self) -> Dict:
        try:
            return self.primary.fetch_exchange_info()
        except MarketDataError as exc:
            if not self.use_static_symbols:
                raise DataUnavailable("exchange info", None, (self.primary.provider,)) from exc
            self._log("warning", "Exchange info unavailable (%s), serving built-in symbol list", exc)
            return static_exchange_info()

    def get_tickers(self, symbols: Iterable[str]) -> Dict[str, Any]:
        return fetch_all(
            list(symbols),
            self.get_ticker,
            key_name="symbol",
            source=self.primary.provider,
            max_workers=self.max_workers,
            logger=self.logger,
        )

    def get_snapshot(self, symbol: str, *, depth: int = 5, trades: int = 20) -> MarketSnapshot:
        ticker = Ticker.from_payload(self.get_ticker(symbol))
        book = OrderBook.from_payload(self.get_order_book(symbol, depth), symbol=symbol)
        trades_payload = self.get_trades(symbol, trades)
        recent = [Trade.from_payload(t) for t in trades_payload] if isinstance(trades_payload, list) else []
        return MarketSnapshot(symbol=symbol, ticker=ticker, book=book, trades=recent)
