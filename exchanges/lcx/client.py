from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from core.config_service import Config
from core.logger import provider_logger
from core.errors import MarketDataError
from exchanges.batch import fetch_all
from exchanges.http_client import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, JsonHttpClient
from exchanges.pairs_loader import match_pair

LCX_BASE_URL = "https://exchange-api.lcx.com"
LCX_API_VERSION = "1.1.0"
LCX_SOURCE = "LCX Exchange API"


class LcxClient(JsonHttpClient):
    """Public LCX exchange endpoints. Every call sends the ``API-VERSION`` header."""

    provider = "lcx"

    def __init__(
        self,
        *,
        base_url: str = LCX_BASE_URL,
        api_version: str = LCX_API_VERSION,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = 0,
        backoff_seconds: float = 1.0,
        user_agent: str = DEFAULT_USER_AGENT,
        max_workers: int = 8,
        logger=None,
    ) -> None:
        super().__init__(
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
            backoff_seconds=backoff_seconds,
            user_agent=user_agent,
            headers={"API-VERSION": api_version},
            logger=logger,
        )
        self.max_workers = max_workers

    @classmethod
    def from_config(cls, config: Config, *, logger=None) -> "LcxClient":
        return cls(
            base_url=config.providers.lcx_base_url,
            api_version=config.providers.lcx_api_version,
            timeout=config.http.timeout_seconds,
            user_agent=config.http.user_agent,
            max_workers=config.http.max_workers,
            logger=logger or provider_logger("lcx"),
        )

    def get_order_book(self, pair: str) -> Dict:
        self._log("info", "LCX: fetching order book for %s", pair)
        return self.get_json("/api/book", params={"pair": pair})

    def get_ticker(self, pair: str) -> Dict:
        self._log("info", "LCX: fetching ticker for %s", pair)
        return self.get_json("/api/ticker", params={"pair": pair})

    def get_trades(self, pair: str) -> Dict:
        self._log("info", "LCX: fetching trades for %s", pair)
        return self.get_json("/api/trades", params={"pair": pair})

    def get_pairs(self) -> Dict:
        payload = self.get_json("/api/pairs")
        if not isinstance(payload, dict) or not isinstance(payload.get("data") or [], list):
            raise MarketDataError(f"LCX returned an unexpected pairs payload: {type(payload).__name__}")
        self._log("info", "LCX: fetched %s pairs", len(payload.get("data") or []))
        return payload

    def get_tickers(self, pairs: Iterable[str]) -> Dict[str, Any]:
        # LCX has no multi-ticker endpoint
        return fetch_all(
            list(pairs),
            self.get_ticker,
            key_name="pair",
            source=LCX_SOURCE,
            max_workers=self.max_workers,
            logger=self.logger,
        )

    def find_exact_pair(self, user_input: str) -> Optional[str]:
        try:
            pairs = self.get_pairs().get("data") or []
        except MarketDataError as exc:
            self._log("warning", "LCX: cannot list pairs to resolve %r: %s", user_input, exc)
            return None
        symbols = [
            entry["Symbol"] for entry in pairs if isinstance(entry, dict) and isinstance(entry.get("Symbol"), str)
        ]
        match = match_pair(user_input, symbols)
        if match:
            self._log("info", "LCX: resolved %r to %s", user_input, match)
        else:
            self._log("info", "LCX: no pair matches %r", user_input)
        return match
