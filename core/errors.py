from __future__ import annotations

from typing import Iterable, Optional


class MarketDataError(Exception):
    """Base class for every failure raised by the fetch layer."""


class HttpError(MarketDataError):
    def __init__(self, provider: str, status_code: int, reason: str = "") -> None:
        self.provider = provider
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"{provider} HTTP {status_code} {reason}".rstrip())


class ProviderBlocked(HttpError):
    """HTTP 451: the provider refuses to serve this region."""


class RateLimited(HttpError):
    """429/418 whose cooldown is longer than the request timeout."""

    def __init__(self, provider: str, status_code: int, retry_after: float) -> None:
        super().__init__(provider, status_code, f"cooling down for {retry_after:.0f}s")
        self.retry_after = retry_after


class RequestTimeout(MarketDataError, TimeoutError):
    def __init__(self, provider: str, timeout: float) -> None:
        self.provider = provider
        self.timeout = timeout
        super().__init__(f"{provider} request timed out after {timeout}s")


class ProviderUnreachable(MarketDataError):
    def __init__(self, provider: str, detail: str) -> None:
        self.provider = provider
        super().__init__(f"{provider} unreachable: {detail}")


class DataUnavailable(MarketDataError):
    def __init__(self, kind: str, symbol: Optional[str], providers: Iterable[str]) -> None:
        self.kind = kind
        self.symbol = symbol
        self.providers = tuple(providers)
        target = f" for {symbol}" if symbol else ""
        super().__init__(f"{kind}{target} unavailable from {', '.join(self.providers)}")
