from __future__ import annotations

import threading
import time
from typing import Any, Dict, List, Optional

import requests

from core.errors import HttpError, MarketDataError, ProviderBlocked, ProviderUnreachable, RateLimited, RequestTimeout

DEFAULT_TIMEOUT = 10
DEFAULT_USER_AGENT = "copilot-marketdata/0.1"
RATE_LIMIT_STATUSES = (418, 429)
LEGAL_BLOCK_STATUS = 451


class JsonHttpClient:
    """GET-only JSON client with bounded retries and exponential backoff.

    Timeouts, transport errors, 5xx and rate-limit responses are retried up
    to ``max_retries`` extra times. HTTP 451 and other 4xx responses are
    raised immediately. A ``Retry-After`` cooldown is only waited out when it
    fits within ``timeout``; longer ones fail fast with ``RateLimited`` until
    they expire.

    Each thread gets its own ``requests.Session``. Assigning ``session``
    replaces it for every thread.
    """

    provider = "http"

    def __init__(
        self,
        *,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = 2,
        backoff_seconds: float = 1.0,
        user_agent: str = DEFAULT_USER_AGENT,
        headers: Optional[Dict[str, str]] = None,
        logger=None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.headers = {"Accept": "application/json", "User-Agent": user_agent}
        if headers:
            self.headers.update(headers)
        self.timeout = timeout
        self.max_retries = max_retries
        self.backoff_seconds = backoff_seconds
        self.logger = logger
        self.cooldown_until = 0.0
        self.cooldown_status = RATE_LIMIT_STATUSES[-1]
        self._local = threading.local()
        self._lock = threading.Lock()
        self._sessions: List[requests.Session] = []
        self._session_override = None

    @property
    def session(self) -> requests.Session:
        if self._session_override is not None:
            return self._session_override
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            session.headers.update(self.headers)
            self._local.session = session
            with self._lock:
                self._sessions.append(session)
        return session

    @session.setter
    def session(self, value) -> None:
        self._session_override = value

    def _log(self, level: str, message: str, *args: Any) -> None:
        if self.logger:
            getattr(self.logger, level)(message, *args)

    def _wait_for_cooldown(self) -> None:
        remaining = self.cooldown_until - time.time()
        if remaining <= 0:
            return
        if remaining > self.timeout:
            raise RateLimited(self.provider, self.cooldown_status, remaining)
        time.sleep(remaining)

    def get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        attempt = 0
        backoff = self.backoff_seconds
        while True:
            attempt += 1
            self._wait_for_cooldown()
            try:
                response = self.session.get(url, params=params, timeout=self.timeout)
            except requests.Timeout:
                self._retry_or_raise(attempt, RequestTimeout(self.provider, self.timeout), backoff)
                backoff *= 2
                continue
            except requests.RequestException as exc:
                self._retry_or_raise(attempt, ProviderUnreachable(self.provider, str(exc)), backoff)
                backoff *= 2
                continue

            status = response.status_code
            if status == LEGAL_BLOCK_STATUS:
                self._log("warning", "%s refused %s with HTTP 451", self.provider, path)
                raise ProviderBlocked(self.provider, status, response.reason or "")
            if status in RATE_LIMIT_STATUSES:
                wait_for = self._retry_after(response, backoff)
                self.cooldown_until = time.time() + wait_for
                self.cooldown_status = status
                self._log("warning", "%s rate limit hit (%s), cooling down %ss", self.provider, status, wait_for)
                if wait_for > self.timeout:
                    raise RateLimited(self.provider, status, wait_for)
                self._retry_or_raise(attempt, HttpError(self.provider, status, response.reason or ""), 0)
                backoff *= 2
                continue
            if status >= 500:
                self._retry_or_raise(attempt, HttpError(self.provider, status, response.reason or ""), backoff)
                backoff *= 2
                continue
            if status >= 400:
                raise HttpError(self.provider, status, response.reason or "")
            try:
                return response.json()
            except ValueError as exc:
                raise ProviderUnreachable(self.provider, f"invalid JSON from {path}") from exc

    def _retry_or_raise(self, attempt: int, error: MarketDataError, delay: float) -> None:
        if attempt > self.max_retries:
            self._log("error", "%s request failed after %s attempts: %s", self.provider, attempt, error)
            raise error
        self._log(
            "warning",
            "%s request failed (attempt %s/%s): %s",
            self.provider,
            attempt,
            self.max_retries + 1,
            error,
        )
        if delay:
            time.sleep(delay)

    @staticmethod
    def _retry_after(response: requests.Response, default: float) -> float:
        try:
            return float(response.headers.get("Retry-After", default))
        except (TypeError, ValueError):
            return default

    def close(self) -> None:
        with self._lock:
            sessions, self._sessions = self._sessions, []
        for session in sessions:
            session.close()
