from __future__ import annotations

import re
from typing import Iterable, List, Optional

from .binance.models import PairInfo
from .mock import STATIC_SOURCE


def normalize_pair_input(user_input: str) -> str:
    return re.sub(r"\s+", "", user_input.upper())


def match_pair(user_input: str, symbols: Iterable[str]) -> Optional[str]:
    """Resolve free text such as ``"btc usdt"`` to one of ``symbols``.

    Exact matches win, compared with and without a ``/`` separator. Otherwise
    the first symbol that contains the input, or is contained in it, is
    returned.
    """

    candidates = [s for s in symbols if s]
    upper = user_input.strip().upper()
    normalized = normalize_pair_input(user_input)
    if not normalized:
        return None
    for symbol in candidates:
        if symbol in (upper, normalized) or symbol.replace("/", "") == normalized:
            return symbol
    for symbol in candidates:
        if normalized in symbol or symbol.replace("/", "") in normalized:
            return symbol
    return None


class PairLoader:
    """Load tradable pairs from the market data fetcher."""

    def __init__(self, fetcher, *, logger=None) -> None:
        self.fetcher = fetcher
        self.logger = logger
        self.pairs: List[PairInfo] = []
        self.from_fallback = False

    def load(self, *, quote_filter: Optional[str] = None) -> List[PairInfo]:
        info = self.fetcher.get_exchange_info()
        self.from_fallback = info.get("source") == STATIC_SOURCE
        quote_filter = quote_filter.upper() if quote_filter else None
        pairs: List[PairInfo] = []
        for symbol_data in info.get("symbols", []):
            pair = PairInfo.from_exchange_info(symbol_data)
            if not pair.is_trading:
                continue
            if quote_filter and pair.quote.upper() != quote_filter:
                continue
            pairs.append(pair)
        self.pairs = sorted(pairs, key=lambda p: p.symbol)
        if self.logger:
            origin = "built-in list" if self.from_fallback else "exchange info"
            self.logger.info("Loaded %s pairs from %s", len(self.pairs), origin)
        return self.pairs

    def symbols(self) -> List[str]:
        return [pair.symbol for pair in self.pairs]

    def resolve(self, user_input: str) -> Optional[str]:
        if not self.pairs:
            self.load()
        return match_pair(user_input, self.symbols())
