from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

BookLevel = Tuple[float, float]


def _float(value: Any) -> Optional[float]:
    if value in (None, ""):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass
class PairFilters:
    tick_size: Optional[float] = None
    step_size: Optional[float] = None
    min_notional: Optional[float] = None
    raw_filters: List[Dict] = field(default_factory=list)


@dataclass
class PairInfo:
    symbol: str
    base: str
    quote: str
    status: str
    filters: PairFilters

    @property
    def is_trading(self) -> bool:
        return self.status == "TRADING"

    @classmethod
    def from_exchange_info(cls, symbol_data: Dict) -> "PairInfo":
        filters = cls._parse_filters(symbol_data.get("filters", []))
        return cls(
            symbol=symbol_data.get("symbol", ""),
            base=symbol_data.get("baseAsset", ""),
            quote=symbol_data.get("quoteAsset", ""),
            status=symbol_data.get("status", ""),
            filters=filters,
        )

    @staticmethod
    def _parse_filters(filters: List[Dict]) -> PairFilters:
        tick = None
        step = None
        min_notional = None
        for f in filters:
            ftype = f.get("filterType")
            if ftype == "PRICE_FILTER":
                tick = float(f.get("tickSize", "0"))
            elif ftype == "LOT_SIZE":
                step = float(f.get("stepSize", "0"))
            elif ftype in ("MIN_NOTIONAL", "NOTIONAL"):
                min_notional = float(f.get("minNotional", "0"))
        return PairFilters(tick_size=tick, step_size=step, min_notional=min_notional, raw_filters=filters)


@dataclass
class Ticker:
    """24h statistics in Binance field layout.

    Fallback payloads only carry a subset of the fields; the rest stay None.
    """

    symbol: str
    last_price: Optional[float]
    price_change: Optional[float] = None
    price_change_percent: Optional[float] = None
    volume: Optional[float] = None
    quote_volume: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    open: Optional[float] = None
    close_time: int | None = None
    source: str = "binance"

    @classmethod
    def from_payload(cls, payload: Dict) -> "Ticker":
        return cls(
            symbol=payload.get("symbol", ""),
            last_price=_float(payload.get("lastPrice")),
            price_change=_float(payload.get("priceChange")),
            price_change_percent=_float(payload.get("priceChangePercent")),
            volume=_float(payload.get("volume")),
            quote_volume=_float(payload.get("quoteVolume")),
            high=_float(payload.get("highPrice")),
            low=_float(payload.get("lowPrice")),
            open=_float(payload.get("openPrice")),
            close_time=payload.get("closeTime"),
            source=payload.get("source", "binance"),
        )


@dataclass
class OrderBook:
    symbol: str
    bids: List[BookLevel]
    asks: List[BookLevel]
    last_update_id: int | None = None
    source: str = "binance"

    @property
    def best_bid(self) -> Optional[float]:
        return self.bids[0][0] if self.bids else None

    @property
    def best_ask(self) -> Optional[float]:
        return self.asks[0][0] if self.asks else None

    @classmethod
    def from_payload(cls, payload: Dict, *, symbol: str = "") -> "OrderBook":
        return cls(
            symbol=payload.get("symbol", symbol),
            bids=[(float(price), float(qty)) for price, qty in payload.get("bids", [])],
            asks=[(float(price), float(qty)) for price, qty in payload.get("asks", [])],
            last_update_id=payload.get("lastUpdateId"),
            source=payload.get("source", "binance"),
        )


@dataclass
class Trade:
    price: float
    quantity: float
    timestamp: int
    side: str

    @classmethod
    def from_payload(cls, payload: Dict) -> "Trade":
        # the buyer being the maker means the aggressor sold
        side = "sell" if payload.get("isBuyerMaker") else "buy"
        return cls(
            price=float(payload.get("price", 0)),
            quantity=float(payload.get("qty", 0)),
            timestamp=int(payload.get("time", 0)),
            side=side,
        )


@dataclass
class Candle:
    open_time: int
    open: float
    high: float
    low: float
    close: float
    volume: float
    close_time: int

    @classmethod
    def from_kline(cls, row: List) -> "Candle":
        return cls(
            open_time=int(row[0]),
            open=float(row[1]),
            high=float(row[2]),
            low=float(row[3]),
            close=float(row[4]),
            volume=float(row[5]),
            close_time=int(row[6]),
        )


@dataclass
class MarketSnapshot:
    symbol: str
    ticker: Ticker
    book: OrderBook
    trades: List[Trade] = field(default_factory=list)

    @property
    def spread(self) -> Optional[float]:
        if self.book.best_bid is None or self.book.best_ask is None:
            return None
        return self.book.best_ask - self.book.best_bid

    @property
    def is_partial(self) -> bool:
        return self.ticker.source != "binance" or self.book.source != "binance"
