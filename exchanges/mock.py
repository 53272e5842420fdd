from typing import Dict, List

STATIC_SOURCE = "fallback"

FALLBACK_SYMBOLS = [
    {"symbol": "BTCUSDT", "baseAsset": "BTC", "quoteAsset": "USDT", "status": "TRADING"},
    {"symbol": "ETHUSDT", "baseAsset": "ETH", "quoteAsset": "USDT", "status": "TRADING"},
    {"symbol": "BNBUSDT", "baseAsset": "BNB", "quoteAsset": "USDT", "status": "TRADING"},
    {"symbol": "SOLUSDT", "baseAsset": "SOL", "quoteAsset": "USDT", "status": "TRADING"},
    {"symbol": "XRPUSDT", "baseAsset": "XRP", "quoteAsset": "USDT", "status": "TRADING"},
    {"symbol": "ADAUSDT", "baseAsset": "ADA", "quoteAsset": "USDT", "status": "TRADING"},
]


def load_fallback_symbols() -> List[Dict[str, str]]:
    return [entry.copy() for entry in FALLBACK_SYMBOLS]


def static_exchange_info() -> Dict:
    """Minimal exchangeInfo payload served when no provider answers."""
    return {"timezone": "UTC", "symbols": load_fallback_symbols(), "source": STATIC_SOURCE}
