"""LCX exchange integration, independent of the Binance/CoinGecko chain."""

from .client import LCX_API_VERSION, LCX_BASE_URL, LCX_SOURCE, LcxClient

__all__ = ["LCX_API_VERSION", "LCX_BASE_URL", "LCX_SOURCE", "LcxClient"]
