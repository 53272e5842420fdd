"""CoinGecko integration used as the fallback price source."""

from .client import COINGECKO_BASE_URL, CoinGeckoClient, reshape_simple_price, symbol_to_coin_id

__all__ = ["COINGECKO_BASE_URL", "CoinGeckoClient", "reshape_simple_price", "symbol_to_coin_id"]
