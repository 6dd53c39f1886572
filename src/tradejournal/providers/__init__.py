"""Market data providers module."""

from tradejournal.providers.market_data_provider import MarketDataProvider
from tradejournal.providers.dexscreener_provider import DexScreenerProvider

__all__ = [
    "MarketDataProvider",
    "DexScreenerProvider",
]
