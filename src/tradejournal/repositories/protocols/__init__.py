"""Repository protocol definitions (interfaces)."""

from tradejournal.repositories.protocols.trade_repo import TradeRepository

__all__ = [
    "TradeRepository",
]
