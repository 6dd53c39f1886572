"""Repository layer - data access abstractions and implementations."""

from tradejournal.repositories.protocols import TradeRepository

__all__ = [
    "TradeRepository",
]
