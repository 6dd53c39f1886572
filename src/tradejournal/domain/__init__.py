"""Domain layer - pure business models with no external dependencies."""

from tradejournal.domain.models import (
    Trade,
    TradeCreate,
    TradeStatus,
    PairInfo,
)

__all__ = [
    "Trade",
    "TradeCreate",
    "TradeStatus",
    "PairInfo",
]
