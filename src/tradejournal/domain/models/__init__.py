"""Domain models package."""

from tradejournal.domain.models.enums import TradeStatus
from tradejournal.domain.models.pair_info import PairInfo
from tradejournal.domain.models.trade import Trade, TradeCreate

__all__ = [
    "TradeStatus",
    "PairInfo",
    "Trade",
    "TradeCreate",
]
