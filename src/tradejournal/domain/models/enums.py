"""Enumerations for domain models."""

from enum import Enum


class TradeStatus(str, Enum):
    """Lifecycle status of a logged trade."""

    OPEN = "open"
    CLOSED_PROFIT = "closed-profit"  # terminal
    CLOSED_LOSS = "closed-loss"  # terminal

    @property
    def is_terminal(self) -> bool:
        """Return True once the trade is no longer polled for prices."""
        return self is not TradeStatus.OPEN
