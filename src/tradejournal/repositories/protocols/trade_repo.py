"""Trade repository protocol."""

from typing import Protocol, Optional

from tradejournal.domain.models import Trade, TradeCreate


class TradeRepository(Protocol):
    """
    Interface for the persisted trade store.

    Keyed by an auto-incrementing integer id. Implementations persist only
    persistent fields; transient market data is never stored.
    """

    def list_all(self) -> list[Trade]:
        """List all trades ordered by id."""
        ...

    def get_by_id(self, trade_id: int) -> Optional[Trade]:
        """Retrieve trade by ID."""
        ...

    def add(self, trade: TradeCreate) -> int:
        """Persist a new trade and return its generated id."""
        ...

    def update(self, trade: Trade) -> None:
        """Overwrite the persistent fields of an existing trade."""
        ...

    def delete(self, trade_id: int) -> None:
        """Delete a trade (no-op if absent)."""
        ...

    def bulk_add(self, trades: list[TradeCreate]) -> list[int]:
        """Persist several trades in one transaction; ids in input order."""
        ...

    def bulk_update(self, trades: list[Trade]) -> None:
        """Update several trades in one transaction."""
        ...

    def bulk_delete(self, trade_ids: list[int]) -> None:
        """Delete several trades in one transaction."""
        ...
