"""Trade domain models."""

from dataclasses import dataclass, field, fields
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from tradejournal.domain.models.enums import TradeStatus
from tradejournal.domain.models.pair_info import PairInfo


@dataclass
class TradeCreate:
    """
    Persistent fields of a trade, without an id.

    Used for new trades and for rows parsed from an import file; the
    store assigns the integer id on insertion.
    """

    coin_slug_or_address: str
    entry_price: Decimal
    target_price: Decimal
    stop_loss: Decimal
    quantity: Decimal
    date: datetime
    notes: str = ""
    status: TradeStatus = TradeStatus.OPEN
    market_cap_at_entry: Optional[Decimal] = None
    target_market_cap: Optional[Decimal] = None

    def __post_init__(self) -> None:
        if isinstance(self.status, str):
            self.status = TradeStatus(self.status)


@dataclass
class Trade:
    """
    A logged speculative position.

    Persistent fields mirror TradeCreate. live_price, pnl, pnl_percent and
    pair_info are transient: None until the first successful price sync,
    then holding the last resolved values.
    """

    trade_id: int
    coin_slug_or_address: str
    entry_price: Decimal
    target_price: Decimal
    stop_loss: Decimal
    quantity: Decimal
    date: datetime
    notes: str = ""
    status: TradeStatus = TradeStatus.OPEN
    market_cap_at_entry: Optional[Decimal] = None
    target_market_cap: Optional[Decimal] = None
    live_price: Optional[Decimal] = field(default=None, compare=False)
    pnl: Optional[Decimal] = field(default=None, compare=False)
    pnl_percent: Optional[Decimal] = field(default=None, compare=False)
    pair_info: Optional[PairInfo] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.status, str):
            self.status = TradeStatus(self.status)

    @classmethod
    def from_create(cls, trade_id: int, data: TradeCreate) -> "Trade":
        """Build a trade from its persistent fields and a store-assigned id."""
        return cls(trade_id=trade_id, **_as_dict(data))

    @property
    def is_open(self) -> bool:
        """Return True if the trade is still polled for prices."""
        return self.status == TradeStatus.OPEN

    @property
    def address(self) -> str:
        """Normalized market-data lookup key for this trade."""
        return self.coin_slug_or_address.strip()

    @property
    def cost_basis(self) -> Decimal:
        return self.entry_price * self.quantity


def _as_dict(obj: Any) -> dict[str, Any]:
    """Shallow field dict; dataclasses.asdict would deep-copy values."""
    return {f.name: getattr(obj, f.name) for f in fields(obj)}
