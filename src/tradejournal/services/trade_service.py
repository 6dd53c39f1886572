"""Trade service: the live trade collection in front of the persisted store."""

import logging
from dataclasses import replace
from typing import Iterable, Mapping, Optional

from tradejournal.core.exceptions import NotFoundError
from tradejournal.domain.models import PairInfo, Trade, TradeCreate, TradeStatus
from tradejournal.repositories.protocols import TradeRepository
from tradejournal.services.calculations import apply_quote, calculate_pnl

logger = logging.getLogger(__name__)


class TradeService:
    """
    Holds the in-memory trade collection keyed by id and fronts the store.

    The collection carries transient market data the store never sees.
    Every mutation goes to the store first, then into the collection, so the
    collection always reflects the latest persisted state plus the most
    recently merged prices.
    """

    def __init__(self, trade_repo: TradeRepository):
        self._repo = trade_repo
        self._trades: dict[int, Trade] = {}

    def load(self) -> list[Trade]:
        """(Re)load the collection from the store, dropping transient data."""
        self._trades = {t.trade_id: t for t in self._repo.list_all()}
        return self.list_trades()

    def list_trades(self, status: Optional[TradeStatus] = None) -> list[Trade]:
        """Return a snapshot of the collection, optionally filtered by status."""
        trades = list(self._trades.values())
        if status is not None:
            trades = [t for t in trades if t.status == status]
        return trades

    def get_trade(self, trade_id: int) -> Trade:
        trade = self._trades.get(trade_id)
        if trade is None:
            raise NotFoundError("Trade", str(trade_id))
        return trade

    def add_trade(self, data: TradeCreate) -> Trade:
        """Create a trade. New trades always start open."""
        data = replace(data, status=TradeStatus.OPEN)
        trade_id = self._repo.add(data)
        trade = Trade.from_create(trade_id, data)
        self._trades[trade_id] = trade
        return trade

    def update_trade(self, trade_id: int, data: TradeCreate) -> Trade:
        """
        Replace the persistent fields of a trade.

        PnL and status are re-evaluated against the last known pair snapshot,
        as if the previous quote had just arrived.
        """
        current = self.get_trade(trade_id)
        updated = replace(
            Trade.from_create(trade_id, data),
            live_price=current.live_price,
            pnl=current.pnl,
            pnl_percent=current.pnl_percent,
            pair_info=current.pair_info,
        )
        if updated.address != current.address:
            updated = replace(updated, live_price=None, pnl=None, pnl_percent=None, pair_info=None)
        else:
            updated = apply_quote(updated, updated.pair_info)
        self._repo.update(updated)
        self._trades[trade_id] = updated
        return updated

    def delete_trade(self, trade_id: int) -> None:
        self._repo.delete(trade_id)
        self._trades.pop(trade_id, None)

    def bulk_add(self, trades: list[TradeCreate]) -> list[Trade]:
        """Insert several trades keeping each one's given status (e.g. from import)."""
        trade_ids = self._repo.bulk_add(trades)
        created = [Trade.from_create(tid, data) for tid, data in zip(trade_ids, trades)]
        for trade in created:
            self._trades[trade.trade_id] = trade
        return created

    def bulk_update(self, trades: list[Trade]) -> list[Trade]:
        for trade in trades:
            self.get_trade(trade.trade_id)
        self._repo.bulk_update(trades)
        for trade in trades:
            self._trades[trade.trade_id] = trade
        return trades

    def bulk_delete(self, trade_ids: Iterable[int]) -> None:
        trade_ids = list(trade_ids)
        self._repo.bulk_delete(trade_ids)
        for trade_id in trade_ids:
            self._trades.pop(trade_id, None)

    def bulk_close(self, trade_ids: Iterable[int]) -> list[Trade]:
        """
        Manually close selected open trades at their live price.

        Only open trades with a known live price are closed: profit when
        PnL >= 0, loss otherwise. Returns the closed trades.
        """
        to_close: list[Trade] = []
        for trade_id in trade_ids:
            trade = self._trades.get(trade_id)
            if trade is None or not trade.is_open or trade.live_price is None:
                continue
            pnl = calculate_pnl(trade.entry_price, trade.quantity, trade.live_price)
            status = TradeStatus.CLOSED_PROFIT if pnl.pnl >= 0 else TradeStatus.CLOSED_LOSS
            to_close.append(replace(trade, status=status))

        if to_close:
            self.bulk_update(to_close)
        return to_close

    def apply_quotes(self, quotes: Mapping[str, Optional[PairInfo]]) -> list[Trade]:
        """
        Merge a sync result into the collection, per trade id.

        Reads each trade as it is now, not as it was when the fetch started,
        so concurrent edits survive. Only open trades whose address resolved
        are touched; status transitions are persisted. Returns the trades
        that were updated.

        Transitions are written to the store before anything enters the
        collection. If the write fails the collection is left untouched and
        the error propagates.
        """
        updated: list[Trade] = []
        transitioned: list[Trade] = []

        for trade in self._trades.values():
            if not trade.is_open:
                continue
            pair_info = quotes.get(trade.address)
            if pair_info is None:
                continue
            new_trade = apply_quote(trade, pair_info)
            updated.append(new_trade)
            if new_trade.status != trade.status:
                transitioned.append(new_trade)

        if transitioned:
            self._repo.bulk_update(transitioned)

        for new_trade in updated:
            self._trades[new_trade.trade_id] = new_trade
        for trade in transitioned:
            logger.info(
                f"Trade {trade.trade_id} ({trade.address}) auto-closed as "
                f"{trade.status.value} at {trade.live_price}"
            )
        return updated
