"""Price sync engine: periodic and on-demand market data refresh of open trades."""

import asyncio
import logging
from typing import Iterable, Mapping, Optional, Protocol

from tradejournal.domain.models import PairInfo, Trade
from tradejournal.services.calculations import apply_quote
from tradejournal.services.market_data_service import MarketDataClient

logger = logging.getLogger(__name__)

DEFAULT_SYNC_INTERVAL_SECONDS = 30.0


class TradeCollection(Protocol):
    """The caller-owned trade collection the engine reads from and merges into."""

    def list_trades(self) -> list[Trade]:
        ...

    def apply_quotes(self, quotes: Mapping[str, Optional[PairInfo]]) -> list[Trade]:
        ...


def collect_open_addresses(trades: Iterable[Trade]) -> set[str]:
    """Return the normalized lookup addresses of every open trade."""
    return {t.address for t in trades if t.is_open and t.address}


class PriceSyncEngine:
    """
    Refreshes live prices of open trades and drives their auto-close.

    A recurring timer and a manual refresh share run_sync_pass(). Passes may
    overlap; each one merges per trade id into the collection as it completes,
    so the later completion wins for a given id. stop() invalidates passes
    still in flight so nothing is written after teardown.
    """

    def __init__(
        self,
        market_data: MarketDataClient,
        trades: TradeCollection,
        interval_seconds: float = DEFAULT_SYNC_INTERVAL_SECONDS,
    ):
        self._market_data = market_data
        self._trades = trades
        self._interval = interval_seconds
        self._task: Optional[asyncio.Task] = None
        self._generation = 0
        self._stopped = False

    @property
    def interval_seconds(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def sync(self, trades: list[Trade]) -> list[Trade]:
        """
        Return the trades updated with fresh quotes; the input is not mutated.

        Only open trades are queried. Trades that are closed or whose address
        failed to resolve come back unchanged.
        """
        addresses = collect_open_addresses(trades)
        if not addresses:
            return list(trades)
        quotes = await self._market_data.fetch_pairs_data(addresses)
        return [apply_quote(t, quotes.get(t.address)) for t in trades]

    async def run_sync_pass(self) -> list[Trade]:
        """
        Fetch quotes for the collection's open trades and merge them back.

        Never raises. Returns the trades updated by this pass.
        """
        if self._stopped:
            return []
        generation = self._generation

        addresses = collect_open_addresses(self._trades.list_trades())
        if not addresses:
            return []

        quotes = await self._market_data.fetch_pairs_data(addresses)

        if self._stopped or generation != self._generation:
            logger.debug("Discarding price sync result after engine stop")
            return []

        try:
            updated = self._trades.apply_quotes(quotes)
        except Exception:
            logger.exception("Failed to merge price sync result")
            return []

        resolved = sum(1 for info in quotes.values() if info is not None)
        logger.debug(
            f"Price sync: {resolved}/{len(addresses)} addresses resolved, "
            f"{len(updated)} trades updated"
        )
        return updated

    async def refresh_now(self) -> list[Trade]:
        """Manual refresh; identical to a scheduled tick."""
        return await self.run_sync_pass()

    def start(self, run_immediately: bool = True) -> None:
        """Start the recurring timer. Must be called from a running event loop."""
        if self.is_running:
            return
        self._stopped = False
        self._task = asyncio.create_task(self._run_schedule(run_immediately))

    async def stop(self) -> None:
        """Stop the timer and drop the result of any pass still in flight."""
        self._stopped = True
        self._generation += 1
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run_schedule(self, run_immediately: bool) -> None:
        if run_immediately:
            await self._tick()
        while not self._stopped:
            await asyncio.sleep(self._interval)
            await self._tick()

    async def _tick(self) -> None:
        try:
            await self.run_sync_pass()
        except Exception:
            logger.exception("Scheduled price sync failed")
