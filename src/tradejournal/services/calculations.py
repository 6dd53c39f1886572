"""Pure PnL and status-transition calculations."""

from dataclasses import replace
from decimal import Decimal
from typing import Optional

from tradejournal.domain.models import PairInfo, Trade, TradeStatus
from tradejournal.domain.views import PnlView


def calculate_pnl(entry_price: Decimal, quantity: Decimal, live_price: Decimal) -> PnlView:
    """
    Compute absolute and percent PnL of a position.

    pnl_percent is relative to cost basis and is 0 when cost basis is not positive.
    """
    cost_basis = entry_price * quantity
    current_value = live_price * quantity
    pnl = current_value - cost_basis
    pnl_percent = pnl / cost_basis * 100 if cost_basis > 0 else Decimal("0")
    return PnlView(
        pnl=pnl,
        pnl_percent=pnl_percent,
        cost_basis=cost_basis,
        current_value=current_value,
    )


def next_status(
    status: TradeStatus,
    live_price: Decimal,
    target_price: Decimal,
    stop_loss: Decimal,
) -> TradeStatus:
    """
    Evaluate the open -> closed transition for one price sample.

    Target is checked before stop, so a price satisfying both closes in profit.
    Terminal statuses never change.
    """
    if status.is_terminal:
        return status
    if live_price >= target_price:
        return TradeStatus.CLOSED_PROFIT
    if live_price <= stop_loss:
        return TradeStatus.CLOSED_LOSS
    return status


def apply_quote(trade: Trade, pair_info: Optional[PairInfo]) -> Trade:
    """
    Return a copy of an open trade updated with a freshly resolved quote.

    Trades that are not open, or whose address did not resolve, are returned
    unchanged so their last known figures survive a failed refresh.
    """
    if not trade.is_open or pair_info is None:
        return trade

    live_price = pair_info.price_usd
    pnl = calculate_pnl(trade.entry_price, trade.quantity, live_price)
    return replace(
        trade,
        live_price=live_price,
        pnl=pnl.pnl,
        pnl_percent=pnl.pnl_percent,
        pair_info=pair_info,
        status=next_status(trade.status, live_price, trade.target_price, trade.stop_loss),
    )
