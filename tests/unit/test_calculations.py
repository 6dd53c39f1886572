"""
Unit tests for PnL and status-transition calculations.
"""

from decimal import Decimal

from tradejournal.domain.models import TradeStatus
from tradejournal.services.calculations import apply_quote, calculate_pnl, next_status
from tradejournal.services.market_data_service import pair_info_from_api

from tests.conftest import make_pair, make_trade


def _info(price: str):
    return pair_info_from_api(make_pair("0xaaa", price_usd=price))


class TestCalculatePnl:
    """Tests for PnL figures."""

    def test_gain(self):
        """
        GIVEN entry 1.00, quantity 100, live 1.50
        WHEN PnL is calculated
        THEN pnl is 50 and pnl_percent is 50
        """
        pnl = calculate_pnl(Decimal("1.00"), Decimal("100"), Decimal("1.50"))

        assert pnl.cost_basis == Decimal("100")
        assert pnl.current_value == Decimal("150")
        assert pnl.pnl == Decimal("50")
        assert pnl.pnl_percent == Decimal("50")

    def test_loss(self):
        pnl = calculate_pnl(Decimal("2"), Decimal("10"), Decimal("1.5"))

        assert pnl.pnl == Decimal("-5")
        assert pnl.pnl_percent == Decimal("-25")

    def test_zero_cost_basis_gives_zero_percent(self):
        pnl = calculate_pnl(Decimal("0"), Decimal("10"), Decimal("3"))

        assert pnl.pnl == Decimal("30")
        assert pnl.pnl_percent == Decimal("0")


class TestNextStatus:
    """Tests for the open -> closed transition."""

    def test_price_at_target_closes_in_profit(self):
        assert next_status(
            TradeStatus.OPEN, Decimal("2"), Decimal("2"), Decimal("1")
        ) == TradeStatus.CLOSED_PROFIT

    def test_price_at_stop_closes_in_loss(self):
        assert next_status(
            TradeStatus.OPEN, Decimal("1"), Decimal("2"), Decimal("1")
        ) == TradeStatus.CLOSED_LOSS

    def test_price_between_stays_open(self):
        assert next_status(
            TradeStatus.OPEN, Decimal("1.5"), Decimal("2"), Decimal("1")
        ) == TradeStatus.OPEN

    def test_target_checked_before_stop(self):
        """
        GIVEN target below stop (misconfigured) and a price satisfying both
        WHEN the transition is evaluated
        THEN the trade closes in profit
        """
        assert next_status(
            TradeStatus.OPEN, Decimal("5"), Decimal("4"), Decimal("6")
        ) == TradeStatus.CLOSED_PROFIT

    def test_terminal_status_never_changes(self):
        assert next_status(
            TradeStatus.CLOSED_LOSS, Decimal("100"), Decimal("2"), Decimal("1")
        ) == TradeStatus.CLOSED_LOSS


class TestApplyQuote:
    """Tests for applying one quote to one trade."""

    def test_open_trade_gets_live_fields(self):
        trade = make_trade(entry_price="1.00", quantity="100")

        updated = apply_quote(trade, _info("1.20"))

        assert updated.live_price == Decimal("1.20")
        assert updated.pnl == Decimal("20")
        assert updated.pair_info.price_usd == Decimal("1.20")
        assert updated.status == TradeStatus.OPEN
        assert trade.live_price is None

    def test_unresolved_quote_returns_trade_unchanged(self):
        trade = make_trade()

        assert apply_quote(trade, None) is trade

    def test_closed_trade_is_not_repriced(self):
        trade = make_trade(status=TradeStatus.CLOSED_PROFIT)

        assert apply_quote(trade, _info("0.01")) is trade
