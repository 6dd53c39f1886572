"""Analysis service for dashboard statistics and the equity curve."""

from decimal import Decimal

from tradejournal.core.timezone import now_utc
from tradejournal.domain.models import Trade, TradeStatus
from tradejournal.domain.views import DashboardStats, EquityPoint


class AnalysisService:
    """
    Read-only aggregates over a trade collection.

    Works on whatever transient PnL the trades currently carry; trades never
    resolved contribute zero PnL but still count toward cost basis.
    """

    def dashboard_stats(self, trades: list[Trade]) -> DashboardStats:
        """Compute total PnL, win rate, counts and average entry price."""
        closed = [t for t in trades if not t.is_open]
        open_count = len(trades) - len(closed)

        total_pnl = sum((t.pnl or Decimal("0") for t in trades), Decimal("0"))
        total_investment = sum((t.cost_basis for t in trades), Decimal("0"))
        total_quantity = sum((t.quantity for t in trades), Decimal("0"))

        total_pnl_percent = (
            total_pnl / total_investment * 100 if total_investment > 0 else Decimal("0")
        )
        avg_entry_price = (
            total_investment / total_quantity if total_quantity > 0 else Decimal("0")
        )

        wins = sum(1 for t in closed if t.status == TradeStatus.CLOSED_PROFIT)
        losses = sum(1 for t in closed if t.status == TradeStatus.CLOSED_LOSS)
        win_rate = (
            Decimal(wins) / Decimal(wins + losses) * 100 if wins + losses > 0 else Decimal("0")
        )

        return DashboardStats(
            total_pnl=total_pnl,
            total_pnl_percent=total_pnl_percent,
            win_rate=win_rate,
            open_trades_count=open_count,
            closed_trades_count=len(closed),
            avg_entry_price=avg_entry_price,
        )

    def equity_curve(self, trades: list[Trade]) -> list[EquityPoint]:
        """
        Cumulative realised PnL of closed trades by entry date.

        Ends with a "current" point adding unrealised PnL of open trades when
        any open trade has a PnL.
        """
        closed = sorted(
            (t for t in trades if not t.is_open and t.pnl is not None),
            key=lambda t: t.date,
        )

        points = [EquityPoint(label="Start", equity=Decimal("0"))]
        cumulative = Decimal("0")
        for index, trade in enumerate(closed, start=1):
            cumulative += trade.pnl
            points.append(
                EquityPoint(
                    label=f"Trade {index}",
                    equity=cumulative,
                    date=trade.date.date().isoformat(),
                )
            )

        open_with_pnl = [t for t in trades if t.is_open and t.pnl is not None]
        if open_with_pnl:
            unrealized = sum((t.pnl for t in open_with_pnl), Decimal("0"))
            points.append(
                EquityPoint(
                    label="Current",
                    equity=cumulative + unrealized,
                    date=now_utc().date().isoformat(),
                )
            )

        return points
