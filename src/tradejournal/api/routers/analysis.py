"""Journal analysis endpoints."""

from fastapi import APIRouter, Depends

from tradejournal.api.deps import get_analysis_service, get_trade_service
from tradejournal.api.schemas import (
    DashboardResponse,
    EquityCurveResponse,
    EquityPointResponse,
)
from tradejournal.services import AnalysisService, TradeService

router = APIRouter(prefix="/analysis", tags=["analysis"])


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    trades: TradeService = Depends(get_trade_service),
    analysis: AnalysisService = Depends(get_analysis_service),
) -> DashboardResponse:
    """Get total PnL, win rate and trade counts."""
    stats = analysis.dashboard_stats(trades.list_trades())
    return DashboardResponse(
        total_pnl=stats.total_pnl,
        total_pnl_percent=stats.total_pnl_percent,
        win_rate=stats.win_rate,
        open_trades_count=stats.open_trades_count,
        closed_trades_count=stats.closed_trades_count,
        avg_entry_price=stats.avg_entry_price,
    )


@router.get("/equity-curve", response_model=EquityCurveResponse)
async def get_equity_curve(
    trades: TradeService = Depends(get_trade_service),
    analysis: AnalysisService = Depends(get_analysis_service),
) -> EquityCurveResponse:
    """Get cumulative realized PnL over time, plus unrealized at the end."""
    points = analysis.equity_curve(trades.list_trades())
    return EquityCurveResponse(
        points=[
            EquityPointResponse(label=p.label, equity=p.equity, date=p.date)
            for p in points
        ]
    )
