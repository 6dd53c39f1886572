"""Pydantic schemas for analysis endpoints."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class DashboardResponse(BaseModel):
    """Aggregate journal statistics."""

    total_pnl: Decimal
    total_pnl_percent: Decimal
    win_rate: Decimal
    open_trades_count: int
    closed_trades_count: int
    avg_entry_price: Decimal


class EquityPointResponse(BaseModel):
    """One point on the cumulative PnL curve."""

    label: str
    equity: Decimal
    date: Optional[str] = None


class EquityCurveResponse(BaseModel):
    points: list[EquityPointResponse]
