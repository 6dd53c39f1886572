"""Pydantic schemas for trade endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from tradejournal.core.timezone import now_utc, to_utc
from tradejournal.domain.models import Trade, TradeCreate, TradeStatus
from tradejournal.api.schemas.market import PairInfoResponse


class TradeCreateRequest(BaseModel):
    """Request schema for creating or replacing a trade."""

    coin_slug_or_address: str = Field(
        ..., min_length=1, max_length=255, description="Token or pair address"
    )
    entry_price: Decimal = Field(..., description="Entry price (USD)")
    target_price: Decimal = Field(..., description="Take-profit price (USD)")
    stop_loss: Decimal = Field(..., description="Stop-loss price (USD)")
    quantity: Decimal = Field(..., description="Position size in tokens")
    date: Optional[datetime] = Field(
        default=None, description="Entry time; defaults to now (UTC)"
    )
    notes: str = Field(default="", description="Free-form notes")
    market_cap_at_entry: Optional[Decimal] = None
    target_market_cap: Optional[Decimal] = None

    @field_validator("coin_slug_or_address")
    @classmethod
    def strip_address(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("coin_slug_or_address must not be blank")
        return v

    def to_domain(self, status: TradeStatus = TradeStatus.OPEN) -> TradeCreate:
        return TradeCreate(
            coin_slug_or_address=self.coin_slug_or_address,
            entry_price=self.entry_price,
            target_price=self.target_price,
            stop_loss=self.stop_loss,
            quantity=self.quantity,
            date=to_utc(self.date) if self.date else now_utc(),
            notes=self.notes,
            status=status,
            market_cap_at_entry=self.market_cap_at_entry,
            target_market_cap=self.target_market_cap,
        )


class TradeUpdateRequest(TradeCreateRequest):
    """Request schema for replacing a trade; status may be set explicitly."""

    status: Optional[TradeStatus] = None


class TradeIdsRequest(BaseModel):
    """Request schema for bulk operations."""

    trade_ids: list[int] = Field(..., min_length=1)


class TradeResponse(BaseModel):
    """Response schema for a single trade, live fields included."""

    trade_id: int
    coin_slug_or_address: str
    entry_price: Decimal
    target_price: Decimal
    stop_loss: Decimal
    quantity: Decimal
    date: datetime
    notes: str
    status: TradeStatus
    market_cap_at_entry: Optional[Decimal] = None
    target_market_cap: Optional[Decimal] = None
    live_price: Optional[Decimal] = None
    pnl: Optional[Decimal] = None
    pnl_percent: Optional[Decimal] = None
    pair_info: Optional[PairInfoResponse] = None

    @classmethod
    def from_domain(cls, trade: Trade) -> "TradeResponse":
        return cls(
            trade_id=trade.trade_id,
            coin_slug_or_address=trade.coin_slug_or_address,
            entry_price=trade.entry_price,
            target_price=trade.target_price,
            stop_loss=trade.stop_loss,
            quantity=trade.quantity,
            date=trade.date,
            notes=trade.notes,
            status=trade.status,
            market_cap_at_entry=trade.market_cap_at_entry,
            target_market_cap=trade.target_market_cap,
            live_price=trade.live_price,
            pnl=trade.pnl,
            pnl_percent=trade.pnl_percent,
            pair_info=PairInfoResponse.from_domain(trade.pair_info) if trade.pair_info else None,
        )


class TradeListResponse(BaseModel):
    """Response schema for trade list."""

    trades: list[TradeResponse]
    total: int


class ImportSummaryResponse(BaseModel):
    """Response schema for CSV import results."""

    imported_count: int
    skipped_count: int
    trades: list[TradeResponse]
    warnings: list[str]
