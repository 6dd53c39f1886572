"""Pydantic schemas for API request/response."""

from tradejournal.api.schemas.market import PairInfoResponse, RefreshResponse
from tradejournal.api.schemas.trade import (
    TradeCreateRequest,
    TradeUpdateRequest,
    TradeIdsRequest,
    TradeResponse,
    TradeListResponse,
    ImportSummaryResponse,
)
from tradejournal.api.schemas.analysis import (
    DashboardResponse,
    EquityPointResponse,
    EquityCurveResponse,
)

__all__ = [
    "PairInfoResponse",
    "RefreshResponse",
    "TradeCreateRequest",
    "TradeUpdateRequest",
    "TradeIdsRequest",
    "TradeResponse",
    "TradeListResponse",
    "ImportSummaryResponse",
    "DashboardResponse",
    "EquityPointResponse",
    "EquityCurveResponse",
]
