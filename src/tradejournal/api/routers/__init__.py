"""API routers package."""

from tradejournal.api.routers.trades import router as trades_router
from tradejournal.api.routers.market import router as market_router
from tradejournal.api.routers.analysis import router as analysis_router

__all__ = [
    "trades_router",
    "market_router",
    "analysis_router",
]
