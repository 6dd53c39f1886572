"""Service layer - business logic orchestration."""

from tradejournal.services.market_data_service import MarketDataClient, TtlCache, select_best_pair
from tradejournal.services.price_sync_engine import PriceSyncEngine
from tradejournal.services.trade_service import TradeService
from tradejournal.services.analysis_service import AnalysisService

__all__ = [
    "MarketDataClient",
    "TtlCache",
    "select_best_pair",
    "PriceSyncEngine",
    "TradeService",
    "AnalysisService",
]
