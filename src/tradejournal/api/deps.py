"""Dependency injection for FastAPI.

Providers are async so they, and the routes using them, run on the event loop
thread alongside the price sync scheduler rather than in the worker threadpool.
"""

from fastapi import Depends

from tradejournal.app_context import AppContext, get_app_context
from tradejournal.csv import CsvImportParser, CsvTemplateGenerator, TradeExporter
from tradejournal.services import (
    AnalysisService,
    MarketDataClient,
    PriceSyncEngine,
    TradeService,
)


async def get_context() -> AppContext:
    """Provide the shared application context."""
    return get_app_context()


async def get_trade_service(ctx: AppContext = Depends(get_context)) -> TradeService:
    """Provide the live trade collection."""
    return ctx.trades


async def get_market_data_client(ctx: AppContext = Depends(get_context)) -> MarketDataClient:
    """Provide MarketDataClient instance (shared caches)."""
    return ctx.market_data


async def get_sync_engine(ctx: AppContext = Depends(get_context)) -> PriceSyncEngine:
    """Provide PriceSyncEngine instance."""
    return ctx.sync_engine


async def get_analysis_service(ctx: AppContext = Depends(get_context)) -> AnalysisService:
    """Provide AnalysisService instance."""
    return ctx.analysis


async def get_csv_importer(ctx: AppContext = Depends(get_context)) -> CsvImportParser:
    """Provide CsvImportParser instance."""
    return ctx.csv_importer


async def get_exporter(ctx: AppContext = Depends(get_context)) -> TradeExporter:
    """Provide TradeExporter instance."""
    return ctx.exporter


async def get_csv_template_generator(ctx: AppContext = Depends(get_context)) -> CsvTemplateGenerator:
    """Provide CsvTemplateGenerator instance."""
    return ctx.csv_template
