"""Application context: composition root for services and the sync scheduler.

The trade collection, the market data caches and the sync engine are
long-lived and shared by every request, so they live here rather than being
created per request.
"""

import logging
from typing import Optional

from sqlalchemy import Engine
from sqlalchemy.orm import Session

from tradejournal.config.settings import Settings, get_settings
from tradejournal.csv import CsvImportParser, TradeExporter, CsvTemplateGenerator
from tradejournal.providers import DexScreenerProvider, MarketDataProvider
from tradejournal.repositories.sqlalchemy import (
    SqlAlchemyTradeRepository,
    create_db_engine,
    init_db,
    open_session,
)
from tradejournal.services import (
    AnalysisService,
    MarketDataClient,
    PriceSyncEngine,
    TradeService,
)

logger = logging.getLogger(__name__)


class AppContext:
    """
    Application context providing access to all services.

    Services are created lazily. initialize() opens the database and loads
    the trade collection; start_sync() / close() own the scheduler lifecycle.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        provider: Optional[MarketDataProvider] = None,
        session: Optional[Session] = None,
    ):
        """
        Args:
            settings: Settings to use (defaults to the global settings).
            provider: Market data provider (defaults to DexScreener).
            session: Database session to use instead of the configured one.
        """
        self._settings = settings
        self._provider = provider
        self._session = session
        self._owns_session = session is None
        self._engine: Optional[Engine] = None
        self._initialized = False

        self._trade_service: Optional[TradeService] = None
        self._market_data: Optional[MarketDataClient] = None
        self._sync_engine: Optional[PriceSyncEngine] = None
        self._analysis_service: Optional[AnalysisService] = None
        self._csv_importer: Optional[CsvImportParser] = None
        self._exporter: Optional[TradeExporter] = None
        self._csv_template: Optional[CsvTemplateGenerator] = None

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    def initialize(self) -> None:
        """Open the database (creating tables) and load the trade collection."""
        self._get_session()
        trades = self.trades.load()
        self._initialized = True
        logger.info(f"Loaded {len(trades)} trades")

    @property
    def is_initialized(self) -> bool:
        """Check if context is initialized."""
        return self._initialized

    def _get_session(self) -> Session:
        if self._session is None:
            self._engine = create_db_engine(self.settings.get_database_url())
            init_db(self._engine)
            self._session = open_session(self._engine)
        return self._session

    def _get_provider(self) -> MarketDataProvider:
        if self._provider is None:
            self._provider = DexScreenerProvider(
                base_url=self.settings.dexscreener_base_url,
                timeout_seconds=self.settings.market_data_timeout_seconds,
            )
        return self._provider

    # Service accessors
    @property
    def trades(self) -> TradeService:
        """Get the TradeService instance (the live trade collection)."""
        if self._trade_service is None:
            self._trade_service = TradeService(
                trade_repo=SqlAlchemyTradeRepository(self._get_session()),
            )
        return self._trade_service

    @property
    def market_data(self) -> MarketDataClient:
        """Get the MarketDataClient instance."""
        if self._market_data is None:
            settings = self.settings
            self._market_data = MarketDataClient(
                provider=self._get_provider(),
                bulk_cache_ttl_seconds=settings.quote_cache_ttl_seconds,
                single_cache_ttl_seconds=settings.autofill_cache_ttl_seconds,
                chunk_size=settings.market_data_chunk_size,
            )
        return self._market_data

    @property
    def sync_engine(self) -> PriceSyncEngine:
        """Get the PriceSyncEngine instance."""
        if self._sync_engine is None:
            self._sync_engine = PriceSyncEngine(
                market_data=self.market_data,
                trades=self.trades,
                interval_seconds=self.settings.price_sync_interval_seconds,
            )
        return self._sync_engine

    @property
    def analysis(self) -> AnalysisService:
        """Get the AnalysisService instance."""
        if self._analysis_service is None:
            self._analysis_service = AnalysisService()
        return self._analysis_service

    # CSV utilities
    @property
    def csv_importer(self) -> CsvImportParser:
        """Get the CsvImportParser instance."""
        if self._csv_importer is None:
            self._csv_importer = CsvImportParser()
        return self._csv_importer

    @property
    def exporter(self) -> TradeExporter:
        """Get the TradeExporter instance."""
        if self._exporter is None:
            self._exporter = TradeExporter()
        return self._exporter

    @property
    def csv_template(self) -> CsvTemplateGenerator:
        """Get the CsvTemplateGenerator instance."""
        if self._csv_template is None:
            self._csv_template = CsvTemplateGenerator(exporter=self.exporter)
        return self._csv_template

    def start_sync(self) -> None:
        """Start the recurring price sync. Requires a running event loop."""
        self.sync_engine.start(run_immediately=True)

    async def close(self) -> None:
        """Stop the scheduler and release network and database resources."""
        if self._sync_engine is not None:
            await self._sync_engine.stop()
        if isinstance(self._provider, DexScreenerProvider):
            await self._provider.close()
        if self._session is not None and self._owns_session:
            self._session.close()
            self._session = None
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
        self._initialized = False


# Global application context
_app_context: Optional[AppContext] = None


def get_app_context() -> AppContext:
    """Get or create the global application context."""
    global _app_context
    if _app_context is None:
        _app_context = AppContext()
    return _app_context


def set_app_context(context: Optional[AppContext]) -> None:
    """Set (or clear) the global application context."""
    global _app_context
    _app_context = context
