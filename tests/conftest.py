"""
Pytest configuration and fixtures for trade journal tests.

This module provides:
- In-memory SQLite database fixtures
- Fake DexScreener-style providers (deterministic, failing, per-chunk failing)
- A controllable clock for cache TTL tests
- Factory helpers for raw API pairs and trades
- Service, repository and API client fixtures
"""

import os
import tempfile
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from tradejournal.main import app
from tradejournal.app_context import AppContext, set_app_context
from tradejournal.repositories.sqlalchemy.database import Base
# Import ORM models to register them with Base before creating tables
from tradejournal.repositories.sqlalchemy import orm_models  # noqa: F401
from tradejournal.repositories.sqlalchemy import SqlAlchemyTradeRepository
from tradejournal.core.exceptions import MarketDataError
from tradejournal.core.timezone import UTC
from tradejournal.services import (
    AnalysisService,
    MarketDataClient,
    PriceSyncEngine,
    TradeService,
)
from tradejournal.csv import CsvImportParser, TradeExporter, CsvTemplateGenerator
from tradejournal.domain.models import Trade, TradeCreate, TradeStatus
from tradejournal.config.settings import Settings, reset_settings


# =============================================================================
# TIME HELPERS
# =============================================================================


def utc_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a timezone-aware UTC datetime."""
    return UTC.localize(datetime(year, month, day, hour, minute, second))


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed 'now' timestamp for deterministic tests."""
    return utc_datetime(2024, 6, 15, 14, 30, 0)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# =============================================================================
# RAW API PAIR FACTORY
# =============================================================================


def make_pair(
    token_address: str,
    price_usd: Optional[str] = "1.0",
    liquidity_usd: Optional[float] = 10000,
    volume_24h: Optional[float] = 5000,
    pair_address: Optional[str] = None,
    symbol: str = "TKN",
    dex_id: str = "uniswap",
) -> dict[str, Any]:
    """Build a pair object shaped like a DexScreener API response item."""
    pair: dict[str, Any] = {
        "chainId": "ethereum",
        "dexId": dex_id,
        "url": f"https://dexscreener.com/ethereum/{pair_address or token_address + '-pair'}",
        "pairAddress": pair_address or f"{token_address}-pair",
        "baseToken": {"address": token_address, "name": f"{symbol} Token", "symbol": symbol},
        "quoteToken": {"address": "0xweth", "name": "Wrapped Ether", "symbol": "WETH"},
        "priceChange": {"h24": 2.5},
        "fdv": 1500000,
    }
    if price_usd is not None:
        pair["priceUsd"] = price_usd
    if liquidity_usd is not None:
        pair["liquidity"] = {"usd": liquidity_usd}
    if volume_24h is not None:
        pair["volume"] = {"h24": volume_24h}
    return pair


# =============================================================================
# MARKET DATA FIXTURES
# =============================================================================


class FakeDexProvider:
    """
    Deterministic market data provider for testing.

    Serves canned pairs keyed by token address (token endpoint) and by pair
    address (pair endpoint), and records every call.
    """

    def __init__(
        self,
        token_pairs: Optional[dict[str, list[dict[str, Any]]]] = None,
        pair_pairs: Optional[dict[str, list[dict[str, Any]]]] = None,
    ):
        self.token_pairs = token_pairs or {}
        self.pair_pairs = pair_pairs or {}
        self.token_calls: list[list[str]] = []
        self.pair_calls: list[str] = []

    def set_price(self, token_address: str, price_usd: str) -> None:
        """Replace the canned pairs for a token with a single pair at a price."""
        self.token_pairs[token_address] = [make_pair(token_address, price_usd=price_usd)]

    async def get_token_pairs(self, token_addresses: list[str]) -> list[dict[str, Any]]:
        self.token_calls.append(list(token_addresses))
        pairs: list[dict[str, Any]] = []
        for address in token_addresses:
            pairs.extend(self.token_pairs.get(address, []))
        return pairs

    async def get_pairs(self, pair_address: str) -> list[dict[str, Any]]:
        self.pair_calls.append(pair_address)
        return list(self.pair_pairs.get(pair_address, []))


class FailingDexProvider:
    """Market provider that always raises."""

    def __init__(self):
        self.calls = 0

    async def get_token_pairs(self, token_addresses: list[str]) -> list[dict[str, Any]]:
        self.calls += 1
        raise MarketDataError("DexScreener API error: 503", status=503)

    async def get_pairs(self, pair_address: str) -> list[dict[str, Any]]:
        self.calls += 1
        raise MarketDataError("DexScreener API error: 503", status=503)


class ChunkFailingProvider(FakeDexProvider):
    """Provider whose token endpoint fails for any chunk containing a poisoned address."""

    def __init__(self, poisoned: set[str], **kwargs):
        super().__init__(**kwargs)
        self.poisoned = poisoned

    async def get_token_pairs(self, token_addresses: list[str]) -> list[dict[str, Any]]:
        self.token_calls.append(list(token_addresses))
        if self.poisoned.intersection(token_addresses):
            raise MarketDataError("DexScreener request failed: timeout")
        pairs: list[dict[str, Any]] = []
        for address in token_addresses:
            pairs.extend(self.token_pairs.get(address, []))
        return pairs


@pytest.fixture
def fake_provider() -> FakeDexProvider:
    """Provide a fake provider with two priced tokens."""
    return FakeDexProvider(
        token_pairs={
            "0xaaa": [make_pair("0xaaa", price_usd="1.50", symbol="AAA")],
            "0xbbb": [make_pair("0xbbb", price_usd="0.02", symbol="BBB")],
        }
    )


@pytest.fixture
def failing_provider() -> FailingDexProvider:
    """Provide a market provider that always fails."""
    return FailingDexProvider()


@pytest.fixture
def market_data(fake_provider, clock) -> MarketDataClient:
    """Provide MarketDataClient over the fake provider and fake clock."""
    return MarketDataClient(provider=fake_provider, clock=clock)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    # Reset settings for clean state
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# REPOSITORY AND SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def trade_repo(test_session) -> SqlAlchemyTradeRepository:
    """Provide test TradeRepository."""
    return SqlAlchemyTradeRepository(test_session)


@pytest.fixture
def trade_service(trade_repo) -> TradeService:
    """Provide test TradeService (empty collection loaded)."""
    service = TradeService(trade_repo=trade_repo)
    service.load()
    return service


@pytest.fixture
def sync_engine(market_data, trade_service) -> PriceSyncEngine:
    """Provide PriceSyncEngine wired to the fake provider."""
    return PriceSyncEngine(market_data=market_data, trades=trade_service, interval_seconds=30)


@pytest.fixture
def analysis_service() -> AnalysisService:
    return AnalysisService()


@pytest.fixture
def csv_importer() -> CsvImportParser:
    return CsvImportParser()


@pytest.fixture
def exporter() -> TradeExporter:
    return TradeExporter()


@pytest.fixture
def csv_template_generator() -> CsvTemplateGenerator:
    return CsvTemplateGenerator()


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


def make_trade_create(
    address: str = "0xaaa",
    entry_price: str = "1.00",
    target_price: str = "2.00",
    stop_loss: str = "0.50",
    quantity: str = "100",
    date: Optional[datetime] = None,
    notes: str = "",
    status: TradeStatus = TradeStatus.OPEN,
) -> TradeCreate:
    """Helper to create trade data without an id."""
    return TradeCreate(
        coin_slug_or_address=address,
        entry_price=Decimal(entry_price),
        target_price=Decimal(target_price),
        stop_loss=Decimal(stop_loss),
        quantity=Decimal(quantity),
        date=date or utc_datetime(2024, 6, 1),
        notes=notes,
        status=status,
    )


def make_trade(trade_id: int = 1, **kwargs) -> Trade:
    """Helper to create an in-memory trade with an id."""
    return Trade.from_create(trade_id, make_trade_create(**kwargs))


@pytest.fixture
def trade_factory(trade_service) -> Callable[..., Trade]:
    """Factory for persisting trades through the service, keeping the given status."""

    def _create_trade(**kwargs) -> Trade:
        return trade_service.bulk_add([make_trade_create(**kwargs)])[0]

    return _create_trade


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def app_context(test_session, fake_provider) -> AppContext:
    """Application context on the test database with the scheduler disabled."""
    settings = Settings(price_sync_enabled=False)
    return AppContext(settings=settings, provider=fake_provider, session=test_session)


@pytest.fixture
def client(app_context) -> TestClient:
    """Provide FastAPI test client with test database and fake provider."""
    set_app_context(app_context)
    with TestClient(app) as c:
        yield c
    set_app_context(None)


# =============================================================================
# TEMP FILE FIXTURES
# =============================================================================


@pytest.fixture
def temp_csv_file():
    """Provide a temporary CSV file path that is cleaned up after test."""
    with tempfile.NamedTemporaryFile(
        mode="w",
        suffix=".csv",
        delete=False,
        encoding="utf-8",
    ) as f:
        tmp_path = f.name

    yield tmp_path

    # Cleanup
    if os.path.exists(tmp_path):
        os.unlink(tmp_path)


@pytest.fixture
def sample_csv_content() -> str:
    """Sample valid CSV content for import testing."""
    return (
        "date,coinSlugOrAddress,entryPrice,quantity,targetPrice,stopLoss,status,notes\n"
        "2024-01-15T10:30:00Z,0xaaa,1.00,100,2.00,0.50,open,First entry\n"
        '2024-02-01T11:00:00Z,0xbbb,0.01,5000,0.03,0.005,closed-profit,"Took profit, early"\n'
    )


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.01"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(actual - expected)
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"
