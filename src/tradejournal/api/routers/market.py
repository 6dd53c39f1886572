"""Market data endpoints."""

from fastapi import APIRouter, Depends, Query

from tradejournal.api.deps import get_market_data_client, get_sync_engine, get_trade_service
from tradejournal.api.schemas import PairInfoResponse, RefreshResponse
from tradejournal.core.exceptions import NotFoundError
from tradejournal.domain.models import TradeStatus
from tradejournal.services import MarketDataClient, PriceSyncEngine, TradeService

router = APIRouter(prefix="/market", tags=["market"])


@router.get("/autofill", response_model=PairInfoResponse)
async def autofill(
    query: str = Query(..., min_length=1, description="Token or pair address"),
    market_data: MarketDataClient = Depends(get_market_data_client),
) -> PairInfoResponse:
    """Resolve a token or pair address to its best-ranked pair."""
    info = await market_data.fetch_single(query)
    if info is None:
        raise NotFoundError("Pair", query.strip())
    return PairInfoResponse.from_domain(info)


@router.post("/refresh", response_model=RefreshResponse)
async def refresh_prices(
    engine: PriceSyncEngine = Depends(get_sync_engine),
    trades: TradeService = Depends(get_trade_service),
) -> RefreshResponse:
    """Run a price sync pass now, the same routine the scheduler runs."""
    updated = await engine.refresh_now()
    return RefreshResponse(
        updated_count=len(updated),
        open_count=len(trades.list_trades(status=TradeStatus.OPEN)),
    )
