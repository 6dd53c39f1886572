"""Pydantic schemas for market data endpoints."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from tradejournal.domain.models import PairInfo


class PairInfoResponse(BaseModel):
    """Best-ranked pair snapshot."""

    price_usd: Decimal
    volume_24h: Decimal
    price_change_24h: Decimal
    url: str
    dex_id: str
    chain_id: str
    base_token_symbol: str
    base_token_name: str
    base_token_address: str
    quote_token_symbol: str
    pair_address: str
    liquidity_usd: Optional[Decimal] = None
    fdv: Optional[Decimal] = None

    @classmethod
    def from_domain(cls, info: PairInfo) -> "PairInfoResponse":
        return cls(
            price_usd=info.price_usd,
            volume_24h=info.volume_24h,
            price_change_24h=info.price_change_24h,
            url=info.url,
            dex_id=info.dex_id,
            chain_id=info.chain_id,
            base_token_symbol=info.base_token_symbol,
            base_token_name=info.base_token_name,
            base_token_address=info.base_token_address,
            quote_token_symbol=info.quote_token_symbol,
            pair_address=info.pair_address,
            liquidity_usd=info.liquidity_usd,
            fdv=info.fdv,
        )


class RefreshResponse(BaseModel):
    """Result of a manual price refresh."""

    updated_count: int
    open_count: int
