"""Market-data snapshot for one queried address."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class PairInfo:
    """
    Snapshot of the best-ranked trading pair for a token or pair address.

    Produced only by the market data client; read-only everywhere else.
    """

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
