"""Market data provider protocol."""

from typing import Any, Protocol


class MarketDataProvider(Protocol):
    """
    Protocol for market data providers.

    Implementations return raw pair objects as published by the API and
    raise MarketDataError on any network or non-success response.
    """

    async def get_token_pairs(self, token_addresses: list[str]) -> list[dict[str, Any]]:
        """
        Fetch every pair whose base token is one of token_addresses.

        Callers must not pass more addresses than the API accepts per request.
        """
        ...

    async def get_pairs(self, pair_address: str) -> list[dict[str, Any]]:
        """Fetch pairs by pair contract address."""
        ...
