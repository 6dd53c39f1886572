"""DexScreener HTTP API adapter."""

import asyncio
import json
import logging
from typing import Any, Optional

import aiohttp

from tradejournal.core.exceptions import MarketDataError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.dexscreener.com/latest/dex"


class DexScreenerProvider:
    """
    Async client for the DexScreener public API.

    The session is created lazily on first request, or explicitly via
    ``async with``. Every failure surfaces as MarketDataError.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> "DexScreenerProvider":
        self._get_session()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session

    async def close(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def _request(self, endpoint: str) -> Any:
        """GET an endpoint and decode the JSON body."""
        url = f"{self.base_url}{endpoint}"
        session = self._get_session()
        try:
            response = await session.get(url)
            if response.status != 200:
                error_text = await response.text()
                raise MarketDataError(
                    f"DexScreener API error: {response.status} {error_text[:200]}",
                    status=response.status,
                )
            return await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise MarketDataError(f"DexScreener request failed: {e!r}") from e
        except json.JSONDecodeError as e:
            raise MarketDataError(f"DexScreener returned invalid JSON: {e}") from e

    async def get_token_pairs(self, token_addresses: list[str]) -> list[dict[str, Any]]:
        """Fetch pairs for up to 30 comma-joined token addresses."""
        data = await self._request(f"/tokens/{','.join(token_addresses)}")
        return _extract_pairs(data)

    async def get_pairs(self, pair_address: str) -> list[dict[str, Any]]:
        """Fetch pairs by pair address."""
        data = await self._request(f"/pairs/{pair_address}")
        return _extract_pairs(data)


def _extract_pairs(data: Any) -> list[dict[str, Any]]:
    """Pull the pair list out of a response body ("pairs" list or single "pair")."""
    if not isinstance(data, dict):
        return []
    pairs = data.get("pairs")
    if isinstance(pairs, list):
        return [p for p in pairs if isinstance(p, dict)]
    pair = data.get("pair")
    if isinstance(pair, dict):
        return [pair]
    return []
