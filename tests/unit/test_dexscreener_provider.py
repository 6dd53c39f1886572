"""
Unit tests for the DexScreener HTTP adapter.

The aiohttp session is replaced with a mock; no network access.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from tradejournal.core.exceptions import MarketDataError
from tradejournal.providers import DexScreenerProvider

from tests.conftest import make_pair


def _mock_session(status: int = 200, payload=None, text: str = "") -> MagicMock:
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=payload)
    response.text = AsyncMock(return_value=text)
    session = MagicMock()
    session.get = AsyncMock(return_value=response)
    return session


@pytest.fixture
def provider() -> DexScreenerProvider:
    return DexScreenerProvider(base_url="https://api.example.test/latest/dex/")


class TestGetTokenPairs:
    """Tests for the token endpoint."""

    @pytest.mark.asyncio
    async def test_joins_addresses_with_commas(self, provider):
        session = _mock_session(payload={"pairs": [make_pair("0xaaa")]})
        provider._session = session

        pairs = await provider.get_token_pairs(["0xaaa", "0xbbb"])

        session.get.assert_awaited_once_with(
            "https://api.example.test/latest/dex/tokens/0xaaa,0xbbb"
        )
        assert len(pairs) == 1
        assert pairs[0]["baseToken"]["address"] == "0xaaa"

    @pytest.mark.asyncio
    async def test_null_pairs_returns_empty_list(self, provider):
        provider._session = _mock_session(payload={"schemaVersion": "1.0.0", "pairs": None})

        assert await provider.get_token_pairs(["0xaaa"]) == []

    @pytest.mark.asyncio
    async def test_non_200_raises_market_data_error(self, provider):
        """
        GIVEN the API answers 429
        WHEN get_token_pairs is called
        THEN MarketDataError carries the status
        """
        provider._session = _mock_session(status=429, text="rate limited")

        with pytest.raises(MarketDataError) as exc_info:
            await provider.get_token_pairs(["0xaaa"])

        assert exc_info.value.status == 429

    @pytest.mark.asyncio
    async def test_client_error_raises_market_data_error(self, provider):
        session = MagicMock()
        session.get = AsyncMock(side_effect=aiohttp.ClientConnectionError("refused"))
        provider._session = session

        with pytest.raises(MarketDataError):
            await provider.get_token_pairs(["0xaaa"])

    @pytest.mark.asyncio
    async def test_timeout_raises_market_data_error(self, provider):
        session = MagicMock()
        session.get = AsyncMock(side_effect=asyncio.TimeoutError())
        provider._session = session

        with pytest.raises(MarketDataError):
            await provider.get_token_pairs(["0xaaa"])


class TestGetPairs:
    """Tests for the pair endpoint."""

    @pytest.mark.asyncio
    async def test_single_pair_object_is_wrapped(self, provider):
        session = _mock_session(payload={"pair": make_pair("0xccc", pair_address="0xpool")})
        provider._session = session

        pairs = await provider.get_pairs("0xpool")

        session.get.assert_awaited_once_with("https://api.example.test/latest/dex/pairs/0xpool")
        assert [p["pairAddress"] for p in pairs] == ["0xpool"]

    @pytest.mark.asyncio
    async def test_unexpected_body_returns_empty_list(self, provider):
        provider._session = _mock_session(payload=["not", "a", "dict"])

        assert await provider.get_pairs("0xpool") == []


class TestSessionLifecycle:
    """Tests for session ownership."""

    @pytest.mark.asyncio
    async def test_close_releases_session(self, provider):
        session = MagicMock()
        session.close = AsyncMock()
        provider._session = session

        await provider.close()

        session.close.assert_awaited_once()
        assert provider._session is None
