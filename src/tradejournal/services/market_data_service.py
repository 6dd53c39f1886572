"""Market data client: normalization, batching, caching and best-pair ranking."""

import asyncio
import logging
import time
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Generic, Hashable, Iterable, Optional, TypeVar

from tradejournal.domain.models import PairInfo
from tradejournal.providers.market_data_provider import MarketDataProvider

logger = logging.getLogger(__name__)

# Maximum number of addresses the token endpoint accepts per request
MAX_CHUNK_SIZE = 30

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class TtlCache(Generic[K, V]):
    """
    Time-boxed memo of fetched values.

    Entries are overwritten on re-fetch and considered stale once their age
    reaches the TTL. There is no size bound.
    """

    def __init__(
        self,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[K, tuple[V, float]] = {}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, key: K) -> Optional[V]:
        """Return the cached value if still fresh, else None."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, fetched_at = entry
        if self._clock() - fetched_at < self._ttl:
            return value
        return None

    def set(self, key: K, value: V) -> None:
        self._entries[key] = (value, self._clock())

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


def _to_decimal(value: Any) -> Optional[Decimal]:
    """Convert an API number or numeric string to Decimal; None if absent/invalid."""
    if value is None or value == "":
        return None
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return result if result.is_finite() else None


def _liquidity_usd(pair: dict[str, Any]) -> Decimal:
    liquidity = pair.get("liquidity") or {}
    return _to_decimal(liquidity.get("usd")) or Decimal("0")


def _volume_24h(pair: dict[str, Any]) -> Decimal:
    volume = pair.get("volume") or {}
    return _to_decimal(volume.get("h24")) or Decimal("0")


def pair_info_from_api(pair: dict[str, Any]) -> Optional[PairInfo]:
    """Build a PairInfo from a raw API pair object; None without a usable priceUsd."""
    price_usd = _to_decimal(pair.get("priceUsd"))
    if price_usd is None:
        return None

    base_token = pair.get("baseToken") or {}
    quote_token = pair.get("quoteToken") or {}
    liquidity = pair.get("liquidity") or {}
    price_change = pair.get("priceChange") or {}

    return PairInfo(
        price_usd=price_usd,
        volume_24h=_volume_24h(pair),
        price_change_24h=_to_decimal(price_change.get("h24")) or Decimal("0"),
        url=pair.get("url", ""),
        dex_id=pair.get("dexId", ""),
        chain_id=pair.get("chainId", ""),
        base_token_symbol=base_token.get("symbol", ""),
        base_token_name=base_token.get("name", ""),
        base_token_address=base_token.get("address", ""),
        quote_token_symbol=quote_token.get("symbol", ""),
        pair_address=pair.get("pairAddress", ""),
        liquidity_usd=_to_decimal(liquidity.get("usd")),
        fdv=_to_decimal(pair.get("fdv")),
    )


def select_best_pair(pairs: Iterable[dict[str, Any]]) -> Optional[PairInfo]:
    """
    Pick the pair that best represents a token among several venues.

    Pairs with positive USD liquidity always outrank pairs with zero or
    unknown liquidity; within the same liquidity class the higher 24h volume
    wins. Ties keep API order. If the winner has no priceUsd the token is
    treated as unresolved.
    """
    ranked = sorted(
        pairs,
        key=lambda p: (0 if _liquidity_usd(p) > 0 else 1, -_volume_24h(p)),
    )
    if not ranked:
        return None
    return pair_info_from_api(ranked[0])


def _base_token_address(pair: dict[str, Any]) -> str:
    base_token = pair.get("baseToken") or {}
    return str(base_token.get("address") or "").lower()


def _chunked(items: list[str], size: int) -> list[list[str]]:
    return [items[i:i + size] for i in range(0, len(items), size)]


class MarketDataClient:
    """
    Client for live pair data, wrapping a provider with caching and batching.

    Owns two independent caches: a short one for bulk portfolio refresh and a
    longer one for interactive single lookups. Network failures never
    propagate; they degrade the affected addresses to None.
    """

    def __init__(
        self,
        provider: MarketDataProvider,
        bulk_cache_ttl_seconds: float = 15.0,
        single_cache_ttl_seconds: float = 30.0,
        chunk_size: int = MAX_CHUNK_SIZE,
        clock: Callable[[], float] = time.monotonic,
    ):
        if not 1 <= chunk_size <= MAX_CHUNK_SIZE:
            raise ValueError(f"chunk_size must be between 1 and {MAX_CHUNK_SIZE}")
        self._provider = provider
        self._chunk_size = chunk_size
        self._bulk_cache: TtlCache[str, PairInfo] = TtlCache(bulk_cache_ttl_seconds, clock)
        self._single_cache: TtlCache[str, PairInfo] = TtlCache(single_cache_ttl_seconds, clock)

    @property
    def bulk_cache(self) -> TtlCache[str, PairInfo]:
        return self._bulk_cache

    @property
    def single_cache(self) -> TtlCache[str, PairInfo]:
        return self._single_cache

    def clear_cache(self) -> None:
        """Drop every cached entry from both caches."""
        self._bulk_cache.clear()
        self._single_cache.clear()

    async def fetch_pairs_data(
        self,
        addresses: Iterable[str],
    ) -> dict[str, Optional[PairInfo]]:
        """
        Resolve each token address to its best pair.

        Returns a mapping keyed by the trimmed address. Addresses are
        deduplicated, served from cache when fresh, and the rest fetched in
        chunks of at most 30 issued concurrently. A failed chunk maps all of
        its addresses to None without affecting other chunks.
        """
        unique = list(dict.fromkeys(a.strip() for a in addresses if a and a.strip()))
        result: dict[str, Optional[PairInfo]] = {}
        to_fetch: list[str] = []

        for address in unique:
            cached = self._bulk_cache.get(address)
            if cached is not None:
                result[address] = cached
            else:
                to_fetch.append(address)

        if not to_fetch:
            return result

        chunks = _chunked(to_fetch, self._chunk_size)
        logger.debug(
            f"Fetching {len(to_fetch)} addresses in {len(chunks)} chunk(s), "
            f"{len(result)} served from cache"
        )
        chunk_results = await asyncio.gather(*(self._fetch_chunk(c) for c in chunks))
        for chunk_result in chunk_results:
            result.update(chunk_result)

        return result

    async def _fetch_chunk(self, chunk: list[str]) -> dict[str, Optional[PairInfo]]:
        """Fetch one chunk; any failure resolves every address in it to None."""
        try:
            pairs = await self._provider.get_token_pairs(chunk)
        except Exception as e:
            logger.warning(f"Market data chunk of {len(chunk)} addresses failed: {e}")
            return {address: None for address in chunk}

        # Group candidate pairs by the queried address they belong to
        by_lower = {address.lower(): address for address in chunk}
        candidates: dict[str, list[dict[str, Any]]] = {}
        for pair in pairs:
            original = by_lower.get(_base_token_address(pair))
            if original is not None:
                candidates.setdefault(original, []).append(pair)

        resolved: dict[str, Optional[PairInfo]] = {}
        for address in chunk:
            best = select_best_pair(candidates.get(address, []))
            resolved[address] = best
            if best is not None:
                self._bulk_cache.set(address, best)
        return resolved

    async def fetch_single(self, query: str) -> Optional[PairInfo]:
        """
        Resolve a free-form token or pair address for autofill/preview.

        Tries the token endpoint first and falls back to the pair endpoint.
        The literal query is the cache key.
        """
        cleaned = query.strip()
        if not cleaned:
            return None

        cached = self._single_cache.get(cleaned)
        if cached is not None:
            return cached

        for strategy in (self._by_token_address, self._by_pair_address):
            try:
                best = await strategy(cleaned)
            except Exception as e:
                logger.warning(f"Lookup for {cleaned!r} via {strategy.__name__} failed: {e}")
                continue
            if best is not None:
                self._single_cache.set(cleaned, best)
                return best

        return None

    async def _by_token_address(self, query: str) -> Optional[PairInfo]:
        return select_best_pair(await self._provider.get_token_pairs([query]))

    async def _by_pair_address(self, query: str) -> Optional[PairInfo]:
        return select_best_pair(await self._provider.get_pairs(query))
