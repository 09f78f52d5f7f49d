from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
import logging
from typing import Generic, TypeVar

from stockwatch.application.watchlist.service import WatchlistApplicationService
from stockwatch.domain.market_data.errors import MarketDataError
from stockwatch.domain.market_data.interfaces import MarketDataClient
from stockwatch.domain.market_data.schemas import CompanyProfile, Quote
from stockwatch.domain.watchlist.errors import UserNotFoundError, WatchlistError
from stockwatch.domain.watchlist.schemas import EnrichedWatchlistRow, WatchlistEntry

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(slots=True)
class FetchResult(Generic[T]):
    value: T | None = None
    error: BaseException | None = None


class WatchlistEnrichmentService:
    """Joins a user's watchlist with live quote and profile data.

    Every symbol gets one quote fetch and one profile fetch, all issued
    concurrently. Each fetch settles into its own ``FetchResult``; a failed or
    timed out fetch only nulls the fields it feeds. Rows keep the order of the
    stored entries.

    Without a market data client (no API key) the entries are returned with
    every market field set to ``None`` and no request is made.
    """

    def __init__(
        self,
        *,
        watchlist_service: WatchlistApplicationService,
        market_data_client: MarketDataClient | None,
        fetch_timeout_seconds: float = 10.0,
        max_concurrency: int = 16,
    ) -> None:
        if fetch_timeout_seconds <= 0:
            raise ValueError("fetch_timeout_seconds must be positive")
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be >= 1")
        self._watchlist_service = watchlist_service
        self._market_data_client = market_data_client
        self._fetch_timeout_seconds = fetch_timeout_seconds
        self._max_concurrency = max_concurrency

    async def enrich(self, *, email: str) -> list[EnrichedWatchlistRow]:
        if not email or not email.strip():
            return []
        try:
            entries = await asyncio.to_thread(self._watchlist_service.load_entries, email=email)
        except UserNotFoundError:
            return []
        except WatchlistError:
            logger.exception("Failed to load watchlist for enrichment")
            return []
        return await self.enrich_entries(entries)

    async def enrich_entries(self, entries: list[WatchlistEntry]) -> list[EnrichedWatchlistRow]:
        if not entries:
            return []

        client = self._market_data_client
        if client is None:
            logger.error("Finnhub API key is not configured; serving watchlist without market data")
            return [_to_row(entry, quote=None, profile=None) for entry in entries]

        semaphore = asyncio.Semaphore(self._max_concurrency)
        quote_fetches = [
            self._settle(client.fetch_quote, symbol=entry.symbol, kind="quote", semaphore=semaphore)
            for entry in entries
        ]
        profile_fetches = [
            self._settle(client.fetch_profile, symbol=entry.symbol, kind="profile", semaphore=semaphore)
            for entry in entries
        ]
        results = await asyncio.gather(*quote_fetches, *profile_fetches)

        failed = [result.error for result in results if result.error is not None]
        if failed:
            logger.warning(
                "Watchlist enrichment degraded: %d of %d market data fetches failed",
                len(failed),
                len(results),
                extra={"error_types": sorted({type(error).__name__ for error in failed})},
            )

        count = len(entries)
        quotes: list[FetchResult[Quote]] = results[:count]
        profiles: list[FetchResult[CompanyProfile]] = results[count:]
        return [
            _to_row(entry, quote=quote.value, profile=profile.value)
            for entry, quote, profile in zip(entries, quotes, profiles)
        ]

    async def _settle(
        self,
        fetch: Callable[[str], Awaitable[T]],
        *,
        symbol: str,
        kind: str,
        semaphore: asyncio.Semaphore,
    ) -> FetchResult[T]:
        try:
            async with semaphore:
                value = await asyncio.wait_for(fetch(symbol), timeout=self._fetch_timeout_seconds)
        except asyncio.TimeoutError as exc:
            logger.warning("Market data %s fetch timed out for %s", kind, symbol)
            return FetchResult(error=exc)
        except MarketDataError as exc:
            logger.warning("Market data %s fetch failed for %s: %s", kind, symbol, exc)
            return FetchResult(error=exc)
        except Exception as exc:
            logger.exception("Unexpected market data %s failure", kind, extra={"symbol": symbol})
            return FetchResult(error=exc)
        return FetchResult(value=value)


def _to_row(
    entry: WatchlistEntry,
    *,
    quote: Quote | None,
    profile: CompanyProfile | None,
) -> EnrichedWatchlistRow:
    return EnrichedWatchlistRow(
        symbol=entry.symbol,
        company=entry.company,
        price=quote.current_price if quote is not None else None,
        change=quote.change if quote is not None else None,
        change_percent=quote.change_percent if quote is not None else None,
        market_cap=profile.market_capitalization if profile is not None else None,
        pe_ratio=None,
    )
