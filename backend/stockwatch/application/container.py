from __future__ import annotations

from functools import lru_cache

from stockwatch.application.watchlist.enrichment import WatchlistEnrichmentService
from stockwatch.application.watchlist.service import WatchlistApplicationService
from stockwatch.core.config import settings
from stockwatch.infrastructure.cache.redis_profile_cache import RedisProfileCache
from stockwatch.infrastructure.clients.finnhub import FinnhubClient
from stockwatch.infrastructure.db.session import SessionLocal
from stockwatch.infrastructure.db.uow import SqlAlchemyUnitOfWork
from stockwatch.infrastructure.events.redis_watchlist_events import RedisWatchlistChangePublisher


@lru_cache
def _redis_profile_cache() -> RedisProfileCache | None:
    if not settings.profile_cache_enabled:
        return None
    return RedisProfileCache(redis_url=settings.redis_url)


@lru_cache
def _finnhub_client() -> FinnhubClient | None:
    if not settings.finnhub_api_key:
        return None
    return FinnhubClient(
        settings.finnhub_api_key,
        base_url=settings.finnhub_base_url,
        timeout_seconds=settings.market_data_fetch_timeout_seconds,
        profile_cache=_redis_profile_cache(),
        profile_cache_ttl_seconds=settings.profile_cache_ttl_seconds,
        profile_cache_key_prefix=settings.profile_cache_key_prefix,
    )


@lru_cache
def _watchlist_change_publisher() -> RedisWatchlistChangePublisher | None:
    if not settings.watchlist_change_events_enabled:
        return None
    return RedisWatchlistChangePublisher(
        redis_url=settings.redis_url,
        channel=settings.watchlist_events_channel,
        socket_timeout_seconds=settings.watchlist_events_socket_timeout_seconds,
    )


def build_uow() -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(session_factory=SessionLocal)


def build_watchlist_service() -> WatchlistApplicationService:
    return WatchlistApplicationService(
        uow=build_uow(),
        change_notifier=_watchlist_change_publisher(),
    )


def build_enrichment_service() -> WatchlistEnrichmentService:
    return WatchlistEnrichmentService(
        watchlist_service=build_watchlist_service(),
        market_data_client=_finnhub_client(),
        fetch_timeout_seconds=settings.market_data_fetch_timeout_seconds,
        max_concurrency=settings.market_data_max_concurrency,
    )


async def shutdown_market_data_client() -> None:
    if _finnhub_client.cache_info().currsize > 0:
        client = _finnhub_client()
        if client is not None:
            await client.aclose()
        _finnhub_client.cache_clear()
    if _redis_profile_cache.cache_info().currsize > 0:
        cache = _redis_profile_cache()
        if cache is not None:
            await cache.close()
        _redis_profile_cache.cache_clear()


def shutdown_watchlist_change_publisher() -> None:
    if _watchlist_change_publisher.cache_info().currsize == 0:
        return
    publisher = _watchlist_change_publisher()
    if publisher is not None:
        publisher.close()
    _watchlist_change_publisher.cache_clear()
