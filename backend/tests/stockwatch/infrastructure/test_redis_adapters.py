from __future__ import annotations

import asyncio
import json

from stockwatch.infrastructure.cache.redis_profile_cache import RedisProfileCache
from stockwatch.infrastructure.events.redis_watchlist_events import RedisWatchlistChangePublisher


class FakeAsyncRedis:
    def __init__(self) -> None:
        self.values: dict[str, bytes] = {}
        self.expirations: dict[str, int] = {}

    async def get(self, key: str):
        return self.values.get(key)

    async def set(self, key: str, value: str, ex: int | None = None) -> None:
        self.values[key] = value.encode("utf-8")
        self.expirations[key] = ex

    async def aclose(self) -> None:
        return None


class FakeSyncRedis:
    def __init__(self) -> None:
        self.published: list[tuple[str, str]] = []
        self.closed = False

    def publish(self, channel: str, message: str) -> int:
        self.published.append((channel, message))
        return 1

    def close(self) -> None:
        self.closed = True


def test_profile_cache_round_trips_json_with_ttl() -> None:
    cache = RedisProfileCache(redis_url="redis://unused")
    fake = FakeAsyncRedis()
    cache._client = fake

    async def scenario():
        await cache.set("market:profile:AAPL", {"symbol": "AAPL", "market_capitalization": 3012.5}, ttl_seconds=3600)
        return await cache.get("market:profile:AAPL"), await cache.get("market:profile:MSFT")

    hit, miss = asyncio.run(scenario())

    assert hit == {"symbol": "AAPL", "market_capitalization": 3012.5}
    assert miss is None
    assert fake.expirations["market:profile:AAPL"] == 3600


def test_profile_cache_ignores_corrupt_values() -> None:
    cache = RedisProfileCache(redis_url="redis://unused")
    fake = FakeAsyncRedis()
    fake.values["market:profile:AAPL"] = b"not-json"
    fake.values["market:profile:MSFT"] = b"[1, 2]"
    cache._client = fake

    async def scenario():
        return await cache.get("market:profile:AAPL"), await cache.get("market:profile:MSFT")

    assert asyncio.run(scenario()) == (None, None)


def test_change_publisher_emits_watchlist_changed_event() -> None:
    publisher = RedisWatchlistChangePublisher(redis_url="redis://unused", channel="watchlist:events")
    fake = FakeSyncRedis()
    publisher._client = fake

    publisher.notify(user_id=7, symbol="AAPL", action="added")
    publisher.close()

    [(channel, message)] = fake.published
    payload = json.loads(message)
    assert channel == "watchlist:events"
    assert payload["type"] == "watchlist.changed"
    assert payload["data"] == {"user_id": 7, "symbol": "AAPL", "action": "added"}
    assert fake.closed is True


def test_change_publisher_client_uses_short_socket_timeouts() -> None:
    publisher = RedisWatchlistChangePublisher(
        redis_url="redis://localhost:6379/0",
        channel="watchlist:events",
        socket_timeout_seconds=0.5,
    )

    client = publisher._get_client()
    try:
        connection_kwargs = client.connection_pool.connection_kwargs
        assert connection_kwargs["socket_timeout"] == 0.5
        assert connection_kwargs["socket_connect_timeout"] == 0.5
    finally:
        publisher.close()
