from __future__ import annotations

import asyncio
from typing import Any

import httpx
import pytest

from stockwatch.domain.market_data.errors import (
    MarketDataConfigurationError,
    MarketDataProviderError,
    MarketDataRateLimitedError,
)
from stockwatch.infrastructure.clients.finnhub import FinnhubClient


class InMemoryProfileCache:
    def __init__(self, *, fail: bool = False) -> None:
        self.values: dict[str, dict[str, Any]] = {}
        self.ttls: dict[str, int] = {}
        self.fail = fail

    async def get(self, key: str) -> dict[str, Any] | None:
        if self.fail:
            raise ConnectionError("redis unavailable")
        return self.values.get(key)

    async def set(self, key: str, value: dict[str, Any], *, ttl_seconds: int) -> None:
        if self.fail:
            raise ConnectionError("redis unavailable")
        self.values[key] = value
        self.ttls[key] = ttl_seconds


def _client(handler, *, cache: InMemoryProfileCache | None = None) -> tuple[FinnhubClient, list[httpx.Request]]:
    requests: list[httpx.Request] = []

    def recording_handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(recording_handler))
    client = FinnhubClient(
        "test-token",
        base_url="https://finnhub.test/api/v1/",
        profile_cache=cache,
        profile_cache_ttl_seconds=3600,
        http_client=http_client,
    )
    return client, requests


def _finnhub_handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/api/v1/quote":
        return httpx.Response(
            200,
            json={"c": 203.12, "d": -0.85, "dp": -0.4167, "h": 205.3, "l": 201.98, "o": 204.01, "pc": 203.97, "t": 1760000000},
        )
    if request.url.path == "/api/v1/stock/profile2":
        return httpx.Response(
            200,
            json={
                "name": "Apple Inc",
                "ticker": "AAPL",
                "marketCapitalization": 3012.5,
                "currency": "USD",
                "exchange": "NASDAQ NMS - GLOBAL MARKET",
                "finnhubIndustry": "Technology",
                "logo": "https://static.finnhub.io/logo/aapl.png",
                "weburl": "https://www.apple.com/",
            },
        )
    return httpx.Response(404)


def test_fetch_quote_sends_symbol_and_token_and_maps_fields() -> None:
    client, requests = _client(_finnhub_handler)

    quote = asyncio.run(client.fetch_quote(" aapl "))

    assert requests[0].url.params["symbol"] == "AAPL"
    assert requests[0].url.params["token"] == "test-token"
    assert quote.symbol == "AAPL"
    assert quote.current_price == 203.12
    assert quote.change == -0.85
    assert quote.change_percent == -0.4167
    assert quote.previous_close == 203.97
    assert quote.timestamp == 1760000000


def test_fetch_quote_is_never_cached() -> None:
    cache = InMemoryProfileCache()
    client, requests = _client(_finnhub_handler, cache=cache)

    async def scenario() -> None:
        await client.fetch_quote("AAPL")
        await client.fetch_quote("AAPL")

    asyncio.run(scenario())

    assert len(requests) == 2
    assert cache.values == {}


def test_fetch_profile_is_served_from_cache_within_ttl() -> None:
    cache = InMemoryProfileCache()
    client, requests = _client(_finnhub_handler, cache=cache)

    async def scenario():
        first = await client.fetch_profile("AAPL")
        second = await client.fetch_profile("aapl")
        return first, second

    first, second = asyncio.run(scenario())

    assert len(requests) == 1
    assert first == second
    assert second.market_capitalization == 3012.5
    assert second.industry == "Technology"
    assert cache.ttls == {"market:profile:AAPL": 3600}


def test_fetch_profile_falls_through_when_cache_is_unavailable() -> None:
    client, requests = _client(_finnhub_handler, cache=InMemoryProfileCache(fail=True))

    profile = asyncio.run(client.fetch_profile("AAPL"))

    assert profile.name == "Apple Inc"
    assert len(requests) == 1


def test_fetch_profile_for_unknown_symbol_has_no_market_cap() -> None:
    client, _ = _client(lambda request: httpx.Response(200, json={}))

    profile = asyncio.run(client.fetch_profile("ZZZZ"))

    assert profile.symbol == "ZZZZ"
    assert profile.market_capitalization is None


def test_rate_limit_maps_to_rate_limited_error() -> None:
    client, _ = _client(lambda request: httpx.Response(429, json={"error": "API limit reached"}))

    with pytest.raises(MarketDataRateLimitedError) as exc_info:
        asyncio.run(client.fetch_quote("AAPL"))

    assert exc_info.value.symbol == "AAPL"
    assert exc_info.value.endpoint == "/quote"


def test_server_error_and_bad_payload_map_to_provider_error() -> None:
    failing, _ = _client(lambda request: httpx.Response(502))
    garbage, _ = _client(lambda request: httpx.Response(200, content=b"<html>oops</html>"))
    listing, _ = _client(lambda request: httpx.Response(200, json=[1, 2, 3]))

    with pytest.raises(MarketDataProviderError, match="MARKET_DATA_HTTP_502"):
        asyncio.run(failing.fetch_quote("AAPL"))
    with pytest.raises(MarketDataProviderError, match="MARKET_DATA_INVALID_PAYLOAD"):
        asyncio.run(garbage.fetch_profile("AAPL"))
    with pytest.raises(MarketDataProviderError, match="MARKET_DATA_INVALID_PAYLOAD"):
        asyncio.run(listing.fetch_quote("AAPL"))


def test_transport_error_maps_to_provider_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    client, _ = _client(handler)

    with pytest.raises(MarketDataProviderError):
        asyncio.run(client.fetch_quote("AAPL"))


def test_missing_api_key_is_a_configuration_error() -> None:
    with pytest.raises(MarketDataConfigurationError):
        FinnhubClient(None)
    with pytest.raises(MarketDataConfigurationError):
        FinnhubClient("   ")
