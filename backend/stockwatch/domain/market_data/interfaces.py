from __future__ import annotations

from typing import Any, Protocol

from stockwatch.domain.market_data.schemas import CompanyProfile, Quote


class MarketDataClient(Protocol):
    async def fetch_quote(self, symbol: str) -> Quote: ...

    async def fetch_profile(self, symbol: str) -> CompanyProfile: ...


class ProfileCache(Protocol):
    async def get(self, key: str) -> dict[str, Any] | None: ...

    async def set(self, key: str, value: dict[str, Any], *, ttl_seconds: int) -> None: ...
