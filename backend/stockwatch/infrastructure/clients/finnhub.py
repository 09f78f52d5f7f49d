from __future__ import annotations

import logging
from typing import Any

import httpx

from stockwatch.domain.market_data.errors import (
    MarketDataConfigurationError,
    MarketDataProviderError,
    MarketDataRateLimitedError,
)
from stockwatch.domain.market_data.interfaces import ProfileCache
from stockwatch.domain.market_data.schemas import CompanyProfile, Quote

logger = logging.getLogger(__name__)

QUOTE_ENDPOINT = "/quote"
PROFILE_ENDPOINT = "/stock/profile2"


class FinnhubClient:
    """Async Finnhub REST client.

    Quotes are always requested fresh. Company profiles go through the optional
    ``profile_cache`` for ``profile_cache_ttl_seconds`` because they rarely change.
    The client owns one ``httpx.AsyncClient``; call :meth:`aclose` on shutdown.
    """

    def __init__(
        self,
        api_key: str | None,
        *,
        base_url: str = "https://finnhub.io/api/v1",
        timeout_seconds: float = 10.0,
        profile_cache: ProfileCache | None = None,
        profile_cache_ttl_seconds: int = 3600,
        profile_cache_key_prefix: str = "market:profile",
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not api_key or not api_key.strip():
            raise MarketDataConfigurationError()

        self.api_key = api_key.strip()
        self.base_url = base_url.rstrip("/")
        self._profile_cache = profile_cache
        self._profile_cache_ttl_seconds = profile_cache_ttl_seconds
        self._profile_cache_key_prefix = profile_cache_key_prefix.strip() or "market:profile"
        self._http_client = http_client or httpx.AsyncClient(timeout=timeout_seconds)

    async def fetch_quote(self, symbol: str) -> Quote:
        normalized = _normalize_symbol(symbol)
        payload = await self._get_json(QUOTE_ENDPOINT, symbol=normalized)
        return _to_quote(normalized, payload)

    async def fetch_profile(self, symbol: str) -> CompanyProfile:
        normalized = _normalize_symbol(symbol)
        cache_key = f"{self._profile_cache_key_prefix}:{normalized}"

        cached = await self._read_profile_cache(cache_key)
        if cached is not None:
            return CompanyProfile.from_dict(cached)

        payload = await self._get_json(PROFILE_ENDPOINT, symbol=normalized)
        profile = _to_company_profile(normalized, payload)
        await self._write_profile_cache(cache_key, profile)
        return profile

    async def aclose(self) -> None:
        await self._http_client.aclose()

    async def _get_json(self, endpoint: str, *, symbol: str) -> dict[str, Any]:
        try:
            response = await self._http_client.get(
                f"{self.base_url}{endpoint}",
                params={"symbol": symbol, "token": self.api_key},
            )
        except httpx.HTTPError as exc:
            raise MarketDataProviderError(symbol=symbol, endpoint=endpoint) from exc

        if response.status_code == 429:
            raise MarketDataRateLimitedError(symbol=symbol, endpoint=endpoint)
        if response.is_error:
            raise MarketDataProviderError(
                symbol=symbol,
                endpoint=endpoint,
                reason=f"MARKET_DATA_HTTP_{response.status_code}",
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise MarketDataProviderError(
                symbol=symbol,
                endpoint=endpoint,
                reason="MARKET_DATA_INVALID_PAYLOAD",
            ) from exc
        if not isinstance(payload, dict):
            raise MarketDataProviderError(symbol=symbol, endpoint=endpoint, reason="MARKET_DATA_INVALID_PAYLOAD")
        return payload

    async def _read_profile_cache(self, key: str) -> dict[str, Any] | None:
        if self._profile_cache is None:
            return None
        try:
            return await self._profile_cache.get(key)
        except Exception:
            logger.exception("Profile cache read failed", extra={"cache_key": key})
            return None

    async def _write_profile_cache(self, key: str, profile: CompanyProfile) -> None:
        if self._profile_cache is None:
            return
        try:
            await self._profile_cache.set(key, profile.to_dict(), ttl_seconds=self._profile_cache_ttl_seconds)
        except Exception:
            logger.exception("Profile cache write failed", extra={"cache_key": key})


def _normalize_symbol(symbol: str) -> str:
    normalized = symbol.strip().upper()
    if not normalized:
        raise ValueError("Symbol is required")
    return normalized


def _to_quote(symbol: str, payload: dict[str, Any]) -> Quote:
    timestamp = payload.get("t")
    return Quote(
        symbol=symbol,
        current_price=_to_float(payload.get("c")),
        change=_to_float(payload.get("d")),
        change_percent=_to_float(payload.get("dp")),
        high=_to_float(payload.get("h")),
        low=_to_float(payload.get("l")),
        open=_to_float(payload.get("o")),
        previous_close=_to_float(payload.get("pc")),
        timestamp=int(timestamp) if isinstance(timestamp, (int, float)) else None,
    )


def _to_company_profile(symbol: str, payload: dict[str, Any]) -> CompanyProfile:
    return CompanyProfile(
        symbol=symbol,
        name=_to_str(payload.get("name")),
        market_capitalization=_to_float(payload.get("marketCapitalization")),
        currency=_to_str(payload.get("currency")),
        exchange=_to_str(payload.get("exchange")),
        industry=_to_str(payload.get("finnhubIndustry")),
        logo=_to_str(payload.get("logo")),
        web_url=_to_str(payload.get("weburl")),
    )


def _to_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _to_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
