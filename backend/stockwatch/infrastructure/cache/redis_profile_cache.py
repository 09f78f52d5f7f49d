from __future__ import annotations

import asyncio
import json
from typing import Any

import redis.asyncio as redis


class RedisProfileCache:
    def __init__(self, *, redis_url: str) -> None:
        self._redis_url = redis_url
        self._client: redis.Redis | None = None
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> dict[str, Any] | None:
        client = await self._get_client()
        return _decode_payload(await client.get(key))

    async def set(self, key: str, value: dict[str, Any], *, ttl_seconds: int) -> None:
        payload = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
        client = await self._get_client()
        await client.set(key, payload, ex=max(1, ttl_seconds))

    async def close(self) -> None:
        client = self._client
        self._client = None
        if client is not None:
            await client.aclose()

    async def _get_client(self) -> redis.Redis:
        if self._client is not None:
            return self._client
        async with self._lock:
            if self._client is None:
                self._client = redis.from_url(self._redis_url, decode_responses=False)
            return self._client


def _decode_payload(raw: Any) -> dict[str, Any] | None:
    if raw is None:
        return None
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            return None
    if not isinstance(raw, str):
        return None
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError:
        return None
    if not isinstance(payload, dict):
        return None
    return payload
