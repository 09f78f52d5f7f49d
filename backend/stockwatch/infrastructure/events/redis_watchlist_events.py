from __future__ import annotations

from datetime import datetime, timezone
import json
import logging

import redis

logger = logging.getLogger(__name__)


class RedisWatchlistChangePublisher:
    """Publishes ``watchlist.changed`` events so collaborators can drop cached views."""

    def __init__(self, *, redis_url: str, channel: str, socket_timeout_seconds: float = 2.0) -> None:
        self._redis_url = redis_url
        self._channel = channel
        self._socket_timeout_seconds = socket_timeout_seconds
        self._client: redis.Redis | None = None

    def notify(self, *, user_id: int, symbol: str, action: str) -> None:
        message = json.dumps(
            {
                "type": "watchlist.changed",
                "ts": datetime.now(tz=timezone.utc).isoformat(),
                "data": {"user_id": user_id, "symbol": symbol, "action": action},
            },
            separators=(",", ":"),
            ensure_ascii=False,
        )
        self._get_client().publish(self._channel, message)
        logger.debug("Published watchlist change", extra={"symbol": symbol, "action": action})

    def close(self) -> None:
        client = self._client
        self._client = None
        if client is not None:
            client.close()

    def _get_client(self) -> redis.Redis:
        if self._client is None:
            # notify runs on the request path; an unreachable host must fail fast
            self._client = redis.Redis.from_url(
                self._redis_url,
                decode_responses=False,
                socket_timeout=self._socket_timeout_seconds,
                socket_connect_timeout=self._socket_timeout_seconds,
            )
        return self._client
