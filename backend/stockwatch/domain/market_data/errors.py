from __future__ import annotations


class MarketDataError(ValueError):
    """Base error for market data lookups."""


class MarketDataConfigurationError(MarketDataError):
    """Raised when the provider credentials are absent."""

    def __init__(self) -> None:
        super().__init__("MARKET_DATA_NOT_CONFIGURED")


class MarketDataProviderError(MarketDataError):
    """Raised when a single provider request fails for one symbol."""

    def __init__(self, *, symbol: str, endpoint: str, reason: str = "MARKET_DATA_UPSTREAM_UNAVAILABLE") -> None:
        super().__init__(reason)
        self.symbol = symbol
        self.endpoint = endpoint
        self.reason = reason


class MarketDataRateLimitedError(MarketDataProviderError):
    """Raised when the provider rate limits a request."""

    def __init__(self, *, symbol: str, endpoint: str) -> None:
        super().__init__(symbol=symbol, endpoint=endpoint, reason="MARKET_DATA_RATE_LIMITED")
