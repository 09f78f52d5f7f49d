from __future__ import annotations

from stockwatch.domain.watchlist.constants import (
    CODE_DUPLICATE_SYMBOL,
    CODE_MISSING_REQUIRED_FIELDS,
    CODE_STORE_UNAVAILABLE,
    CODE_USER_NOT_FOUND,
)


class WatchlistError(ValueError):
    """Base error for watchlist operations."""

    code = "WATCHLIST_ERROR"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.code)


class WatchlistValidationError(WatchlistError):
    """Raised when a required input is missing or blank."""

    code = CODE_MISSING_REQUIRED_FIELDS


class UserNotFoundError(WatchlistError):
    """Raised when the caller's email does not resolve to a user record."""

    code = CODE_USER_NOT_FOUND


class WatchlistDuplicateError(WatchlistError):
    """Raised when (user, symbol) already exists."""

    code = CODE_DUPLICATE_SYMBOL

    def __init__(self, symbol: str) -> None:
        super().__init__(f"{symbol} already exists in watchlist")
        self.symbol = symbol


class WatchlistStoreError(WatchlistError):
    """Raised when the underlying store cannot be reached or fails."""

    code = CODE_STORE_UNAVAILABLE
