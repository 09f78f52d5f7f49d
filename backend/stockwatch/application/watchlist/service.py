from __future__ import annotations

import logging

from stockwatch.domain.identity.services import normalize_email
from stockwatch.domain.watchlist.constants import (
    ACTION_ADDED,
    ACTION_REMOVED,
    CODE_DUPLICATE_SYMBOL,
    CODE_MISSING_REQUIRED_FIELDS,
    CODE_STORE_UNAVAILABLE,
    CODE_USER_NOT_FOUND,
    ERROR_ADD_FAILED,
    ERROR_ALREADY_IN_WATCHLIST,
    ERROR_MISSING_REQUIRED_FIELDS,
    ERROR_REMOVE_FAILED,
    ERROR_USER_NOT_FOUND,
)
from stockwatch.domain.watchlist.errors import (
    UserNotFoundError,
    WatchlistDuplicateError,
    WatchlistError,
    WatchlistValidationError,
)
from stockwatch.domain.watchlist.interfaces import (
    WatchlistChangeNotifier,
    WatchlistRepository,
    WatchlistUnitOfWork,
)
from stockwatch.domain.watchlist.schemas import WatchlistEntry, WatchlistMutationResult

logger = logging.getLogger(__name__)


class WatchlistApplicationService:
    """Watchlist reads and mutations keyed by the caller's email.

    Mutations never raise; they return a :class:`WatchlistMutationResult` the
    API layer can render. Reads degrade to an empty list on failure.
    """

    def __init__(
        self,
        *,
        uow: WatchlistUnitOfWork,
        change_notifier: WatchlistChangeNotifier | None = None,
    ) -> None:
        self._uow = uow
        self._change_notifier = change_notifier

    def load_entries(self, *, email: str) -> list[WatchlistEntry]:
        """Like :meth:`list_entries` but raises ``WatchlistError`` instead of degrading."""
        normalized_email = _require_text(email)
        with self._uow as uow:
            user_id = _resolve_user_id(uow, email=normalized_email)
            return _require_watchlist_repo(uow).list_entries(user_id=user_id)

    def list_entries(self, *, email: str) -> list[WatchlistEntry]:
        if not email or not email.strip():
            return []
        try:
            return self.load_entries(email=email)
        except UserNotFoundError:
            return []
        except WatchlistError:
            logger.exception("Failed to load watchlist entries")
            return []

    def list_symbols(self, *, email: str) -> set[str]:
        if not email or not email.strip():
            return set()
        try:
            with self._uow as uow:
                user_id = _resolve_user_id(uow, email=email.strip())
                return _require_watchlist_repo(uow).list_symbols(user_id=user_id)
        except UserNotFoundError:
            return set()
        except WatchlistError:
            logger.exception("Failed to load watchlist symbols")
            return set()

    def add_entry(self, *, email: str, symbol: str, company: str) -> WatchlistMutationResult:
        try:
            normalized_email = _require_text(email)
            normalized_symbol = _normalize_symbol(symbol)
            normalized_company = _require_text(company)
        except WatchlistValidationError:
            return WatchlistMutationResult.failed(
                error=ERROR_MISSING_REQUIRED_FIELDS,
                code=CODE_MISSING_REQUIRED_FIELDS,
            )

        try:
            with self._uow as uow:
                user_id = _resolve_user_id(uow, email=normalized_email)
                entry = _require_watchlist_repo(uow).add_entry(
                    user_id=user_id,
                    symbol=normalized_symbol,
                    company=normalized_company,
                )
                uow.commit()
        except UserNotFoundError:
            return WatchlistMutationResult.failed(error=ERROR_USER_NOT_FOUND, code=CODE_USER_NOT_FOUND)
        except WatchlistDuplicateError:
            return WatchlistMutationResult.failed(error=ERROR_ALREADY_IN_WATCHLIST, code=CODE_DUPLICATE_SYMBOL)
        except Exception:
            logger.exception("Failed to add watchlist entry", extra={"symbol": normalized_symbol})
            return WatchlistMutationResult.failed(error=ERROR_ADD_FAILED, code=CODE_STORE_UNAVAILABLE)

        self._notify(user_id=user_id, symbol=entry.symbol, action=ACTION_ADDED)
        return WatchlistMutationResult.ok(symbol=entry.symbol)

    def remove_entry(self, *, email: str, symbol: str) -> WatchlistMutationResult:
        try:
            normalized_email = _require_text(email)
            normalized_symbol = _normalize_symbol(symbol)
        except WatchlistValidationError:
            return WatchlistMutationResult.failed(
                error=ERROR_MISSING_REQUIRED_FIELDS,
                code=CODE_MISSING_REQUIRED_FIELDS,
            )

        try:
            with self._uow as uow:
                user_id = _resolve_user_id(uow, email=normalized_email)
                _require_watchlist_repo(uow).remove_entry(user_id=user_id, symbol=normalized_symbol)
                uow.commit()
        except UserNotFoundError:
            return WatchlistMutationResult.failed(error=ERROR_USER_NOT_FOUND, code=CODE_USER_NOT_FOUND)
        except Exception:
            logger.exception("Failed to remove watchlist entry", extra={"symbol": normalized_symbol})
            return WatchlistMutationResult.failed(error=ERROR_REMOVE_FAILED, code=CODE_STORE_UNAVAILABLE)

        self._notify(user_id=user_id, symbol=normalized_symbol, action=ACTION_REMOVED)
        return WatchlistMutationResult.ok(symbol=normalized_symbol)

    def _notify(self, *, user_id: int, symbol: str, action: str) -> None:
        if self._change_notifier is None:
            return
        try:
            self._change_notifier.notify(user_id=user_id, symbol=symbol, action=action)
        except Exception:
            logger.exception("Watchlist change notification failed", extra={"symbol": symbol})


def _resolve_user_id(uow: WatchlistUnitOfWork, *, email: str) -> int:
    if uow.user_repo is None:
        raise RuntimeError("User repository not configured")
    try:
        email_normalized = normalize_email(email)
    except ValueError as exc:
        raise UserNotFoundError() from exc
    user = uow.user_repo.get_user_by_email_normalized(email_normalized=email_normalized)
    if user is None:
        raise UserNotFoundError()
    return user.id


def _require_watchlist_repo(uow: WatchlistUnitOfWork) -> WatchlistRepository:
    if uow.watchlist_repo is None:
        raise RuntimeError("Watchlist repository not configured")
    return uow.watchlist_repo


def _require_text(value: str | None) -> str:
    normalized = (value or "").strip()
    if not normalized:
        raise WatchlistValidationError()
    return normalized


def _normalize_symbol(symbol: str | None) -> str:
    return _require_text(symbol).upper()
