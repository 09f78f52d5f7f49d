from __future__ import annotations

from typing import Protocol

from stockwatch.domain.identity.interfaces import UserRepository
from stockwatch.domain.watchlist.schemas import WatchlistEntry


class WatchlistRepository(Protocol):
    def list_entries(self, *, user_id: int) -> list[WatchlistEntry]: ...

    def list_symbols(self, *, user_id: int) -> set[str]: ...

    def add_entry(self, *, user_id: int, symbol: str, company: str) -> WatchlistEntry: ...

    def remove_entry(self, *, user_id: int, symbol: str) -> None: ...


class WatchlistUnitOfWork(Protocol):
    """Transaction boundary; repositories are only set inside the ``with`` block."""

    user_repo: UserRepository | None
    watchlist_repo: WatchlistRepository | None

    def __enter__(self) -> WatchlistUnitOfWork: ...

    def __exit__(self, exc_type, exc, tb) -> None: ...

    def commit(self) -> None: ...


class WatchlistChangeNotifier(Protocol):
    def notify(self, *, user_id: int, symbol: str, action: str) -> None: ...
