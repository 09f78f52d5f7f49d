from __future__ import annotations

from stockwatch.domain.identity.schemas import User
from stockwatch.domain.watchlist.schemas import WatchlistEntry
from stockwatch.infrastructure.db.models.user import UserModel
from stockwatch.infrastructure.db.models.watchlist import WatchlistEntryModel


def user_to_domain(model: UserModel) -> User:
    return User(
        id=model.id,
        email=model.email,
        name=model.name,
        created_at=model.created_at,
    )


def watchlist_entry_to_domain(model: WatchlistEntryModel) -> WatchlistEntry:
    return WatchlistEntry(
        user_id=model.user_id,
        symbol=model.symbol,
        company=model.company,
        added_at=model.added_at,
    )
