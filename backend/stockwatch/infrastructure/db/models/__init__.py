from stockwatch.infrastructure.db.models.user import UserModel
from stockwatch.infrastructure.db.models.watchlist import WatchlistEntryModel

__all__ = [
    "UserModel",
    "WatchlistEntryModel",
]
