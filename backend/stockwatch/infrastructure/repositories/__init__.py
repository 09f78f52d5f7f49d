from stockwatch.infrastructure.repositories.user_repository import SqlAlchemyUserRepository
from stockwatch.infrastructure.repositories.watchlist_repository import SqlAlchemyWatchlistRepository

__all__ = [
    "SqlAlchemyUserRepository",
    "SqlAlchemyWatchlistRepository",
]
