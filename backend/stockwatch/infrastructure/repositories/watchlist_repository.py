from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from stockwatch.domain.watchlist.errors import WatchlistDuplicateError, WatchlistStoreError
from stockwatch.domain.watchlist.schemas import WatchlistEntry
from stockwatch.infrastructure.db.mappers import watchlist_entry_to_domain
from stockwatch.infrastructure.db.models.watchlist import WatchlistEntryModel


class SqlAlchemyWatchlistRepository:
    def __init__(self, *, session: Session) -> None:
        self._session = session

    def list_entries(self, *, user_id: int) -> list[WatchlistEntry]:
        try:
            rows = (
                self._session.execute(
                    select(WatchlistEntryModel)
                    .where(WatchlistEntryModel.user_id == user_id)
                    .order_by(WatchlistEntryModel.added_at.desc(), WatchlistEntryModel.id.desc())
                )
                .scalars()
                .all()
            )
        except SQLAlchemyError as exc:
            raise WatchlistStoreError() from exc
        return [watchlist_entry_to_domain(row) for row in rows]

    def list_symbols(self, *, user_id: int) -> set[str]:
        try:
            symbols = self._session.execute(
                select(WatchlistEntryModel.symbol).where(WatchlistEntryModel.user_id == user_id)
            ).scalars()
            return set(symbols)
        except SQLAlchemyError as exc:
            raise WatchlistStoreError() from exc

    def add_entry(self, *, user_id: int, symbol: str, company: str) -> WatchlistEntry:
        normalized = symbol.strip().upper()
        entry = WatchlistEntryModel(user_id=user_id, symbol=normalized, company=company)
        self._session.add(entry)
        try:
            self._session.flush()
        except IntegrityError as exc:
            self._session.rollback()
            raise WatchlistDuplicateError(normalized) from exc
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise WatchlistStoreError() from exc
        return watchlist_entry_to_domain(entry)

    def remove_entry(self, *, user_id: int, symbol: str) -> None:
        try:
            self._session.execute(
                delete(WatchlistEntryModel).where(
                    WatchlistEntryModel.user_id == user_id,
                    WatchlistEntryModel.symbol == symbol.strip().upper(),
                )
            )
            self._session.flush()
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise WatchlistStoreError() from exc
