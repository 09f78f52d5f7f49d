from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stockwatch.domain.identity.schemas import User
from stockwatch.domain.watchlist.errors import WatchlistStoreError
from stockwatch.infrastructure.db.mappers import user_to_domain
from stockwatch.infrastructure.db.models.user import UserModel


class SqlAlchemyUserRepository:
    def __init__(self, *, session: Session) -> None:
        self._session = session

    def get_user_by_email_normalized(self, *, email_normalized: str) -> User | None:
        stmt = select(UserModel).where(UserModel.email_normalized == email_normalized)
        try:
            user = self._session.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise WatchlistStoreError() from exc
        if user is None:
            return None
        return user_to_domain(user)
