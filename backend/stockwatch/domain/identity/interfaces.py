from __future__ import annotations

from typing import Protocol

from stockwatch.domain.identity.schemas import User


class UserRepository(Protocol):
    def get_user_by_email_normalized(self, *, email_normalized: str) -> User | None: ...
