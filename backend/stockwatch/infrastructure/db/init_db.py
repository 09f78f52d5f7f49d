from __future__ import annotations

from sqlalchemy.engine import Engine

from stockwatch.infrastructure.db.base import Base

# Ensure models are registered with SQLAlchemy metadata.
from stockwatch.infrastructure.db import models  # noqa: F401


def init_db(bind: Engine | None = None) -> None:
    if bind is None:
        from stockwatch.infrastructure.db.session import engine

        bind = engine
    Base.metadata.create_all(bind=bind)
