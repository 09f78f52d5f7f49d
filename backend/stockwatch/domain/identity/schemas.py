from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class User(BaseModel):
    id: int
    email: str
    name: str | None = None
    created_at: datetime | None = None
