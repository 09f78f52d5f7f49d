from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel


class WatchlistEntry(BaseModel):
    user_id: int
    symbol: str
    company: str
    added_at: datetime | None = None


@dataclass(slots=True)
class EnrichedWatchlistRow:
    symbol: str
    company: str
    price: float | None = None
    change: float | None = None
    change_percent: float | None = None
    market_cap: float | None = None
    # No provider field backs this yet; always None.
    pe_ratio: float | None = None


@dataclass(slots=True)
class WatchlistMutationResult:
    success: bool
    symbol: str | None = None
    error: str | None = None
    code: str | None = None

    @classmethod
    def ok(cls, *, symbol: str) -> "WatchlistMutationResult":
        return cls(success=True, symbol=symbol)

    @classmethod
    def failed(cls, *, error: str, code: str) -> "WatchlistMutationResult":
        return cls(success=False, error=error, code=code)
