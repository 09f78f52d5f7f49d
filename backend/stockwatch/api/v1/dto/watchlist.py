from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class WatchlistEntryCreate(BaseModel):
    symbol: str = Field(default="", max_length=16)
    company: str = Field(default="", max_length=255)

    @field_validator("symbol", "company", mode="before")
    @classmethod
    def strip_padding(cls, v):
        """Length limits apply to the trimmed value the store keeps."""
        if isinstance(v, str):
            return v.strip()
        return v


class WatchlistEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    symbol: str
    company: str
    added_at: datetime | None = None


class WatchlistSymbolsOut(BaseModel):
    symbols: list[str]


class EnrichedWatchlistRowOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra="ignore")

    symbol: str
    company: str
    price: float | None = None
    change: float | None = None
    change_percent: float | None = None
    market_cap: float | None = None
    pe_ratio: float | None = None
    price_display: str
    change_display: str
    market_cap_display: str
    trend: str | None = None


class EnrichedWatchlistOut(BaseModel):
    items: list[EnrichedWatchlistRowOut]
    refreshed_at: datetime
    refresh_interval_seconds: int


class WatchlistMutationOut(BaseModel):
    success: bool
    symbol: str | None = None
