from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(slots=True)
class Quote:
    symbol: str
    current_price: float | None
    change: float | None
    change_percent: float | None
    high: float | None = None
    low: float | None = None
    open: float | None = None
    previous_close: float | None = None
    timestamp: int | None = None


@dataclass(slots=True)
class CompanyProfile:
    symbol: str
    name: str | None = None
    market_capitalization: float | None = None
    currency: str | None = None
    exchange: str | None = None
    industry: str | None = None
    logo: str | None = None
    web_url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "CompanyProfile":
        return cls(
            symbol=str(payload.get("symbol") or ""),
            name=payload.get("name"),
            market_capitalization=payload.get("market_capitalization"),
            currency=payload.get("currency"),
            exchange=payload.get("exchange"),
            industry=payload.get("industry"),
            logo=payload.get("logo"),
            web_url=payload.get("web_url"),
        )
