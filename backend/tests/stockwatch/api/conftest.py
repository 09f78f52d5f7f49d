from __future__ import annotations

from datetime import datetime, timezone
from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from stockwatch.api.deps import get_enrichment_service, get_watchlist_service
from stockwatch.api.errors import install_api_error_handlers
from stockwatch.api.v1.router import api_router
from stockwatch.domain.watchlist.schemas import (
    EnrichedWatchlistRow,
    WatchlistEntry,
    WatchlistMutationResult,
)


class FakeWatchlistService:
    def __init__(self) -> None:
        self.add_calls: list[dict] = []
        self.remove_calls: list[dict] = []
        self.next_result: WatchlistMutationResult | None = None

    def list_entries(self, *, email: str) -> list[WatchlistEntry]:
        return [
            WatchlistEntry(
                user_id=1,
                symbol="MSFT",
                company="Microsoft Corp",
                added_at=datetime(2026, 10, 2, 9, 30, tzinfo=timezone.utc),
            ),
            WatchlistEntry(
                user_id=1,
                symbol="AAPL",
                company="Apple Inc",
                added_at=datetime(2026, 10, 1, 9, 30, tzinfo=timezone.utc),
            ),
        ]

    def list_symbols(self, *, email: str) -> set[str]:
        return {"MSFT", "AAPL"}

    def add_entry(self, *, email: str, symbol: str, company: str) -> WatchlistMutationResult:
        self.add_calls.append({"email": email, "symbol": symbol, "company": company})
        if self.next_result is not None:
            return self.next_result
        return WatchlistMutationResult.ok(symbol=symbol.strip().upper())

    def remove_entry(self, *, email: str, symbol: str) -> WatchlistMutationResult:
        self.remove_calls.append({"email": email, "symbol": symbol})
        if self.next_result is not None:
            return self.next_result
        return WatchlistMutationResult.ok(symbol=symbol.strip().upper())


class FakeEnrichmentService:
    def __init__(self) -> None:
        self.emails: list[str] = []

    async def enrich(self, *, email: str) -> list[EnrichedWatchlistRow]:
        self.emails.append(email)
        return [
            EnrichedWatchlistRow(
                symbol="AAPL",
                company="Apple Inc",
                price=203.12,
                change=1.23,
                change_percent=0.45,
                market_cap=3012.5,
            ),
            EnrichedWatchlistRow(symbol="MSFT", company="Microsoft Corp"),
        ]


@pytest.fixture
def watchlist_service() -> FakeWatchlistService:
    return FakeWatchlistService()


@pytest.fixture
def enrichment_service() -> FakeEnrichmentService:
    return FakeEnrichmentService()


@pytest.fixture
def api_client(
    watchlist_service: FakeWatchlistService,
    enrichment_service: FakeEnrichmentService,
) -> Generator[TestClient, None, None]:
    app = FastAPI()
    install_api_error_handlers(app)
    app.include_router(api_router, prefix="/api/v1")
    app.dependency_overrides[get_watchlist_service] = lambda: watchlist_service
    app.dependency_overrides[get_enrichment_service] = lambda: enrichment_service
    with TestClient(app) as client:
        yield client
