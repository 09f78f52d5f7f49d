from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Response, status

from stockwatch.api.deps import get_current_user_email, get_enrichment_service, get_watchlist_service
from stockwatch.api.errors import raise_api_error
from stockwatch.api.v1.dto.mappers import (
    to_enriched_watchlist_out,
    to_watchlist_entry_out,
    to_watchlist_mutation_out,
    to_watchlist_symbols_out,
)
from stockwatch.api.v1.dto.watchlist import (
    EnrichedWatchlistOut,
    WatchlistEntryCreate,
    WatchlistEntryOut,
    WatchlistMutationOut,
    WatchlistSymbolsOut,
)
from stockwatch.application.watchlist.enrichment import WatchlistEnrichmentService
from stockwatch.application.watchlist.service import WatchlistApplicationService
from stockwatch.core.config import settings
from stockwatch.domain.watchlist.constants import (
    CODE_DUPLICATE_SYMBOL,
    CODE_MISSING_REQUIRED_FIELDS,
    CODE_USER_NOT_FOUND,
)
from stockwatch.domain.watchlist.schemas import WatchlistMutationResult

router = APIRouter()

_MUTATION_ERROR_STATUS = {
    CODE_MISSING_REQUIRED_FIELDS: 400,
    CODE_USER_NOT_FOUND: 404,
    CODE_DUPLICATE_SYMBOL: 409,
}


@router.get("", response_model=list[WatchlistEntryOut])
def list_watchlist(
    email: str = Depends(get_current_user_email),
    service: WatchlistApplicationService = Depends(get_watchlist_service),
) -> list[WatchlistEntryOut]:
    entries = service.list_entries(email=email)
    return [to_watchlist_entry_out(entry) for entry in entries]


@router.get("/symbols", response_model=WatchlistSymbolsOut)
def list_watchlist_symbols(
    email: str = Depends(get_current_user_email),
    service: WatchlistApplicationService = Depends(get_watchlist_service),
) -> WatchlistSymbolsOut:
    return to_watchlist_symbols_out(service.list_symbols(email=email))


@router.get("/enriched", response_model=EnrichedWatchlistOut)
async def list_enriched_watchlist(
    response: Response,
    email: str = Depends(get_current_user_email),
    service: WatchlistEnrichmentService = Depends(get_enrichment_service),
) -> EnrichedWatchlistOut:
    rows = await service.enrich(email=email)
    response.headers["Cache-Control"] = "no-store"
    return to_enriched_watchlist_out(
        rows,
        refreshed_at=datetime.now(tz=timezone.utc),
        refresh_interval_seconds=settings.watchlist_refresh_interval_seconds,
    )


@router.post("", response_model=WatchlistMutationOut, status_code=status.HTTP_201_CREATED)
def add_watchlist_entry(
    payload: WatchlistEntryCreate,
    email: str = Depends(get_current_user_email),
    service: WatchlistApplicationService = Depends(get_watchlist_service),
) -> WatchlistMutationOut:
    result = service.add_entry(email=email, symbol=payload.symbol, company=payload.company)
    _raise_for_mutation_failure(result)
    return to_watchlist_mutation_out(result)


@router.delete("/{symbol}", response_model=WatchlistMutationOut)
def remove_watchlist_entry(
    symbol: str,
    email: str = Depends(get_current_user_email),
    service: WatchlistApplicationService = Depends(get_watchlist_service),
) -> WatchlistMutationOut:
    result = service.remove_entry(email=email, symbol=symbol)
    _raise_for_mutation_failure(result)
    return to_watchlist_mutation_out(result)


def _raise_for_mutation_failure(result: WatchlistMutationResult) -> None:
    if result.success:
        return
    code = result.code or "WATCHLIST_STORE_UNAVAILABLE"
    raise_api_error(
        status_code=_MUTATION_ERROR_STATUS.get(code, 500),
        code=code,
        message=result.error or "Watchlist request failed",
    )
