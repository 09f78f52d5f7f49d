from __future__ import annotations

from datetime import datetime

from stockwatch.api.v1.dto.watchlist import (
    EnrichedWatchlistOut,
    EnrichedWatchlistRowOut,
    WatchlistEntryOut,
    WatchlistMutationOut,
    WatchlistSymbolsOut,
)
from stockwatch.domain.watchlist.formatting import (
    change_trend,
    format_change,
    format_market_cap,
    format_price,
)
from stockwatch.domain.watchlist.schemas import (
    EnrichedWatchlistRow,
    WatchlistEntry,
    WatchlistMutationResult,
)


def to_watchlist_entry_out(entry: WatchlistEntry) -> WatchlistEntryOut:
    return WatchlistEntryOut(
        symbol=entry.symbol,
        company=entry.company,
        added_at=entry.added_at,
    )


def to_watchlist_symbols_out(symbols: set[str]) -> WatchlistSymbolsOut:
    return WatchlistSymbolsOut(symbols=sorted(symbols))


def to_enriched_row_out(row: EnrichedWatchlistRow) -> EnrichedWatchlistRowOut:
    return EnrichedWatchlistRowOut(
        symbol=row.symbol,
        company=row.company,
        price=row.price,
        change=row.change,
        change_percent=row.change_percent,
        market_cap=row.market_cap,
        pe_ratio=row.pe_ratio,
        price_display=format_price(row.price),
        change_display=format_change(row.change, row.change_percent),
        market_cap_display=format_market_cap(row.market_cap),
        trend=change_trend(row.change),
    )


def to_enriched_watchlist_out(
    rows: list[EnrichedWatchlistRow],
    *,
    refreshed_at: datetime,
    refresh_interval_seconds: int,
) -> EnrichedWatchlistOut:
    return EnrichedWatchlistOut(
        items=[to_enriched_row_out(row) for row in rows],
        refreshed_at=refreshed_at,
        refresh_interval_seconds=refresh_interval_seconds,
    )


def to_watchlist_mutation_out(result: WatchlistMutationResult) -> WatchlistMutationOut:
    return WatchlistMutationOut(success=result.success, symbol=result.symbol)
