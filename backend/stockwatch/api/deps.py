from __future__ import annotations

from fastapi import Header

from stockwatch.api.errors import raise_api_error
from stockwatch.application.container import build_enrichment_service, build_watchlist_service
from stockwatch.application.watchlist.enrichment import WatchlistEnrichmentService
from stockwatch.application.watchlist.service import WatchlistApplicationService

USER_EMAIL_HEADER = "X-User-Email"


def get_watchlist_service() -> WatchlistApplicationService:
    return build_watchlist_service()


def get_enrichment_service() -> WatchlistEnrichmentService:
    return build_enrichment_service()


def get_current_user_email(
    x_user_email: str | None = Header(default=None, alias=USER_EMAIL_HEADER),
) -> str:
    # The identity provider in front of this service authenticates the session
    # and forwards the user's email; this service only resolves it.
    email = (x_user_email or "").strip()
    if not email:
        raise_api_error(
            status_code=401,
            code="AUTH_IDENTITY_REQUIRED",
            message=f"{USER_EMAIL_HEADER} header is required",
        )
    return email
