from fastapi import APIRouter

from stockwatch.api.v1.endpoints.health import router as health_router
from stockwatch.api.v1.endpoints.watchlist import router as watchlist_router

api_router = APIRouter()
api_router.include_router(health_router, tags=["health"])
api_router.include_router(watchlist_router, prefix="/watchlist", tags=["watchlist"])
