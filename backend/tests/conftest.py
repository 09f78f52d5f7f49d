from __future__ import annotations

import os

# Keep settings hermetic: no real database, Redis or Finnhub key during tests.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("PROFILE_CACHE_ENABLED", "false")
os.environ.setdefault("WATCHLIST_CHANGE_EVENTS_ENABLED", "false")
os.environ["FINNHUB_API_KEY"] = ""
