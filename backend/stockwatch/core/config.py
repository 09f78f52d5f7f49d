from pathlib import Path

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[2]
ENV_FILE = BASE_DIR / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=ENV_FILE, env_file_encoding="utf-8", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    finnhub_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("FINNHUB_API_KEY", "NEXT_PUBLIC_FINNHUB_API_KEY", "finnhub_api_key"),
    )
    finnhub_base_url: str = "https://finnhub.io/api/v1"
    market_data_fetch_timeout_seconds: float = 10.0
    market_data_max_concurrency: int = 16

    profile_cache_enabled: bool = True
    profile_cache_ttl_seconds: int = 3600
    profile_cache_key_prefix: str = "market:profile"

    redis_url: str = "redis://localhost:6379/0"
    watchlist_change_events_enabled: bool = True
    watchlist_events_channel: str = "watchlist:events"
    watchlist_events_socket_timeout_seconds: float = 2.0
    watchlist_refresh_interval_seconds: int = 60

    postgres_db: str = "stockwatch"
    postgres_user: str = "stockwatch"
    postgres_password: str = "stockwatch"
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    database_url_override: str | None = Field(
        default=None,
        validation_alias=AliasChoices("DATABASE_URL", "database_url_override"),
    )

    cors_allow_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    @model_validator(mode="after")
    def _validate_market_data(self) -> "Settings":
        key = (self.finnhub_api_key or "").strip()
        self.finnhub_api_key = key or None

        if self.market_data_fetch_timeout_seconds <= 0:
            raise ValueError("MARKET_DATA_FETCH_TIMEOUT_SECONDS must be positive")
        if self.market_data_max_concurrency < 1:
            raise ValueError("MARKET_DATA_MAX_CONCURRENCY must be >= 1")
        if self.profile_cache_ttl_seconds < 1:
            raise ValueError("PROFILE_CACHE_TTL_SECONDS must be >= 1")
        if self.watchlist_events_socket_timeout_seconds <= 0:
            raise ValueError("WATCHLIST_EVENTS_SOCKET_TIMEOUT_SECONDS must be positive")
        if self.watchlist_refresh_interval_seconds < 1:
            raise ValueError("WATCHLIST_REFRESH_INTERVAL_SECONDS must be >= 1")
        return self

    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql+psycopg://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


settings = Settings()
