"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. SECRET_KEY is validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings have defaults except secret_key, which must be set
    unless debug is on.
    """

    # App
    app_name: str = "orgadmin"
    app_version: str = "1.0.0"
    debug: bool = False
    # Root log level; None picks DEBUG when debug is on, else INFO.
    log_level: str | None = None
    # Level for the audit stamper and soft-delete filter loggers.
    persistence_log_level: str = "INFO"

    # Database: any SQLAlchemy async URL (postgresql+asyncpg in production).
    database_url: str = "sqlite+aiosqlite:///./orgadmin.db"
    database_echo: bool = False
    # Optional pool overrides (None = use defaults in database.py)
    db_pool_size: int | None = None
    db_max_overflow: int | None = None

    # Unit of work: a transaction still open after this many seconds is rolled back.
    unit_of_work_timeout_seconds: float = 30.0

    # Security
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    refresh_token_expire_minutes: int = 60 * 24 * 7

    # Permission catalogue is inserted (missing keys only) at startup.
    seed_permissions_on_startup: bool = True

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Require a signing secret outside debug mode."""
        if not self.debug and not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32."
            )
        if self.unit_of_work_timeout_seconds <= 0:
            raise ValueError("UNIT_OF_WORK_TIMEOUT_SECONDS must be positive")
        return self

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
