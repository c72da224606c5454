"""Application configuration using Pydantic Settings.

Every field maps to an upper-case environment variable (``DATABASE_URL``,
``ADMIN_API_KEY``, ...) and may also come from a local ``.env`` file.
"""

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from paywise.tax.year_config import TAX_YEAR_CONFIGS

DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
LOG_FORMATS = ("json", "console")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    database_url: str = "sqlite+aiosqlite:///./paywise.db"
    """Async SQLAlchemy URL: sqlite+aiosqlite locally, postgresql+asyncpg in production."""

    database_auto_create: bool = False
    """Create tables on startup instead of running Alembic (local SQLite only)."""

    # Redis
    redis_url: str = "redis://localhost:6379/0"

    # Error tracking
    sentry_dsn: str | None = None
    sentry_traces_sample_rate: float = Field(default=0.1, ge=0.0, le=1.0)

    # Environment
    environment: str = "development"
    """development, staging or production."""

    debug: bool = False
    log_format: str | None = None
    """json or console; unset picks console in development and json elsewhere."""

    # Admin dashboard
    admin_api_key: str | None = None
    """Value expected in X-Admin-Key. Admin routes answer 503 while unset."""

    # Calculators
    tax_year: int = 2024
    """Tax year used when a request does not name one."""

    # Rate limiting
    lead_rate_limit: int = Field(default=5, gt=0)
    lead_rate_window_seconds: int = Field(default=3600, gt=0)
    click_rate_limit: int = Field(default=120, gt=0)
    """Affiliate click events per client per minute."""
    trusted_proxy_hops: int = Field(default=0, ge=0)
    """Reverse proxies in front of the app that append to X-Forwarded-For.

    0 keys rate limits on the socket peer and ignores the header. Set 1 behind
    a single load balancer; the client is then the entry that proxy appended.
    """

    # NoDecode keeps pydantic-settings from JSON-decoding the raw env value,
    # so both JSON arrays and comma-separated strings reach the validator.
    cors_origins: Annotated[list[str], NoDecode] = DEFAULT_CORS_ORIGINS

    @field_validator("environment", mode="before")
    @classmethod
    def normalize_environment(cls, value: object) -> object:
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("log_format", mode="before")
    @classmethod
    def validate_log_format(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.strip().lower() or None
            if value is not None and value not in LOG_FORMATS:
                raise ValueError(f"LOG_FORMAT must be one of {', '.join(LOG_FORMATS)}")
        return value

    @field_validator("tax_year")
    @classmethod
    def validate_tax_year(cls, value: int) -> int:
        if value not in TAX_YEAR_CONFIGS:
            raise ValueError(f"TAX_YEAR must be one of {sorted(TAX_YEAR_CONFIGS)}")
        return value

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, value: object) -> list[str]:
        """Accept a JSON array, a comma-separated string, or a sequence."""
        if isinstance(value, (list, tuple, set)):
            return _normalize_origins(value)
        if not isinstance(value, str):
            raise ValueError("CORS_ORIGINS must be a string or a list of origins.")

        text = value.strip()
        if text.startswith(("[", "{", '"')):
            try:
                decoded = json.loads(text)
            except json.JSONDecodeError as e:
                raise ValueError(f"CORS_ORIGINS is not valid JSON: {e}") from e
            if isinstance(decoded, list):
                return _normalize_origins(decoded)
            if not isinstance(decoded, str):
                raise ValueError("CORS_ORIGINS must be a JSON array or comma-separated string.")
            text = decoded

        return _normalize_origins(text.split(","))

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


def _normalize_origins(values: Iterable[object]) -> list[str]:
    """Strip quotes and trailing slashes, dedupe in order; empty means defaults."""
    origins: dict[str, None] = {}
    for raw in values:
        origin = str(raw).strip().strip("'\"").rstrip("/")
        if origin:
            origins.setdefault(origin)
    return list(origins) or DEFAULT_CORS_ORIGINS.copy()


try:
    settings = Settings()
except Exception as exc:
    env_file = Path(".env")
    location = env_file.resolve() if env_file.exists() else "the environment"
    raise RuntimeError(
        f"Failed to load paywise settings from {location}.\n"
        f"Error: {exc}\n"
        "Check DATABASE_URL, REDIS_URL and TAX_YEAR (supported: "
        f"{', '.join(str(year) for year in sorted(TAX_YEAR_CONFIGS))}).\n"
        "CORS_ORIGINS accepts either\n"
        '  ["https://paywise.example","http://localhost:5173"]\n'
        "or\n"
        "  https://paywise.example,http://localhost:5173"
    ) from exc
