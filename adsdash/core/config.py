"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


APP_ENV = os.getenv("APP_ENV", "development")

PROJECT_ROOT = Path(__file__).resolve().parents[2]

ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Production may inject everything through the environment
_env_file = str(_env_path) if _env_path.is_file() else None


# Nested BaseSettings don't inherit env_file, so populate os.environ first
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


def _build_app_settings() -> "AppSettings":
    return AppSettings()  # type: ignore[call-arg]


def _build_log_settings() -> "LogSettings":
    return LogSettings()  # type: ignore[call-arg]


class AppSettings(BaseSettings):
    """Application-wide configuration."""

    debug: bool = Field(
        False,
        description="Enable debug mode with verbose logging",
    )

    rate_limit_enabled: bool = Field(
        True,
        description="Enable per-client, per-route rate limiting",
    )
    rate_limit_include_headers: bool = Field(
        True,
        description="Include X-RateLimit-* and Retry-After headers when throttling",
    )
    rate_limit_cleanup_interval_seconds: float = Field(
        3600,
        description="Seconds between sweeps of stale rate limiter keys",
        gt=0,
    )
    rate_limit_max_age_seconds: float = Field(
        24 * 60 * 60,
        description="Keys whose window opened longer ago than this are evicted",
        gt=0,
    )

    error_log_max_entries: int = Field(
        1000,
        description="Capacity of the in-memory client error buffer",
        ge=1,
    )
    error_log_max_list: int = Field(
        100,
        description="Hard cap on entries returned by a single error log read",
        ge=1,
    )
    error_log_default_list: int = Field(
        50,
        description="Entries returned when the client does not pass a limit",
        ge=1,
    )
    error_log_read_env: str = Field(
        "development",
        description="Only environment in which the error log can be read",
    )

    toast_max_visible: int = Field(
        3,
        description="Maximum number of toasts rendered at once",
        ge=1,
    )
    toast_default_duration_ms: int = Field(
        5000,
        description="Auto-dismiss delay for success/info/warning toasts",
        ge=0,
    )
    toast_error_duration_ms: int = Field(
        8000,
        description="Auto-dismiss delay for error toasts",
        ge=0,
    )

    theme_storage_key: str = Field(
        "theme",
        description="Key under which the theme preference is persisted",
    )
    theme_store_path: str = Field(
        "var/preferences.json",
        description="JSON file backing the preference store",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging output configuration."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field("json", description="Either 'json' or 'plain'")
    output: str = Field("stdout", description="Either 'stdout' or 'file'")
    file_path: str | None = Field(None, description="Log file path when output=file")
    max_bytes: int = Field(
        10 * 1024 * 1024,
        description="Rotate the log file after this many bytes (0 disables rotation)",
        ge=0,
    )
    backup_count: int = Field(5, description="Rotated files to keep", ge=0)
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header used to read and echo the correlation id",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main application settings container.

    Environments:
    - development: Local development, admin reads enabled
    - testing: Automated tests (uses .env.testing)
    - staging: Pre-production (uses .env.staging)
    - production: Production deployment (uses .env.production)
    """

    app_env: str = APP_ENV
    app: AppSettings = Field(default_factory=_build_app_settings)
    log: LogSettings = Field(default_factory=_build_log_settings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


settings = Settings()
