"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename
_env_file = str(_env_path) if _env_path.is_file() else None


# Nested BaseSettings don't inherit env_file, so populate os.environ up front
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


ScoreRangePolicy = Literal["trust", "clamp", "reject"]


class MatchServiceSettings(BaseSettings):
    """Remote matching service endpoint and client behaviour."""

    base_url: str = Field(
        "https://resumatch-5ssz.onrender.com",
        description="Base URL of the remote matching service",
    )
    endpoint_path: str = Field(
        "/api/match",
        description="Path of the match endpoint, relative to base_url",
    )
    timeout_seconds: float = Field(
        30.0,
        gt=0,
        description="Deadline for a single analysis request in seconds",
    )
    score_range_policy: ScoreRangePolicy = Field(
        "trust",
        description=(
            "How scores outside [0, 100] are handled: keep as received (trust), "
            "clamp to the range (clamp) or treat the response as malformed (reject)"
        ),
    )

    model_config = SettingsConfigDict(
        env_prefix="MATCH_SERVICE_",
        case_sensitive=False,
    )


class AppSettings(BaseSettings):
    """Application-wide configuration."""

    debug: bool = Field(
        False,
        description="Enable debug mode with verbose logging",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging output configuration."""

    level: str = Field("INFO", description="Root log level")
    format: Literal["json", "plain"] = Field(
        "json",
        description="json for machine-readable records, plain for local reading",
    )
    output: Literal["stdout", "file"] = Field("stdout", description="Log destination")
    file_path: str | None = Field(
        None,
        description="Log file path when output=file (defaults to logs/app.log)",
    )
    max_bytes: int = Field(
        0,
        ge=0,
        description="Rotate the log file at this size; 0 disables rotation",
    )
    backup_count: int = Field(3, ge=0, description="Rotated files to keep")
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

    Automatically loads from the appropriate .env.{APP_ENV} file.
    Every field has a default, so an empty environment is a valid one.
    """

    app_env: str = APP_ENV
    match_service: MatchServiceSettings = Field(default_factory=MatchServiceSettings)
    app: AppSettings = Field(default_factory=AppSettings)
    log: LogSettings = Field(default_factory=LogSettings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


settings = Settings()
