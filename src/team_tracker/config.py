"""Application configuration and settings management."""

from pathlib import Path
from typing import Any

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="TRACKER_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Team Tracker API"
    api_prefix: str = "/api"
    database_path: Path = Field(
        default=Path("team_tracker.db"),
        description="SQLite database file. Recreated on every start when reset is enabled.",
    )
    reset_database_on_startup: bool = Field(
        default=True,
        description="Delete any existing database file before opening it.",
    )
    placemark_file: Path = Field(
        default=Path("data/locations.kml"),
        description="KML document with the placemarks imported as locations at startup.",
    )
    require_placemark_import: bool = Field(
        default=False,
        description="Abort startup when the placemark import fails instead of running with no locations.",
    )
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=("http://localhost:3000",),
        description="Permitted web origins for browser clients (CORS).",
    )
    cors_allow_methods: tuple[str, ...] = Field(
        default=("GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"),
    )
    cors_allow_headers: tuple[str, ...] = Field(
        default=("Origin", "Content-Length", "Content-Type", "Authorization"),
    )
    active_team_window_hours: int = Field(
        default=24,
        ge=1,
        description="Trailing window used to count a team as active in statistics.",
    )
    strict_assignment_updates: bool = Field(
        default=False,
        description="Reject assignment updates that match no row for the team instead of ignoring them.",
    )
    sqlite_busy_timeout_seconds: float = Field(default=30.0, ge=0.0)
    log_level: str = Field(default="INFO")

    @field_validator("database_path", "placemark_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", "cors_allow_methods", "cors_allow_headers", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Any) -> str:
        return str(value or "INFO").strip().upper()


settings = Settings()
