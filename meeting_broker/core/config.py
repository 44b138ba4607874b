"""
Application configuration models and helpers.

Centralizes settings management so the FastAPI app, the token services and the
operator scripts share a consistent configuration surface.
"""

from functools import lru_cache
from pathlib import Path
from typing import Dict, Literal, Optional

import os

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_env_file(path: str = ".env") -> None:
    """Best-effort load key=value pairs from a .env file without extra deps."""
    env_path = Path(path)
    if not env_path.exists():
        return
    for raw_line in env_path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if not key or key in os.environ:
            continue
        cleaned = value.strip().strip('"').strip("'")
        os.environ[key] = cleaned


_load_env_file()


class BranchCredentialConfig(BaseModel):
    """Client id/secret pair registered for a single branch."""

    client_id: str
    client_secret: str


class ZoomSettings(BaseSettings):
    """Configuration required for interacting with the Zoom OAuth and REST APIs."""

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    client_id: str = Field(..., validation_alias="ZOOM_CLIENT_ID")
    client_secret: str = Field(..., validation_alias="ZOOM_CLIENT_SECRET")
    redirect_uri: str = Field(..., validation_alias="ZOOM_REDIRECT_URI")
    default_branch: str = Field(
        "A",
        validation_alias="ZOOM_DEFAULT_BRANCH",
        description="Branch that owns the default client credentials.",
    )
    secondary_client_id: Optional[str] = Field(
        None, validation_alias="ZOOM2_CLIENT_ID"
    )
    secondary_client_secret: Optional[str] = Field(
        None, validation_alias="ZOOM2_CLIENT_SECRET"
    )
    secondary_branch: str = Field("B", validation_alias="ZOOM2_BRANCH")
    branch_credentials: Dict[str, BranchCredentialConfig] = Field(
        default_factory=dict,
        validation_alias="ZOOM_BRANCH_CREDENTIALS",
        description=(
            "JSON object mapping additional branches to their client credentials."
        ),
    )
    authorize_url: str = Field(
        "https://zoom.us/oauth/authorize", validation_alias="ZOOM_AUTHORIZE_URL"
    )
    token_url: str = Field(
        "https://zoom.us/oauth/token", validation_alias="ZOOM_TOKEN_URL"
    )
    api_base_url: str = Field(
        "https://api.zoom.us/v2", validation_alias="ZOOM_API_BASE_URL"
    )
    http_timeout_seconds: float = Field(10.0, validation_alias="ZOOM_HTTP_TIMEOUT")


class StorageSettings(BaseSettings):
    """Where per-branch token records are persisted."""

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    backend: Literal["memory", "file", "sqlite", "dynamodb"] = Field(
        "sqlite", validation_alias="TOKEN_STORE_BACKEND"
    )
    path: str = Field(
        "data/tokens.db",
        validation_alias="TOKEN_STORE_PATH",
        description="SQLite database or JSON file path for local backends.",
    )
    dynamodb_table_name: Optional[str] = Field(
        None, validation_alias="DYNAMODB_TABLE_NAME"
    )
    region_name: str = Field("us-east-1", validation_alias="AWS_REGION")


class AppSettings(BaseSettings):
    """Root settings object for the FastAPI application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    environment: str = Field("development", validation_alias="APP_ENV")
    log_level: str = Field("INFO", validation_alias="APP_LOG_LEVEL")
    host: str = Field("0.0.0.0", validation_alias="HOST")
    port: int = Field(3000, validation_alias="PORT")
    token_refresh_margin_seconds: int = Field(
        60,
        validation_alias="TOKEN_REFRESH_MARGIN_SECONDS",
        description="Tokens expiring within this window are refreshed before use.",
    )
    zoom: ZoomSettings = Field(default_factory=ZoomSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()  # type: ignore[call-arg]


__all__ = [
    "AppSettings",
    "BranchCredentialConfig",
    "StorageSettings",
    "ZoomSettings",
    "get_settings",
]
