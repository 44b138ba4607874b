"""
Factory functions to provide shared clients and services as FastAPI dependencies.
"""

from datetime import timedelta
from functools import lru_cache

from meeting_broker.clients import (
    DynamoDBTokenStore,
    InMemoryTokenStore,
    JSONFileTokenStore,
    SQLiteTokenStore,
    TokenStore,
    ZoomMeetingsClient,
    ZoomOAuthClient,
)
from meeting_broker.core.config import AppSettings, StorageSettings, get_settings
from meeting_broker.services import CredentialResolver, MeetingService, ZoomTokenService


@lru_cache()
def _settings() -> AppSettings:
    """Internal helper to cache settings for client factories."""
    return get_settings()


def get_app_settings() -> AppSettings:
    """FastAPI dependency returning application settings."""
    return _settings()


def build_token_store(settings: StorageSettings) -> TokenStore:
    """Instantiate the token store backend named in configuration."""
    if settings.backend == "memory":
        return InMemoryTokenStore()
    if settings.backend == "file":
        return JSONFileTokenStore(settings.path)
    if settings.backend == "dynamodb":
        return DynamoDBTokenStore(settings)
    return SQLiteTokenStore(settings.path)


@lru_cache()
def get_token_store() -> TokenStore:
    """Provide the shared token store."""
    return build_token_store(_settings().storage)


@lru_cache()
def get_credential_resolver() -> CredentialResolver:
    """Provide the branch credential resolver."""
    return CredentialResolver(_settings().zoom)


@lru_cache()
def get_zoom_oauth_client() -> ZoomOAuthClient:
    """Create a singleton Zoom OAuth client."""
    return ZoomOAuthClient(_settings().zoom)


@lru_cache()
def get_zoom_meetings_client() -> ZoomMeetingsClient:
    """Provide Zoom meetings client instance."""
    return ZoomMeetingsClient(_settings().zoom)


@lru_cache()
def get_zoom_token_service() -> ZoomTokenService:
    """Provide helper for managing per-branch Zoom OAuth tokens."""
    settings = _settings()
    return ZoomTokenService(
        store=get_token_store(),
        oauth_client=get_zoom_oauth_client(),
        credential_resolver=get_credential_resolver(),
        refresh_margin=timedelta(seconds=settings.token_refresh_margin_seconds),
    )


def get_meeting_service() -> MeetingService:
    """Build a meeting service using the shared token service."""
    return MeetingService(
        token_service=get_zoom_token_service(),
        meetings_client=get_zoom_meetings_client(),
    )


__all__ = [
    "build_token_store",
    "get_app_settings",
    "get_credential_resolver",
    "get_meeting_service",
    "get_token_store",
    "get_zoom_meetings_client",
    "get_zoom_oauth_client",
    "get_zoom_token_service",
]
