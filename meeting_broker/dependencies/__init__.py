"""Expose dependency helpers for FastAPI routers."""

from .clients import (
    build_token_store,
    get_app_settings,
    get_credential_resolver,
    get_meeting_service,
    get_token_store,
    get_zoom_meetings_client,
    get_zoom_oauth_client,
    get_zoom_token_service,
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
