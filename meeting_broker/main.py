"""
FastAPI application entrypoint for the branch meeting broker.
"""

from __future__ import annotations

from fastapi import FastAPI

from meeting_broker.api.routes import router as api_router
from meeting_broker.core.config import get_settings
from meeting_broker.core.logging import configure_logging


def create_app() -> FastAPI:
    """Factory for the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Branch Meeting Broker",
        version="0.1.0",
        description="Per-branch Zoom OAuth token broker and meeting-creation proxy.",
    )
    app.include_router(api_router)
    return app


app = create_app()

__all__ = ["app", "create_app"]
