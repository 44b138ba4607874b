"""Pytest configuration shared across the suite."""

try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for rootdir-relative imports
    import _bootstrap  # type: ignore # noqa: F401

import pytest

from meeting_broker.core.config import ZoomSettings


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO-powered tests to run against asyncio backend only."""
    return "asyncio"


@pytest.fixture
def zoom_settings() -> ZoomSettings:
    return ZoomSettings(
        ZOOM_CLIENT_ID="client-a",
        ZOOM_CLIENT_SECRET="secret-a",
        ZOOM_REDIRECT_URI="https://example.com/zoom/callback",
        ZOOM2_CLIENT_ID="client-b",
        ZOOM2_CLIENT_SECRET="secret-b",
        ZOOM_TOKEN_URL="https://zoom.test/oauth/token",
        ZOOM_API_BASE_URL="https://api.zoom.test/v2",
    )
