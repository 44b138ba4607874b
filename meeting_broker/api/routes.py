"""
FastAPI routes for the branch meeting broker.
"""

from __future__ import annotations

import html
import logging
from http import HTTPStatus
from typing import Annotated, Any, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse

from meeting_broker.core.errors import (
    BranchNotAuthorizedError,
    CodeExchangeFailedError,
    InvalidStartTimeError,
    MeetingRequestError,
    TokenRefreshFailedError,
    TokenStoreError,
)
from meeting_broker.dependencies import (
    get_app_settings,
    get_credential_resolver,
    get_meeting_service,
    get_zoom_token_service,
)
from meeting_broker.schemas import (
    AuthorizationUrlResponse,
    MeetingRequest,
    MeetingResponse,
    ScheduleMeetingRequest,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def _error(status_code: int, message: str, details: Any = None) -> JSONResponse:
    content: dict = {"error": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def _wants_html(request: Request) -> bool:
    return "text/html" in request.headers.get("accept", "").lower()


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck(
    settings: Annotated[Any, Depends(get_app_settings)],
) -> dict:
    """Simple health endpoint for monitoring."""
    return {"status": "ok", "environment": settings.environment}


@router.get("/auth-url", response_model=AuthorizationUrlResponse)
async def get_authorization_url(
    request: Request,
    resolver: Annotated[Any, Depends(get_credential_resolver)],
    branch: Optional[str] = Query(
        default=None, description="Branch to connect to Zoom."
    ),
    redirect: bool = Query(
        default=False,
        description="When true, respond with a redirect to the Zoom consent screen.",
    ),
):
    """Generate the Zoom consent URL for a branch."""
    if not branch or not branch.strip():
        return _error(HTTPStatus.BAD_REQUEST, "Missing 'branch'")

    url = resolver.build_authorization_url(branch)
    if redirect or _wants_html(request):
        return RedirectResponse(url=url, status_code=HTTPStatus.TEMPORARY_REDIRECT)
    return AuthorizationUrlResponse(url=url)


@router.get("/zoom/auth/{branch}")
async def redirect_to_zoom_consent(
    branch: str,
    resolver: Annotated[Any, Depends(get_credential_resolver)],
) -> RedirectResponse:
    """Send the browser straight to the Zoom consent screen for a branch."""
    url = resolver.build_authorization_url(branch)
    return RedirectResponse(url=url, status_code=HTTPStatus.TEMPORARY_REDIRECT)


@router.get("/zoom/callback")
async def handle_zoom_oauth_callback(
    token_service: Annotated[Any, Depends(get_zoom_token_service)],
    code: Optional[str] = Query(default=None, description="Authorization code."),
    state: Optional[str] = Query(
        default=None, description="Branch identifier passed through OAuth state."
    ),
):
    """Complete the OAuth exchange and store the branch's tokens."""
    if not code or not state:
        return HTMLResponse(
            "Missing code or branch", status_code=HTTPStatus.BAD_REQUEST
        )

    branch = state
    try:
        await token_service.exchange_code(branch, code)
    except CodeExchangeFailedError as exc:
        logger.warning("Token exchange failed for branch %s: %s", branch, exc.payload)
        return JSONResponse(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR, content=exc.payload
        )

    safe_branch = html.escape(branch)
    return HTMLResponse(
        f'<h2>Zoom connected for branch "{safe_branch}"</h2>'
        "<p>You can close this window.</p>"
    )


async def _create_meeting_response(
    meeting_service: Any,
    branch: Optional[str],
    start_time: Optional[str],
    topic: Optional[str],
):
    if not branch:
        return _error(HTTPStatus.BAD_REQUEST, "Missing 'branch' in request body")

    try:
        result = await meeting_service.create_meeting(
            branch, start_time=start_time, topic=topic
        )
    except InvalidStartTimeError as exc:
        return _error(HTTPStatus.BAD_REQUEST, str(exc))
    except BranchNotAuthorizedError as exc:
        return _error(HTTPStatus.UNAUTHORIZED, str(exc))
    except TokenRefreshFailedError as exc:
        logger.warning("Token refresh failed for branch %s: %s", branch, exc.payload)
        return _error(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc), exc.payload)
    except MeetingRequestError as exc:
        return _error(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc), exc.payload)
    except TokenStoreError:
        logger.exception("Token store read failed for branch %s", branch)
        return _error(HTTPStatus.INTERNAL_SERVER_ERROR, "Token store unavailable")

    return MeetingResponse(join_url=result.join_url)


@router.post("/create-meeting", response_model=MeetingResponse)
async def create_meeting(
    payload: MeetingRequest,
    meeting_service: Annotated[Any, Depends(get_meeting_service)],
):
    """Create an instant meeting, or a scheduled one when ``start_time`` is given."""
    return await _create_meeting_response(
        meeting_service, payload.branch, payload.start_time, payload.topic
    )


@router.post("/schedule-meeting", response_model=MeetingResponse)
async def schedule_meeting(
    payload: ScheduleMeetingRequest,
    meeting_service: Annotated[Any, Depends(get_meeting_service)],
):
    """Create a scheduled meeting; both branch and datetime are required."""
    if not payload.branch or not payload.scheduled_for:
        return _error(HTTPStatus.BAD_REQUEST, "Missing branch or datetime")
    return await _create_meeting_response(
        meeting_service, payload.branch, payload.scheduled_for, payload.topic
    )


@router.post("/create-meeting-a", response_model=MeetingResponse)
async def create_meeting_for_branch_a(
    meeting_service: Annotated[Any, Depends(get_meeting_service)],
):
    """Create an instant meeting on branch A's Zoom account."""
    return await _create_meeting_response(meeting_service, "A", None, None)


@router.post("/create-meeting-b", response_model=MeetingResponse)
async def create_meeting_for_branch_b(
    meeting_service: Annotated[Any, Depends(get_meeting_service)],
):
    """Create an instant meeting on branch B's Zoom account."""
    return await _create_meeting_response(meeting_service, "B", None, None)


@router.get("/tokens/{branch}")
async def inspect_token(
    branch: str,
    token_service: Annotated[Any, Depends(get_zoom_token_service)],
):
    """Return the raw token record stored for a branch."""
    try:
        record = token_service.get_record(branch)
    except TokenStoreError:
        logger.exception("Token store read failed for branch %s", branch)
        return _error(HTTPStatus.INTERNAL_SERVER_ERROR, "Token store unavailable")
    if record is None:
        return _error(HTTPStatus.NOT_FOUND, "No token for this branch")
    return record.to_item()


__all__ = ["router"]
