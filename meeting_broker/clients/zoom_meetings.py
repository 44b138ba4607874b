"""Thin wrapper around the Zoom "create meeting" endpoint."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from meeting_broker.core.config import ZoomSettings
from meeting_broker.core.errors import MeetingRequestError
from meeting_broker.utils.http import response_payload

logger = logging.getLogger(__name__)


class ZoomMeetingsClient:
    """Create meetings on behalf of the user that owns an access token."""

    def __init__(
        self,
        settings: ZoomSettings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._meetings_url = f"{settings.api_base_url.rstrip('/')}/users/me/meetings"
        self._timeout = settings.http_timeout_seconds
        self._transport = transport

    async def create_meeting(
        self, access_token: str, payload: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Submit a meeting request and return Zoom's meeting object."""
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self._meetings_url,
                    json=payload,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
        except httpx.HTTPError as exc:
            raise MeetingRequestError(
                f"Zoom meetings endpoint unreachable: {exc}",
                payload={"message": str(exc)},
            ) from exc

        data = response_payload(response)
        if response.is_error or not data.get("join_url"):
            logger.warning(
                "Zoom meeting creation failed (status %s): %s",
                response.status_code,
                data,
            )
            raise MeetingRequestError(
                "Zoom API failed",
                payload=data,
                status_code=response.status_code,
            )
        return data


__all__ = ["ZoomMeetingsClient"]
