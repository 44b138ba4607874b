"""
Build Zoom meeting requests and submit them with a fresh branch token.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from meeting_broker.clients.zoom_meetings import ZoomMeetingsClient
from meeting_broker.core.errors import InvalidStartTimeError
from meeting_broker.schemas.meeting import MeetingResult
from meeting_broker.services.zoom_tokens import ZoomTokenService

logger = logging.getLogger(__name__)

INSTANT_MEETING = 1
SCHEDULED_MEETING = 2
SCHEDULED_DURATION_MINUTES = 60

StartTime = Union[str, datetime]


def normalize_start_time(value: StartTime) -> str:
    """Render a start time as a UTC ISO-8601 timestamp (``YYYY-MM-DDTHH:MM:SSZ``).

    Naive values are read as UTC. Raises ``InvalidStartTimeError`` for empty or
    unparsable strings.
    """
    if isinstance(value, datetime):
        moment = value
    else:
        text = value.strip()
        if not text:
            raise InvalidStartTimeError("start_time must not be empty.")
        if text.endswith(("Z", "z")):
            text = f"{text[:-1]}+00:00"
        try:
            moment = datetime.fromisoformat(text)
        except ValueError as exc:
            raise InvalidStartTimeError(
                f"Invalid ISO-8601 start_time: {value!r}"
            ) from exc

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def build_meeting_payload(
    branch: str,
    start_time: Optional[StartTime] = None,
    topic: Optional[str] = None,
) -> Dict[str, Any]:
    """Instant meeting when ``start_time`` is absent, otherwise a scheduled one."""
    if start_time is None:
        return {
            "topic": topic or f"Meeting for {branch}",
            "type": INSTANT_MEETING,
        }

    return {
        "topic": topic or f"Scheduled Meeting for Branch {branch}",
        "type": SCHEDULED_MEETING,
        "start_time": normalize_start_time(start_time),
        "duration": SCHEDULED_DURATION_MINUTES,
        "settings": {"join_before_host": True},
    }


class MeetingService:
    """Create meetings for a branch using its Zoom account."""

    def __init__(
        self, token_service: ZoomTokenService, meetings_client: ZoomMeetingsClient
    ) -> None:
        self._tokens = token_service
        self._meetings = meetings_client

    async def create_meeting(
        self,
        branch: str,
        *,
        start_time: Optional[StartTime] = None,
        topic: Optional[str] = None,
    ) -> MeetingResult:
        # Build first so a malformed start time fails before any token refresh.
        payload = build_meeting_payload(branch, start_time=start_time, topic=topic)
        record = await self._tokens.ensure_fresh(branch)
        meeting = await self._meetings.create_meeting(record.access_token, payload)
        logger.info("Created Zoom meeting %s for branch %s", meeting.get("id"), branch)
        return MeetingResult(
            join_url=meeting["join_url"],
            meeting_id=meeting.get("id"),
            start_time=meeting.get("start_time"),
        )


__all__ = [
    "INSTANT_MEETING",
    "MeetingService",
    "SCHEDULED_DURATION_MINUTES",
    "SCHEDULED_MEETING",
    "build_meeting_payload",
    "normalize_start_time",
]
