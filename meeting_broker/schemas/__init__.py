"""Public schema exports."""

from .auth import AuthorizationUrlResponse
from .meeting import (
    MeetingRequest,
    MeetingResponse,
    MeetingResult,
    ScheduleMeetingRequest,
)

__all__ = [
    "AuthorizationUrlResponse",
    "MeetingRequest",
    "MeetingResponse",
    "MeetingResult",
    "ScheduleMeetingRequest",
]
