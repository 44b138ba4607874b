"""Service layer exports."""

from .credentials import CredentialResolver
from .meetings import MeetingService, build_meeting_payload
from .zoom_tokens import ZoomTokenService

__all__ = [
    "CredentialResolver",
    "MeetingService",
    "ZoomTokenService",
    "build_meeting_payload",
]
