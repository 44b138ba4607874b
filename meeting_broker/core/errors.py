"""
Failure types raised by the token and meeting services.

Every error is scoped to a single branch request; none of them is fatal to the
process.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class ZoomBrokerError(Exception):
    """Base class for branch-scoped broker failures."""


class BranchNotAuthorizedError(ZoomBrokerError):
    """Raised when no token record exists for a branch."""

    def __init__(self, branch: str) -> None:
        super().__init__(
            f'No token for branch "{branch}". Authenticate Zoom for this branch first.'
        )
        self.branch = branch


class OAuthGrantError(ZoomBrokerError):
    """Raised when the Zoom token endpoint rejects a grant."""

    def __init__(
        self,
        message: str,
        *,
        payload: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.payload: Dict[str, Any] = payload or {}
        self.status_code = status_code


class CodeExchangeFailedError(OAuthGrantError):
    """The authorization-code grant did not yield a token pair."""


class TokenRefreshFailedError(OAuthGrantError):
    """The refresh-token grant did not yield a new access token."""


class InvalidStartTimeError(ZoomBrokerError, ValueError):
    """A meeting start time that is empty or not ISO-8601."""


class TokenStoreError(ZoomBrokerError):
    """The token store holds data that cannot be read back as token records."""


class MeetingRequestError(ZoomBrokerError):
    """Raised when the meetings endpoint fails after a valid token was obtained."""

    def __init__(
        self,
        message: str,
        *,
        payload: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.payload: Dict[str, Any] = payload or {}
        self.status_code = status_code


__all__ = [
    "BranchNotAuthorizedError",
    "CodeExchangeFailedError",
    "InvalidStartTimeError",
    "MeetingRequestError",
    "OAuthGrantError",
    "TokenRefreshFailedError",
    "TokenStoreError",
    "ZoomBrokerError",
]
