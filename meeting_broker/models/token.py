"""
Domain models for per-branch OAuth token persistence.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class TokenGrant(BaseModel):
    """Token pair returned by the Zoom token endpoint."""

    access_token: str
    refresh_token: Optional[str] = None
    expires_in: int = Field(..., description="Lifetime of the access token in seconds.")
    token_type: Optional[str] = None
    scope: Optional[str] = None


class TokenRecord(BaseModel):
    """The single token record stored for a branch."""

    branch: str = Field(..., description="Branch identifier, unique per record.")
    access_token: str
    refresh_token: str
    expires_at: int = Field(
        ..., description="Absolute expiry instant in epoch milliseconds."
    )

    @classmethod
    def from_grant(
        cls,
        branch: str,
        grant: TokenGrant,
        *,
        issued_at_ms: int,
        previous_refresh_token: Optional[str] = None,
    ) -> "TokenRecord":
        """Build a record whose expiry is anchored to the instant the grant was minted."""
        refresh_token = grant.refresh_token or previous_refresh_token
        if not refresh_token:
            raise ValueError("Token grant carries no refresh token to store.")
        return cls(
            branch=branch,
            access_token=grant.access_token,
            refresh_token=refresh_token,
            expires_at=issued_at_ms + grant.expires_in * 1000,
        )

    def is_fresh(self, now_ms: int, margin_ms: int) -> bool:
        return now_ms < self.expires_at - margin_ms

    def expires_at_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.expires_at / 1000, tz=timezone.utc)

    def to_item(self) -> Dict[str, Any]:
        return self.model_dump()


__all__ = ["TokenGrant", "TokenRecord"]
