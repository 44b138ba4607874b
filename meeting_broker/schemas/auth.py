"""Schemas related to OAuth flows."""

from __future__ import annotations

from pydantic import BaseModel, Field


class AuthorizationUrlResponse(BaseModel):
    """Zoom consent URL issued for a branch."""

    url: str = Field(..., description="Zoom authorization URL carrying the branch as state.")


__all__ = ["AuthorizationUrlResponse"]
