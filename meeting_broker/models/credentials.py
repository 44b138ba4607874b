"""Resolved OAuth client credentials for a branch."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BranchCredentials:
    """Client id/secret and redirect target used for a branch's OAuth grants."""

    branch: str
    client_id: str
    client_secret: str
    redirect_uri: str
    is_fallback: bool = False

    def __repr__(self) -> str:
        return (
            f"BranchCredentials(branch={self.branch!r}, client_id={self.client_id!r}, "
            f"redirect_uri={self.redirect_uri!r}, is_fallback={self.is_fallback})"
        )


__all__ = ["BranchCredentials"]
