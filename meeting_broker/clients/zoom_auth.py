"""
Zoom OAuth utilities.

These helpers perform the authorization-code and refresh-token grants against
the Zoom token endpoint, authenticating with the branch's client credentials.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Type

import httpx
from fastapi import status
from pydantic import ValidationError

from meeting_broker.core.config import ZoomSettings
from meeting_broker.core.errors import (
    CodeExchangeFailedError,
    OAuthGrantError,
    TokenRefreshFailedError,
)
from meeting_broker.models.credentials import BranchCredentials
from meeting_broker.models.token import TokenGrant
from meeting_broker.utils.http import response_payload

logger = logging.getLogger(__name__)


class ZoomOAuthClient:
    """Exchange authorization codes and refresh tokens with Zoom."""

    def __init__(
        self,
        settings: ZoomSettings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._token_url = settings.token_url
        self._timeout = settings.http_timeout_seconds
        self._transport = transport

    async def exchange_authorization_code(
        self, credentials: BranchCredentials, code: str
    ) -> TokenGrant:
        """Exchange a one-time authorization code for an access/refresh token pair."""
        payload = {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": credentials.redirect_uri,
        }
        grant = await self._post_grant(credentials, payload, CodeExchangeFailedError)
        if not grant.refresh_token:
            raise CodeExchangeFailedError(
                "Zoom returned no refresh token for the authorization code.",
                payload=grant.model_dump(exclude={"access_token"}),
            )
        return grant

    async def refresh_token(
        self, credentials: BranchCredentials, refresh_token: str
    ) -> TokenGrant:
        """Mint a new access token from a stored refresh token."""
        payload = {
            "grant_type": "refresh_token",
            "refresh_token": refresh_token,
        }
        return await self._post_grant(credentials, payload, TokenRefreshFailedError)

    async def _post_grant(
        self,
        credentials: BranchCredentials,
        form: Dict[str, str],
        error_cls: Type[OAuthGrantError],
    ) -> TokenGrant:
        grant_type = form["grant_type"]
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self._token_url,
                    data=form,
                    auth=httpx.BasicAuth(
                        credentials.client_id, credentials.client_secret
                    ),
                )
        except httpx.HTTPError as exc:
            logger.warning(
                "Zoom %s grant for branch %s failed to reach the token endpoint: %s",
                grant_type,
                credentials.branch,
                exc,
            )
            raise error_cls(
                f"Zoom token endpoint unreachable: {exc}",
                payload={"message": str(exc)},
            ) from exc

        payload = response_payload(response)
        if response.status_code != status.HTTP_200_OK or not payload.get(
            "access_token"
        ):
            logger.warning(
                "Zoom rejected %s grant for branch %s (status %s)",
                grant_type,
                credentials.branch,
                response.status_code,
            )
            raise error_cls(
                f"Zoom {grant_type} grant returned no access token.",
                payload=payload,
                status_code=response.status_code,
            )

        try:
            return TokenGrant.model_validate(payload)
        except ValidationError as exc:
            raise error_cls(
                "Incomplete token payload returned from Zoom.",
                payload={k: v for k, v in payload.items() if "token" not in k},
                status_code=response.status_code,
            ) from exc


__all__ = ["ZoomOAuthClient"]
