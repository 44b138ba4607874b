"""
Helpers for obtaining and refreshing per-branch Zoom OAuth tokens.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from typing import AsyncIterator, Callable, Dict, Optional

from meeting_broker.clients.token_store import TokenStore
from meeting_broker.clients.zoom_auth import ZoomOAuthClient
from meeting_broker.core.errors import BranchNotAuthorizedError
from meeting_broker.models.token import TokenRecord
from meeting_broker.services.credentials import CredentialResolver

logger = logging.getLogger(__name__)

Clock = Callable[[], int]


def utc_now_ms() -> int:
    """Current UTC time in epoch milliseconds."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)


class ZoomTokenService:
    """Keeps one branch's token record usable, refreshing it when it goes stale."""

    DEFAULT_REFRESH_MARGIN = timedelta(seconds=60)

    def __init__(
        self,
        store: TokenStore,
        oauth_client: ZoomOAuthClient,
        credential_resolver: CredentialResolver,
        *,
        refresh_margin: timedelta = DEFAULT_REFRESH_MARGIN,
        clock: Clock = utc_now_ms,
    ) -> None:
        self._store = store
        self._oauth = oauth_client
        self._credentials = credential_resolver
        self._margin_ms = int(refresh_margin.total_seconds() * 1000)
        self._clock = clock
        self._locks: Dict[str, asyncio.Lock] = {}
        self._lock_users: Dict[str, int] = {}

    @asynccontextmanager
    async def _branch_lock(self, branch: str) -> AsyncIterator[None]:
        # Entries live only while a caller holds or awaits the branch lock.
        lock = self._locks.setdefault(branch, asyncio.Lock())
        self._lock_users[branch] = self._lock_users.get(branch, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[branch] -= 1
            if not self._lock_users[branch]:
                del self._lock_users[branch]
                del self._locks[branch]

    def get_record(self, branch: str) -> Optional[TokenRecord]:
        """Return the stored record without checking or refreshing it."""
        return self._store.get(branch)

    async def exchange_code(self, branch: str, code: str) -> TokenRecord:
        """
        Complete the authorization-code grant and store the branch's first token.

        Nothing is written when Zoom rejects the code.
        """
        credentials = self._credentials.resolve(branch)
        issued_at = self._clock()
        grant = await self._oauth.exchange_authorization_code(credentials, code)
        record = TokenRecord.from_grant(branch, grant, issued_at_ms=issued_at)

        async with self._branch_lock(branch):
            self._store.upsert(record)
        logger.info("Stored Zoom tokens for branch %s", branch)
        return record

    async def ensure_fresh(self, branch: str) -> TokenRecord:
        """
        Return a record whose access token is safe to use right now.

        Raises ``BranchNotAuthorizedError`` when the branch has never been
        authorized and ``TokenRefreshFailedError`` when Zoom refuses the refresh,
        in which case the stale record is left as it was.
        """
        async with self._branch_lock(branch):
            record = self._store.get(branch)
            if record is None:
                raise BranchNotAuthorizedError(branch)

            now = self._clock()
            if record.is_fresh(now, self._margin_ms):
                return record

            logger.info("Refreshing stale Zoom token for branch %s", branch)
            credentials = self._credentials.resolve(branch)
            grant = await self._oauth.refresh_token(credentials, record.refresh_token)
            refreshed = TokenRecord.from_grant(
                branch,
                grant,
                issued_at_ms=now,
                previous_refresh_token=record.refresh_token,
            )
            self._store.upsert(refreshed)
            logger.info(
                "Refreshed Zoom token for branch %s (refresh token %s)",
                branch,
                "rotated" if grant.refresh_token else "kept",
            )
            return refreshed


__all__ = ["ZoomTokenService", "utc_now_ms"]
