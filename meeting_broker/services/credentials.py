"""
Resolve which Zoom OAuth app serves a branch.

Branches without their own credentials share the default branch's app. The
fallback is intentional and every use of it is logged.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Tuple
from urllib.parse import urlencode

from meeting_broker.core.config import ZoomSettings
from meeting_broker.models.credentials import BranchCredentials

logger = logging.getLogger(__name__)


class CredentialResolver:
    """Map branch identifiers to client credentials from static configuration."""

    def __init__(self, settings: ZoomSettings) -> None:
        self._settings = settings
        self._redirect_uri = settings.redirect_uri
        self._table = self._build_table(settings)

    @staticmethod
    def _build_table(settings: ZoomSettings) -> Dict[str, Tuple[str, str]]:
        table: Dict[str, Tuple[str, str]] = {
            settings.default_branch: (settings.client_id, settings.client_secret),
        }
        if settings.secondary_client_id and settings.secondary_client_secret:
            table[settings.secondary_branch] = (
                settings.secondary_client_id,
                settings.secondary_client_secret,
            )
        for branch, creds in settings.branch_credentials.items():
            table[branch] = (creds.client_id, creds.client_secret)
        return table

    @property
    def default_branch(self) -> str:
        return self._settings.default_branch

    def known_branches(self) -> List[str]:
        return sorted(self._table)

    def resolve(self, branch: str) -> BranchCredentials:
        """Return the credentials for ``branch``, falling back to the default app."""
        entry = self._table.get(branch)
        if entry is not None:
            client_id, client_secret = entry
            return BranchCredentials(
                branch=branch,
                client_id=client_id,
                client_secret=client_secret,
                redirect_uri=self._redirect_uri,
            )

        logger.warning(
            "No Zoom credentials configured for branch %r; using the default "
            "branch %r credentials",
            branch,
            self.default_branch,
        )
        client_id, client_secret = self._table[self.default_branch]
        return BranchCredentials(
            branch=branch,
            client_id=client_id,
            client_secret=client_secret,
            redirect_uri=self._redirect_uri,
            is_fallback=True,
        )

    def build_authorization_url(self, branch: str) -> str:
        """Construct the Zoom consent URL, carrying the branch as OAuth state."""
        credentials = self.resolve(branch)
        params = {
            "response_type": "code",
            "client_id": credentials.client_id,
            "redirect_uri": credentials.redirect_uri,
            "state": branch,
        }
        return f"{self._settings.authorize_url}?{urlencode(params)}"


__all__ = ["CredentialResolver"]
