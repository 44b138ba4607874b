"""Expose constructed client wrappers."""

from .dynamodb import DynamoDBTokenStore
from .sqlite_store import SQLiteTokenStore
from .token_store import InMemoryTokenStore, JSONFileTokenStore, TokenStore
from .zoom_auth import ZoomOAuthClient
from .zoom_meetings import ZoomMeetingsClient

__all__ = [
    "DynamoDBTokenStore",
    "InMemoryTokenStore",
    "JSONFileTokenStore",
    "SQLiteTokenStore",
    "TokenStore",
    "ZoomMeetingsClient",
    "ZoomOAuthClient",
]
