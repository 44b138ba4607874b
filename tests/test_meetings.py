from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from meeting_broker.clients.token_store import InMemoryTokenStore
from meeting_broker.clients.zoom_meetings import ZoomMeetingsClient
from meeting_broker.core.errors import (
    BranchNotAuthorizedError,
    InvalidStartTimeError,
    MeetingRequestError,
)
from meeting_broker.models.token import TokenRecord
from meeting_broker.services.credentials import CredentialResolver
from meeting_broker.services.meetings import (
    MeetingService,
    build_meeting_payload,
    normalize_start_time,
)
from meeting_broker.services.zoom_tokens import ZoomTokenService, utc_now_ms


def test_instant_meeting_payload() -> None:
    assert build_meeting_payload("A") == {"topic": "Meeting for A", "type": 1}


def test_instant_meeting_uses_given_topic() -> None:
    payload = build_meeting_payload("A", topic="Stand-up")
    assert payload == {"topic": "Stand-up", "type": 1}


def test_scheduled_meeting_payload() -> None:
    payload = build_meeting_payload("B", start_time="2025-01-01T10:00:00Z")

    assert payload["type"] == 2
    assert payload["start_time"] == "2025-01-01T10:00:00Z"
    assert payload["duration"] == 60
    assert payload["topic"] == "Scheduled Meeting for Branch B"
    assert payload["settings"] == {"join_before_host": True}


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2025-01-01T10:00:00Z", "2025-01-01T10:00:00Z"),
        ("2025-01-01T10:00:00.000Z", "2025-01-01T10:00:00Z"),
        ("2025-01-01T15:30:00+05:30", "2025-01-01T10:00:00Z"),
        ("2025-01-01T10:00:00", "2025-01-01T10:00:00Z"),
        (datetime(2025, 1, 1, 5, 0, tzinfo=timezone(timedelta(hours=-5))), "2025-01-01T10:00:00Z"),
    ],
)
def test_start_time_is_normalized_to_utc(value, expected) -> None:
    assert normalize_start_time(value) == expected


@pytest.mark.parametrize("value", ["tomorrow at ten", "", "2025-13-01T10:00:00Z"])
def test_invalid_start_time_is_rejected(value) -> None:
    with pytest.raises(InvalidStartTimeError):
        normalize_start_time(value)


def _meeting_service(zoom_settings, handler, store: InMemoryTokenStore) -> MeetingService:
    tokens = ZoomTokenService(
        store=store,
        oauth_client=None,  # type: ignore[arg-type]
        credential_resolver=CredentialResolver(zoom_settings),
    )
    meetings = ZoomMeetingsClient(zoom_settings, transport=httpx.MockTransport(handler))
    return MeetingService(token_service=tokens, meetings_client=meetings)


def _fresh_record(branch: str) -> TokenRecord:
    return TokenRecord(
        branch=branch,
        access_token="fresh-token",
        refresh_token="r1",
        expires_at=utc_now_ms() + 3_600_000,
    )


@pytest.mark.asyncio
async def test_create_meeting_uses_fresh_token(zoom_settings) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            201,
            json={
                "id": 123,
                "join_url": "https://zoom.us/j/123",
                "start_time": "2025-01-01T10:00:00Z",
            },
        )

    store = InMemoryTokenStore()
    store.upsert(_fresh_record("A"))
    service = _meeting_service(zoom_settings, handler, store)

    result = await service.create_meeting("A", start_time="2025-01-01T10:00:00Z")

    assert result.join_url == "https://zoom.us/j/123"
    assert result.meeting_id == 123
    assert seen[0].headers["authorization"] == "Bearer fresh-token"
    sent = json.loads(seen[0].content)
    assert sent["type"] == 2
    assert sent["duration"] == 60


@pytest.mark.asyncio
async def test_create_meeting_for_unauthorized_branch_makes_no_call(zoom_settings) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json={"join_url": "https://zoom.us/j/1"})

    service = _meeting_service(zoom_settings, handler, InMemoryTokenStore())

    with pytest.raises(BranchNotAuthorizedError):
        await service.create_meeting("Z")
    assert seen == []


@pytest.mark.asyncio
async def test_invalid_start_time_fails_before_token_lookup(zoom_settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:  # pragma: no cover
        raise AssertionError("no request expected")

    service = _meeting_service(zoom_settings, handler, InMemoryTokenStore())

    with pytest.raises(InvalidStartTimeError):
        await service.create_meeting("Z", start_time="not-a-date")


@pytest.mark.asyncio
async def test_missing_join_url_is_a_meeting_failure(zoom_settings) -> None:
    body = {"code": 3001, "message": "Meeting does not exist."}

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=body)

    store = InMemoryTokenStore()
    store.upsert(_fresh_record("A"))
    service = _meeting_service(zoom_settings, handler, store)

    with pytest.raises(MeetingRequestError) as excinfo:
        await service.create_meeting("A")
    assert excinfo.value.payload == body
