"""Schemas for meeting creation requests and responses."""

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class MeetingRequest(BaseModel):
    """Body accepted by the create-meeting endpoint."""

    branch: Optional[str] = Field(
        None, description="Branch whose Zoom account hosts the meeting."
    )
    start_time: Optional[str] = Field(
        None,
        description="ISO-8601 start time; omit for an instant meeting.",
    )
    topic: Optional[str] = Field(None, description="Optional meeting topic.")


class ScheduleMeetingRequest(BaseModel):
    """Body accepted by the schedule-meeting endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    branch: Optional[str] = None
    scheduled_for: Optional[str] = Field(
        None,
        alias="datetime",
        description="ISO-8601 start time of the scheduled meeting.",
    )
    topic: Optional[str] = None


class MeetingResult(BaseModel):
    """Outcome of a successful meeting creation."""

    join_url: str
    meeting_id: Optional[Union[int, str]] = None
    start_time: Optional[str] = None


class MeetingResponse(BaseModel):
    """Public response for meeting creation."""

    join_url: str


__all__ = [
    "MeetingRequest",
    "MeetingResponse",
    "MeetingResult",
    "ScheduleMeetingRequest",
]
