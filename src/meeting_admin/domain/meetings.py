"""Domain models for meetings."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID


@dataclass(frozen=True)
class Meeting:
    """Represents a meeting row."""

    id: UUID
    title: str
    date: date
    created_by: UUID | None
    created_at: datetime | None
    updated_at: datetime | None


@dataclass(frozen=True)
class MeetingSummary:
    """Meeting with photo and attendance counts for the dashboard."""

    meeting: Meeting
    photos_count: int
    attendance_count: int
