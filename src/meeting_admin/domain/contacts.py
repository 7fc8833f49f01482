"""Domain models for contacts and attendance."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class Contact:
    """A person who can be marked as attending meetings."""

    id: UUID
    name: str
    created_at: datetime | None


@dataclass(frozen=True)
class AttendanceRecord:
    """A check-in of a person at a meeting."""

    id: UUID
    meeting_id: UUID
    person_name: str
    timestamp: datetime
