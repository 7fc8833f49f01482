"""Meeting management service."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID

from meeting_admin.domain.errors import InvalidInputError
from meeting_admin.domain.meetings import Meeting, MeetingSummary
from meeting_admin.services.attendance import AttendanceRepository
from meeting_admin.services.photos import PhotoGalleryService

logger = logging.getLogger(__name__)


class MeetingRepository(Protocol):
    """Persistence interface for meetings."""

    def create_meeting(
        self, title: str, meeting_date: date, created_by: UUID | None
    ) -> Meeting:
        """Create a meeting and return it."""

    def get_meeting(self, meeting_id: UUID) -> Meeting | None:
        """Return a meeting by id, if present."""

    def list_meetings(self) -> list[MeetingSummary]:
        """Return meetings with counts, most recent date first."""

    def update_meeting(
        self,
        meeting_id: UUID,
        title: str,
        meeting_date: date,
        updated_at: datetime,
    ) -> Meeting:
        """Update title and date of a meeting and return it."""

    def delete_meeting(self, meeting_id: UUID) -> None:
        """Delete a meeting row."""


@dataclass
class MeetingService:
    """Application service for meeting lifecycle actions."""

    repository: MeetingRepository
    attendance_repository: AttendanceRepository
    gallery_service: PhotoGalleryService

    def list_meetings(self) -> list[MeetingSummary]:
        return self.repository.list_meetings()

    def get_meeting(self, meeting_id: UUID) -> Meeting | None:
        return self.repository.get_meeting(meeting_id)

    def create_meeting(
        self, title: str, meeting_date: date, created_by: UUID | None = None
    ) -> Meeting:
        """Create a meeting with a trimmed, non-empty title."""
        return self.repository.create_meeting(
            title=_clean_title(title),
            meeting_date=meeting_date,
            created_by=created_by,
        )

    def update_meeting(
        self, meeting_id: UUID, title: str, meeting_date: date
    ) -> Meeting:
        """Rename a meeting and/or move its date."""
        return self.repository.update_meeting(
            meeting_id,
            title=_clean_title(title),
            meeting_date=meeting_date,
            updated_at=datetime.now(tz=UTC),
        )

    def delete_meeting(self, meeting_id: UUID) -> None:
        """Delete photos, attendance and finally the meeting itself."""
        removed = self.gallery_service.delete_meeting_photos(meeting_id)
        self.attendance_repository.delete_meeting_attendance(meeting_id)
        self.repository.delete_meeting(meeting_id)
        logger.info("Deleted meeting %s with %d photos", meeting_id, removed)


def _clean_title(title: str) -> str:
    cleaned = title.strip()
    if not cleaned:
        raise InvalidInputError("Meeting title cannot be empty.")
    return cleaned
