"""Attendance tracking service."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from meeting_admin.domain.contacts import AttendanceRecord
from meeting_admin.domain.errors import InvalidInputError
from meeting_admin.services.contacts import ContactRepository


class AttendanceRepository(Protocol):
    """Persistence interface for attendance rows."""

    def create_attendance(self, meeting_id: UUID, person_name: str) -> AttendanceRecord:
        """Create an attendance row and return it."""

    def list_attendance(self, meeting_id: UUID) -> list[AttendanceRecord]:
        """Return attendance for a meeting, latest check-in first."""

    def delete_attendance(self, attendance_id: UUID) -> None:
        """Delete an attendance row."""

    def delete_meeting_attendance(self, meeting_id: UUID) -> None:
        """Delete all attendance rows of a meeting."""


@dataclass
class AttendanceService:
    """Marks contacts or ad-hoc names as present at a meeting."""

    repository: AttendanceRepository
    contact_repository: ContactRepository

    def list_attendance(self, meeting_id: UUID) -> list[AttendanceRecord]:
        return self.repository.list_attendance(meeting_id)

    def add_attendance(
        self,
        meeting_id: UUID,
        contact_id: UUID | None = None,
        person_name: str | None = None,
    ) -> AttendanceRecord:
        """Record attendance by contact or by a custom name."""
        if contact_id is not None:
            contact = self.contact_repository.get_contact(contact_id)
            if contact is None:
                raise InvalidInputError("Selected contact does not exist.")
            name = contact.name
        else:
            name = (person_name or "").strip()
        if not name:
            raise InvalidInputError("Attendee name cannot be empty.")
        return self.repository.create_attendance(meeting_id, name)

    def remove_attendance(self, attendance_id: UUID) -> None:
        self.repository.delete_attendance(attendance_id)
