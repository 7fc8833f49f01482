"""Supabase-backed attendance repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from meeting_admin.domain.contacts import AttendanceRecord
from meeting_admin.services.attendance import AttendanceRepository


@dataclass
class SupabaseAttendanceRepository(AttendanceRepository):
    """Supabase implementation for attendance rows."""

    client: Client

    def create_attendance(self, meeting_id: UUID, person_name: str) -> AttendanceRecord:
        """Create an attendance row and return it."""
        response = (
            self.client.table("attendance")
            .insert({"meeting_id": str(meeting_id), "person_name": person_name})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to add attendance")
        return _parse_attendance(response.data[0])

    def list_attendance(self, meeting_id: UUID) -> list[AttendanceRecord]:
        """Return attendance for a meeting, latest first."""
        response = (
            self.client.table("attendance")
            .select("id, meeting_id, person_name, timestamp")
            .eq("meeting_id", str(meeting_id))
            .order("timestamp", desc=True)
            .execute()
        )
        return [_parse_attendance(row) for row in response.data or []]

    def delete_attendance(self, attendance_id: UUID) -> None:
        """Delete an attendance row."""
        self.client.table("attendance").delete().eq("id", str(attendance_id)).execute()

    def delete_meeting_attendance(self, meeting_id: UUID) -> None:
        """Delete all attendance rows for a meeting."""
        self.client.table("attendance").delete().eq(
            "meeting_id", str(meeting_id)
        ).execute()


def _parse_attendance(row: dict[str, object]) -> AttendanceRecord:
    return AttendanceRecord(
        id=UUID(str(row["id"])),
        meeting_id=UUID(str(row["meeting_id"])),
        person_name=str(row.get("person_name", "")),
        timestamp=datetime.fromisoformat(str(row["timestamp"])),
    )
