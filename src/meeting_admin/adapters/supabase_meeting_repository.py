"""Supabase-backed meeting repository."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from meeting_admin.domain.meetings import Meeting, MeetingSummary
from meeting_admin.services.meetings import MeetingRepository

_COLUMNS = "id, title, date, created_by, created_at, updated_at"


@dataclass
class SupabaseMeetingRepository(MeetingRepository):
    """Supabase implementation for meetings."""

    client: Client

    def create_meeting(
        self, title: str, meeting_date: date, created_by: UUID | None
    ) -> Meeting:
        """Create a meeting row and return it."""
        response = (
            self.client.table("meetings")
            .insert(
                {
                    "title": title,
                    "date": meeting_date.isoformat(),
                    "created_by": str(created_by) if created_by else None,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meeting")
        return _parse_meeting(response.data[0])

    def get_meeting(self, meeting_id: UUID) -> Meeting | None:
        """Return a meeting by id, if present."""
        response = (
            self.client.table("meetings")
            .select(_COLUMNS)
            .eq("id", str(meeting_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_meeting(response.data[0])

    def list_meetings(self) -> list[MeetingSummary]:
        """Return meetings with photo and attendance counts."""
        response = (
            self.client.table("meetings")
            .select(f"{_COLUMNS}, meeting_photos(count), attendance(count)")
            .order("date", desc=True)
            .execute()
        )
        return [
            MeetingSummary(
                meeting=_parse_meeting(row),
                photos_count=_embedded_count(row.get("meeting_photos")),
                attendance_count=_embedded_count(row.get("attendance")),
            )
            for row in response.data or []
        ]

    def update_meeting(
        self,
        meeting_id: UUID,
        title: str,
        meeting_date: date,
        updated_at: datetime,
    ) -> Meeting:
        """Update a meeting and return the stored row."""
        response = (
            self.client.table("meetings")
            .update(
                {
                    "title": title,
                    "date": meeting_date.isoformat(),
                    "updated_at": updated_at.isoformat(),
                }
            )
            .eq("id", str(meeting_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update meeting")
        return _parse_meeting(response.data[0])

    def delete_meeting(self, meeting_id: UUID) -> None:
        """Delete a meeting row."""
        self.client.table("meetings").delete().eq("id", str(meeting_id)).execute()


def _embedded_count(value: object) -> int:
    """Read PostgREST's `[{"count": n}]` aggregate shape."""
    if isinstance(value, list) and value and isinstance(value[0], dict):
        return int(value[0].get("count", 0))
    return 0


def _parse_meeting(row: dict[str, object]) -> Meeting:
    created_by = row.get("created_by")
    return Meeting(
        id=UUID(str(row["id"])),
        title=str(row.get("title", "")),
        date=date.fromisoformat(str(row["date"])),
        created_by=UUID(str(created_by)) if created_by else None,
        created_at=_parse_datetime(row.get("created_at")),
        updated_at=_parse_datetime(row.get("updated_at")),
    )


def _parse_datetime(value: object) -> datetime | None:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None
