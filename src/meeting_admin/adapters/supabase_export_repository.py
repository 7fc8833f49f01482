"""Supabase queries backing the data export."""

from dataclasses import dataclass

from supabase import Client

from meeting_admin.services.export import ExportRepository


@dataclass
class SupabaseExportRepository(ExportRepository):
    """Supabase implementation for export queries."""

    client: Client

    def list_meetings_with_attendees(self) -> list[dict[str, object]]:
        """Return meetings with embedded attendee names."""
        response = (
            self.client.table("meetings")
            .select("id, title, date, created_at, attendance(person_name)")
            .order("date", desc=True)
            .execute()
        )
        return response.data or []

    def list_attendance_with_meetings(self) -> list[dict[str, object]]:
        """Return attendance rows with their meeting title and date."""
        response = (
            self.client.table("attendance")
            .select("*, meetings(title, date)")
            .order("timestamp", desc=True)
            .execute()
        )
        return response.data or []

    def list_photos_with_meetings(self) -> list[dict[str, object]]:
        """Return photo rows with their meeting title and date."""
        response = (
            self.client.table("meeting_photos")
            .select(
                "id, photo_url, file_name, file_size, created_at, meetings(title, date)"
            )
            .order("created_at", desc=True)
            .execute()
        )
        return response.data or []
