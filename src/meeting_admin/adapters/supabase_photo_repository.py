"""Supabase-backed photo repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from meeting_admin.domain.photos import (
    PhotoInsertRejected,
    PhotoRecord,
    RejectionReason,
)
from meeting_admin.services.photos import PhotoRepository

# Hint attached by the meeting_photos count trigger.
PHOTO_LIMIT_HINT = "photo_limit_exceeded"

_COLUMNS = "id, meeting_id, photo_url, file_name, file_size, created_at"


@dataclass
class SupabasePhotoRepository(PhotoRepository):
    """Supabase implementation for photo metadata persistence."""

    client: Client

    def create_photo(
        self, meeting_id: UUID, photo_url: str, file_name: str, file_size: int
    ) -> PhotoRecord:
        """Insert a photo row; the database refuses a fourth photo per meeting."""
        try:
            response = (
                self.client.table("meeting_photos")
                .insert(
                    {
                        "meeting_id": str(meeting_id),
                        "photo_url": photo_url,
                        "file_name": file_name,
                        "file_size": file_size,
                    }
                )
                .execute()
            )
        except APIError as exc:
            reason = (
                RejectionReason.LIMIT_EXCEEDED
                if exc.hint == PHOTO_LIMIT_HINT
                else RejectionReason.OTHER
            )
            raise PhotoInsertRejected(reason, exc.message or str(exc)) from exc
        except httpx.HTTPError as exc:
            raise PhotoInsertRejected(RejectionReason.OTHER, str(exc)) from exc
        if not response.data:
            raise PhotoInsertRejected(
                RejectionReason.OTHER, "Failed to create photo metadata"
            )
        return _parse_photo(response.data[0])

    def get_photo(self, photo_id: UUID) -> PhotoRecord | None:
        """Return a photo row by id, if present."""
        response = (
            self.client.table("meeting_photos")
            .select(_COLUMNS)
            .eq("id", str(photo_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_photo(response.data[0])

    def list_photos(self, meeting_id: UUID) -> list[PhotoRecord]:
        """Return photos of a meeting, newest first."""
        response = (
            self.client.table("meeting_photos")
            .select(_COLUMNS)
            .eq("meeting_id", str(meeting_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_photo(row) for row in response.data or []]

    def delete_photo(self, photo_id: UUID) -> None:
        """Delete a photo metadata row."""
        self.client.table("meeting_photos").delete().eq("id", str(photo_id)).execute()

    def delete_meeting_photos(self, meeting_id: UUID) -> None:
        """Delete all photo rows of a meeting."""
        self.client.table("meeting_photos").delete().eq(
            "meeting_id", str(meeting_id)
        ).execute()


def _parse_photo(row: dict[str, object]) -> PhotoRecord:
    created_raw = row.get("created_at")
    return PhotoRecord(
        id=UUID(str(row["id"])),
        meeting_id=UUID(str(row["meeting_id"])),
        photo_url=str(row.get("photo_url", "")),
        file_name=str(row.get("file_name", "")),
        file_size=int(row.get("file_size") or 0),
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
    )
