"""Meeting and attendance endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Request, status

from meeting_admin.api.auth import require_admin
from meeting_admin.api.models import (  # noqa: TC001
    AttendanceCreate,
    MeetingCreate,
    MeetingUpdate,
)

if TYPE_CHECKING:
    from meeting_admin.containers import AppContainer
    from meeting_admin.domain.contacts import AttendanceRecord
    from meeting_admin.domain.meetings import Meeting

router = APIRouter(
    prefix="/admin", tags=["meetings"], dependencies=[Depends(require_admin)]
)


@router.get("/meetings")
async def list_meetings(request: Request) -> dict[str, object]:
    """Return meetings with photo and attendance counts."""
    container: AppContainer = request.app.state.container
    summaries = container.meeting_service.list_meetings()
    return {
        "meetings": [
            {
                **_serialize_meeting(summary.meeting),
                "photos_count": summary.photos_count,
                "attendance_count": summary.attendance_count,
            }
            for summary in summaries
        ]
    }


@router.post("/meetings", status_code=status.HTTP_201_CREATED)
async def create_meeting(payload: MeetingCreate, request: Request) -> dict[str, object]:
    """Create a meeting."""
    container: AppContainer = request.app.state.container
    meeting = container.meeting_service.create_meeting(
        title=payload.title,
        meeting_date=payload.date,
        created_by=payload.created_by,
    )
    return _serialize_meeting(meeting)


@router.get("/meetings/{meeting_id}")
async def meeting_detail(meeting_id: UUID, request: Request) -> dict[str, object]:
    """Return a single meeting."""
    container: AppContainer = request.app.state.container
    return _serialize_meeting(_require_meeting(container, meeting_id))


@router.patch("/meetings/{meeting_id}")
async def update_meeting(
    meeting_id: UUID, payload: MeetingUpdate, request: Request
) -> dict[str, object]:
    """Update the title and date of a meeting."""
    container: AppContainer = request.app.state.container
    _require_meeting(container, meeting_id)
    meeting = container.meeting_service.update_meeting(
        meeting_id, title=payload.title, meeting_date=payload.date
    )
    return _serialize_meeting(meeting)


@router.delete("/meetings/{meeting_id}")
async def delete_meeting(meeting_id: UUID, request: Request) -> dict[str, str]:
    """Delete a meeting with its photos and attendance."""
    container: AppContainer = request.app.state.container
    _require_meeting(container, meeting_id)
    container.meeting_service.delete_meeting(meeting_id)
    return {"status": "deleted"}


@router.get("/meetings/{meeting_id}/attendance")
async def list_attendance(meeting_id: UUID, request: Request) -> dict[str, object]:
    """Return attendees of a meeting."""
    container: AppContainer = request.app.state.container
    records = container.attendance_service.list_attendance(meeting_id)
    return {
        "attendance": [_serialize_attendance(record) for record in records],
        "total": len(records),
    }


@router.post(
    "/meetings/{meeting_id}/attendance", status_code=status.HTTP_201_CREATED
)
async def add_attendance(
    meeting_id: UUID, payload: AttendanceCreate, request: Request
) -> dict[str, object]:
    """Mark a contact or custom name as present."""
    container: AppContainer = request.app.state.container
    _require_meeting(container, meeting_id)
    record = container.attendance_service.add_attendance(
        meeting_id,
        contact_id=payload.contact_id,
        person_name=payload.person_name,
    )
    return _serialize_attendance(record)


@router.delete("/attendance/{attendance_id}")
async def remove_attendance(attendance_id: UUID, request: Request) -> dict[str, str]:
    """Remove an attendance record."""
    container: AppContainer = request.app.state.container
    container.attendance_service.remove_attendance(attendance_id)
    return {"status": "deleted"}


def _require_meeting(container: AppContainer, meeting_id: UUID) -> Meeting:
    meeting = container.meeting_service.get_meeting(meeting_id)
    if meeting is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Meeting not found"
        )
    return meeting


def _serialize_meeting(meeting: Meeting) -> dict[str, object]:
    return {
        "id": str(meeting.id),
        "title": meeting.title,
        "date": meeting.date.isoformat(),
        "created_by": str(meeting.created_by) if meeting.created_by else None,
        "created_at": meeting.created_at.isoformat() if meeting.created_at else None,
        "updated_at": meeting.updated_at.isoformat() if meeting.updated_at else None,
    }


def _serialize_attendance(record: AttendanceRecord) -> dict[str, object]:
    return {
        "id": str(record.id),
        "meeting_id": str(record.meeting_id),
        "person_name": record.person_name,
        "timestamp": record.timestamp.isoformat(),
    }
