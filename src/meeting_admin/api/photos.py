"""Meeting photo endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import (
    APIRouter,
    Depends,
    File,
    HTTPException,
    Request,
    UploadFile,
    status,
)
from starlette.concurrency import run_in_threadpool

from meeting_admin.api.auth import require_admin
from meeting_admin.domain.photos import SourceImage

if TYPE_CHECKING:
    from meeting_admin.containers import AppContainer
    from meeting_admin.domain.photos import BatchReport, PhotoOutcome, PhotoRecord

router = APIRouter(
    prefix="/admin", tags=["photos"], dependencies=[Depends(require_admin)]
)


@router.get("/meetings/{meeting_id}/photos")
async def list_photos(meeting_id: UUID, request: Request) -> dict[str, object]:
    """Return photos of a meeting, newest first."""
    container: AppContainer = request.app.state.container
    photos = container.photo_gallery_service.list_photos(meeting_id)
    return {"photos": [_serialize_photo(photo) for photo in photos]}


@router.post("/meetings/{meeting_id}/photos")
async def upload_photos(
    meeting_id: UUID,
    request: Request,
    files: list[UploadFile] = File(...),  # noqa: B008
) -> dict[str, object]:
    """Compress and store a batch of photos, reporting each file."""
    container: AppContainer = request.app.state.container
    if container.meeting_service.get_meeting(meeting_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Meeting not found"
        )
    sources = [
        SourceImage(
            file_name=upload.filename or "photo",
            media_type=upload.content_type or "",
            data=await upload.read(),
        )
        for upload in files
    ]
    report = await run_in_threadpool(
        container.photo_ingestion_service.ingest_batch, meeting_id, sources
    )
    return _serialize_report(report)


@router.delete("/photos/{photo_id}")
async def delete_photo(photo_id: UUID, request: Request) -> dict[str, str]:
    """Delete a photo file and its metadata."""
    container: AppContainer = request.app.state.container
    photo = container.photo_gallery_service.get_photo(photo_id)
    if photo is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Photo not found"
        )
    container.photo_gallery_service.delete_photo(photo)
    return {"status": "deleted"}


def _serialize_photo(photo: PhotoRecord) -> dict[str, object]:
    return {
        "id": str(photo.id),
        "meeting_id": str(photo.meeting_id),
        "photo_url": photo.photo_url,
        "file_name": photo.file_name,
        "file_size": photo.file_size,
        "created_at": photo.created_at.isoformat() if photo.created_at else None,
    }


def _serialize_outcome(outcome: PhotoOutcome) -> dict[str, object]:
    notification = outcome.notification()
    return {
        "file_name": outcome.file_name,
        "status": "uploaded" if outcome.ok else "failed",
        "error": outcome.error.code if outcome.error else None,
        "photo": _serialize_photo(outcome.record) if outcome.record else None,
        "notification": {
            "title": notification.title,
            "description": notification.description,
            "variant": str(notification.variant),
        },
    }


def _serialize_report(report: BatchReport) -> dict[str, object]:
    return {
        "meeting_id": str(report.meeting_id),
        "uploaded": len(report.uploaded),
        "failed": len(report.failed),
        "results": [_serialize_outcome(outcome) for outcome in report.outcomes],
    }
