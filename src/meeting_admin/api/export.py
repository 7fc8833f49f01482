"""Data export endpoint."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from meeting_admin.api.auth import require_admin

if TYPE_CHECKING:
    from meeting_admin.containers import AppContainer

router = APIRouter(
    prefix="/admin", tags=["export"], dependencies=[Depends(require_admin)]
)


@router.get("/export")
async def export_data(request: Request, include_photos: bool = False) -> Response:
    """Download meetings, attendance and optionally photos as zipped CSVs."""
    container: AppContainer = request.app.state.container
    today = datetime.now(tz=ZoneInfo(container.settings.export_timezone)).date()
    archive = container.export_service.export_archive(
        include_photos=include_photos, today=today
    )
    filename = f"meeting_admin_export_{today.isoformat()}.zip"
    return Response(
        content=archive,
        media_type="application/zip",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
