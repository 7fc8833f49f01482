"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from meeting_admin.adapters.supabase_attendance_repository import (
    SupabaseAttendanceRepository,
)
from meeting_admin.adapters.supabase_blob_store import SupabaseBlobStore
from meeting_admin.adapters.supabase_contact_repository import (
    SupabaseContactRepository,
)
from meeting_admin.adapters.supabase_export_repository import (
    SupabaseExportRepository,
)
from meeting_admin.adapters.supabase_meeting_repository import (
    SupabaseMeetingRepository,
)
from meeting_admin.adapters.supabase_photo_repository import SupabasePhotoRepository
from meeting_admin.config import Settings
from meeting_admin.services.attendance import AttendanceService
from meeting_admin.services.contacts import ContactService
from meeting_admin.services.export import ExportService
from meeting_admin.services.meetings import MeetingService
from meeting_admin.services.photo_storage import PhotoUploader
from meeting_admin.services.photos import (
    PhotoGalleryService,
    PhotoIngestionService,
    PhotoMetadataRecorder,
)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    meeting_service: MeetingService
    contact_service: ContactService
    attendance_service: AttendanceService
    photo_ingestion_service: PhotoIngestionService
    photo_gallery_service: PhotoGalleryService
    export_service: ExportService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    meeting_repository = SupabaseMeetingRepository(supabase_client)
    contact_repository = SupabaseContactRepository(supabase_client)
    attendance_repository = SupabaseAttendanceRepository(supabase_client)
    photo_repository = SupabasePhotoRepository(supabase_client)
    export_repository = SupabaseExportRepository(supabase_client)
    blob_store = SupabaseBlobStore(
        supabase_client, bucket=resolved_settings.photo_bucket
    )

    gallery_service = PhotoGalleryService(
        repository=photo_repository, blob_store=blob_store
    )
    ingestion_service = PhotoIngestionService(
        uploader=PhotoUploader(blob_store),
        recorder=PhotoMetadataRecorder(photo_repository),
        max_upload_bytes=resolved_settings.photo_max_upload_bytes,
        max_dimension=resolved_settings.photo_max_dimension,
        quality=resolved_settings.photo_jpeg_quality,
    )
    meeting_service = MeetingService(
        repository=meeting_repository,
        attendance_repository=attendance_repository,
        gallery_service=gallery_service,
    )
    contact_service = ContactService(contact_repository)
    attendance_service = AttendanceService(
        repository=attendance_repository,
        contact_repository=contact_repository,
    )
    export_service = ExportService(
        repository=export_repository,
        timezone_name=resolved_settings.export_timezone,
    )

    return AppContainer(
        settings=resolved_settings,
        meeting_service=meeting_service,
        contact_service=contact_service,
        attendance_service=attendance_service,
        photo_ingestion_service=ingestion_service,
        photo_gallery_service=gallery_service,
        export_service=export_service,
    )
