"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from io import BytesIO
from uuid import UUID, uuid4

import pytest
from PIL import Image

from meeting_admin.config import Settings
from meeting_admin.containers import AppContainer
from meeting_admin.domain.contacts import AttendanceRecord, Contact
from meeting_admin.domain.errors import StorageError, UploadError
from meeting_admin.domain.meetings import Meeting, MeetingSummary
from meeting_admin.domain.photos import (
    PhotoInsertRejected,
    PhotoRecord,
    RejectionReason,
)
from meeting_admin.services.attendance import AttendanceRepository, AttendanceService
from meeting_admin.services.contacts import ContactRepository, ContactService
from meeting_admin.services.export import ExportRepository, ExportService
from meeting_admin.services.meetings import MeetingRepository, MeetingService
from meeting_admin.services.photo_storage import BlobStore, PhotoUploader
from meeting_admin.services.photos import (
    PhotoGalleryService,
    PhotoIngestionService,
    PhotoMetadataRecorder,
    PhotoRepository,
)

PUBLIC_BASE_URL = "https://example.supabase.co/storage/v1/object/public/meeting-photos"


def make_image_bytes(
    width: int,
    height: int,
    fmt: str = "JPEG",
    mode: str = "RGB",
    color: tuple[int, ...] = (200, 40, 40),
) -> bytes:
    """Render a solid-colour image in the requested format."""
    buffer = BytesIO()
    Image.new(mode, (width, height), color).save(buffer, format=fmt)
    return buffer.getvalue()


@dataclass
class InMemoryBlobStore(BlobStore):
    """In-memory bucket that refuses to overwrite keys."""

    objects: dict[str, bytes] = field(default_factory=dict)
    content_types: dict[str, str] = field(default_factory=dict)
    removed: list[str] = field(default_factory=list)
    fail_uploads: bool = False
    fail_removals: bool = False

    def put(self, key: str, data: bytes, content_type: str) -> None:
        if self.fail_uploads:
            raise UploadError("Bucket not found")
        if key in self.objects:
            raise UploadError("The resource already exists")
        self.objects[key] = data
        self.content_types[key] = content_type

    def public_url(self, key: str) -> str:
        return f"{PUBLIC_BASE_URL}/{key}"

    def remove(self, keys: list[str]) -> None:
        if self.fail_removals:
            raise StorageError("Failed to remove photos: storage down")
        for key in keys:
            self.objects.pop(key, None)
        self.removed.extend(keys)


@dataclass
class InMemoryPhotoRepository(PhotoRepository):
    """In-memory photo repository that enforces the per-meeting limit."""

    photos: dict[UUID, PhotoRecord] = field(default_factory=dict)
    limit: int = 3
    reject_with: RejectionReason | None = None

    def create_photo(
        self, meeting_id: UUID, photo_url: str, file_name: str, file_size: int
    ) -> PhotoRecord:
        if self.reject_with is not None:
            raise PhotoInsertRejected(self.reject_with, "insert refused")
        if len(self.list_photos(meeting_id)) >= self.limit:
            raise PhotoInsertRejected(
                RejectionReason.LIMIT_EXCEEDED,
                "Maximum 3 photos allowed per meeting",
            )
        record = PhotoRecord(
            id=uuid4(),
            meeting_id=meeting_id,
            photo_url=photo_url,
            file_name=file_name,
            file_size=file_size,
            created_at=datetime.now(tz=UTC),
        )
        self.photos[record.id] = record
        return record

    def get_photo(self, photo_id: UUID) -> PhotoRecord | None:
        return self.photos.get(photo_id)

    def list_photos(self, meeting_id: UUID) -> list[PhotoRecord]:
        rows = [p for p in self.photos.values() if p.meeting_id == meeting_id]
        return list(reversed(rows))

    def delete_photo(self, photo_id: UUID) -> None:
        self.photos.pop(photo_id, None)

    def delete_meeting_photos(self, meeting_id: UUID) -> None:
        for photo in self.list_photos(meeting_id):
            self.photos.pop(photo.id, None)


@dataclass
class InMemoryContactRepository(ContactRepository):
    """In-memory contacts list."""

    contacts: dict[UUID, Contact] = field(default_factory=dict)

    def create_contact(self, name: str) -> Contact:
        contact = Contact(id=uuid4(), name=name, created_at=datetime.now(tz=UTC))
        self.contacts[contact.id] = contact
        return contact

    def get_contact(self, contact_id: UUID) -> Contact | None:
        return self.contacts.get(contact_id)

    def list_contacts(self) -> list[Contact]:
        return sorted(self.contacts.values(), key=lambda contact: contact.name)

    def delete_contact(self, contact_id: UUID) -> None:
        self.contacts.pop(contact_id, None)


@dataclass
class InMemoryAttendanceRepository(AttendanceRepository):
    """In-memory attendance rows."""

    records: dict[UUID, AttendanceRecord] = field(default_factory=dict)

    def create_attendance(self, meeting_id: UUID, person_name: str) -> AttendanceRecord:
        record = AttendanceRecord(
            id=uuid4(),
            meeting_id=meeting_id,
            person_name=person_name,
            timestamp=datetime.now(tz=UTC),
        )
        self.records[record.id] = record
        return record

    def list_attendance(self, meeting_id: UUID) -> list[AttendanceRecord]:
        rows = [r for r in self.records.values() if r.meeting_id == meeting_id]
        return list(reversed(rows))

    def delete_attendance(self, attendance_id: UUID) -> None:
        self.records.pop(attendance_id, None)

    def delete_meeting_attendance(self, meeting_id: UUID) -> None:
        for record in self.list_attendance(meeting_id):
            self.records.pop(record.id, None)


@dataclass
class InMemoryMeetingRepository(MeetingRepository):
    """In-memory meetings with counts taken from sibling repositories."""

    photo_repository: InMemoryPhotoRepository
    attendance_repository: InMemoryAttendanceRepository
    meetings: dict[UUID, Meeting] = field(default_factory=dict)

    def create_meeting(
        self, title: str, meeting_date: date, created_by: UUID | None
    ) -> Meeting:
        now = datetime.now(tz=UTC)
        meeting = Meeting(
            id=uuid4(),
            title=title,
            date=meeting_date,
            created_by=created_by,
            created_at=now,
            updated_at=now,
        )
        self.meetings[meeting.id] = meeting
        return meeting

    def get_meeting(self, meeting_id: UUID) -> Meeting | None:
        return self.meetings.get(meeting_id)

    def list_meetings(self) -> list[MeetingSummary]:
        ordered = sorted(
            self.meetings.values(), key=lambda meeting: meeting.date, reverse=True
        )
        return [
            MeetingSummary(
                meeting=meeting,
                photos_count=len(self.photo_repository.list_photos(meeting.id)),
                attendance_count=len(
                    self.attendance_repository.list_attendance(meeting.id)
                ),
            )
            for meeting in ordered
        ]

    def update_meeting(
        self,
        meeting_id: UUID,
        title: str,
        meeting_date: date,
        updated_at: datetime,
    ) -> Meeting:
        current = self.meetings[meeting_id]
        updated = Meeting(
            id=current.id,
            title=title,
            date=meeting_date,
            created_by=current.created_by,
            created_at=current.created_at,
            updated_at=updated_at,
        )
        self.meetings[meeting_id] = updated
        return updated

    def delete_meeting(self, meeting_id: UUID) -> None:
        self.meetings.pop(meeting_id, None)


@dataclass
class InMemoryExportRepository(ExportRepository):
    """Export repository serving canned PostgREST-shaped rows."""

    meetings: list[dict[str, object]] = field(default_factory=list)
    attendance: list[dict[str, object]] = field(default_factory=list)
    photos: list[dict[str, object]] = field(default_factory=list)

    def list_meetings_with_attendees(self) -> list[dict[str, object]]:
        return self.meetings

    def list_attendance_with_meetings(self) -> list[dict[str, object]]:
        return self.attendance

    def list_photos_with_meetings(self) -> list[dict[str, object]]:
        return self.photos


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=(
            "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
            "eyJyb2xlIjoic2VydmljZV9yb2xlIn0."
            "c2lnbmF0dXJl"
        ),
        admin_token="admin-token",
    )


@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def photo_repository() -> InMemoryPhotoRepository:
    return InMemoryPhotoRepository()


@pytest.fixture
def ingestion_service(
    blob_store: InMemoryBlobStore, photo_repository: InMemoryPhotoRepository
) -> PhotoIngestionService:
    return PhotoIngestionService(
        uploader=PhotoUploader(blob_store),
        recorder=PhotoMetadataRecorder(photo_repository),
    )


@pytest.fixture
def container(
    settings: Settings,
    blob_store: InMemoryBlobStore,
    photo_repository: InMemoryPhotoRepository,
    ingestion_service: PhotoIngestionService,
) -> AppContainer:
    attendance_repository = InMemoryAttendanceRepository()
    contact_repository = InMemoryContactRepository()
    meeting_repository = InMemoryMeetingRepository(
        photo_repository=photo_repository,
        attendance_repository=attendance_repository,
    )
    gallery_service = PhotoGalleryService(
        repository=photo_repository, blob_store=blob_store
    )
    return AppContainer(
        settings=settings,
        meeting_service=MeetingService(
            repository=meeting_repository,
            attendance_repository=attendance_repository,
            gallery_service=gallery_service,
        ),
        contact_service=ContactService(contact_repository),
        attendance_service=AttendanceService(
            repository=attendance_repository,
            contact_repository=contact_repository,
        ),
        photo_ingestion_service=ingestion_service,
        photo_gallery_service=gallery_service,
        export_service=ExportService(InMemoryExportRepository()),
    )
