"""Photo ingestion pipeline and gallery management for meetings."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from meeting_admin.domain.errors import (
    MetadataWriteError,
    PhotoLimitExceeded,
    PipelineError,
)
from meeting_admin.domain.photos import (
    BatchReport,
    PhotoInsertRejected,
    PhotoOutcome,
    PhotoRecord,
    RejectionReason,
    SourceImage,
)
from meeting_admin.services.photo_processing import (
    JPEG_QUALITY,
    MAX_DIMENSION,
    MAX_UPLOAD_BYTES,
    compress_image,
    validate_source,
)
from meeting_admin.services.photo_storage import (
    BlobStore,
    PhotoUploader,
    storage_path_from_url,
)

logger = logging.getLogger(__name__)


class PhotoRepository(Protocol):
    """Persistence interface for photo metadata."""

    def create_photo(
        self, meeting_id: UUID, photo_url: str, file_name: str, file_size: int
    ) -> PhotoRecord:
        """Insert a photo row, raising PhotoInsertRejected when refused."""

    def get_photo(self, photo_id: UUID) -> PhotoRecord | None:
        """Return a photo row by id, if present."""

    def list_photos(self, meeting_id: UUID) -> list[PhotoRecord]:
        """Return photos for a meeting, newest first."""

    def delete_photo(self, photo_id: UUID) -> None:
        """Delete a photo row."""

    def delete_meeting_photos(self, meeting_id: UUID) -> None:
        """Delete every photo row of a meeting."""


@dataclass
class PhotoMetadataRecorder:
    """Records uploaded photos and classifies insert rejections."""

    repository: PhotoRepository

    def record(
        self, meeting_id: UUID, photo_url: str, file_name: str, file_size: int
    ) -> PhotoRecord:
        """Insert the metadata row for an uploaded photo."""
        try:
            return self.repository.create_photo(
                meeting_id=meeting_id,
                photo_url=photo_url,
                file_name=file_name,
                file_size=file_size,
            )
        except PhotoInsertRejected as exc:
            if exc.reason is RejectionReason.LIMIT_EXCEEDED:
                raise PhotoLimitExceeded(str(exc)) from exc
            raise MetadataWriteError(str(exc)) from exc


@dataclass
class PhotoIngestionService:
    """Runs selected files through validate, compress, upload and record.

    Entries are handled one after another in the order given. A failing
    entry is reported in the batch report and never stops the entries
    after it. The count limit is left to the metadata store; an upload
    rejected there keeps its blob in storage.
    """

    uploader: PhotoUploader
    recorder: PhotoMetadataRecorder
    max_upload_bytes: int = MAX_UPLOAD_BYTES
    max_dimension: int = MAX_DIMENSION
    quality: int = JPEG_QUALITY

    def ingest(self, meeting_id: UUID, source: SourceImage) -> PhotoRecord:
        """Process a single file, raising a PipelineError on failure."""
        validate_source(source, self.max_upload_bytes)
        processed = compress_image(
            source.data, max_dimension=self.max_dimension, quality=self.quality
        )
        logger.info(
            "Compressed %s from %d to %d bytes (%dx%d)",
            source.file_name,
            source.size,
            processed.size,
            processed.width,
            processed.height,
        )
        photo_url = self.uploader.upload(meeting_id, processed)
        return self.recorder.record(
            meeting_id=meeting_id,
            photo_url=photo_url,
            file_name=source.file_name,
            file_size=processed.size,
        )

    def ingest_batch(
        self,
        meeting_id: UUID,
        sources: Iterable[SourceImage],
        on_finished: Callable[[BatchReport], None] | None = None,
    ) -> BatchReport:
        """Process every file of a batch and report each outcome."""
        outcomes: list[PhotoOutcome] = []
        for source in sources:
            try:
                record = self.ingest(meeting_id, source)
            except PipelineError as exc:
                logger.warning(
                    "Photo %s failed for meeting %s: %s (%s)",
                    source.file_name,
                    meeting_id,
                    exc.code,
                    exc.detail,
                )
                outcomes.append(
                    PhotoOutcome(
                        file_name=source.file_name,
                        source_size=source.size,
                        error=exc,
                    )
                )
                continue
            outcomes.append(
                PhotoOutcome(
                    file_name=source.file_name,
                    source_size=source.size,
                    record=record,
                )
            )

        report = BatchReport(meeting_id=meeting_id, outcomes=outcomes)
        logger.info(
            "Photo batch for meeting %s finished: %d uploaded, %d failed",
            meeting_id,
            len(report.uploaded),
            len(report.failed),
        )
        if on_finished is not None:
            on_finished(report)
        return report


@dataclass
class PhotoGalleryService:
    """Lists and deletes stored meeting photos."""

    repository: PhotoRepository
    blob_store: BlobStore

    def list_photos(self, meeting_id: UUID) -> list[PhotoRecord]:
        return self.repository.list_photos(meeting_id)

    def get_photo(self, photo_id: UUID) -> PhotoRecord | None:
        return self.repository.get_photo(photo_id)

    def delete_photo(self, photo: PhotoRecord) -> None:
        """Remove the stored file first, then its metadata row."""
        self.blob_store.remove([storage_path_from_url(photo.photo_url)])
        self.repository.delete_photo(photo.id)

    def delete_meeting_photos(self, meeting_id: UUID) -> int:
        """Remove all files and rows of a meeting and return how many."""
        photos = self.repository.list_photos(meeting_id)
        if photos:
            self.blob_store.remove(
                [storage_path_from_url(photo.photo_url) for photo in photos]
            )
        self.repository.delete_meeting_photos(meeting_id)
        return len(photos)
