"""Domain models for meeting photos and the ingestion pipeline."""

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from meeting_admin.domain.errors import PhotoLimitExceeded, PipelineError

OUTPUT_MEDIA_TYPE = "image/jpeg"
OUTPUT_EXTENSION = "jpg"


@dataclass(frozen=True)
class SourceImage:
    """A caller-supplied file as received from the upload form."""

    file_name: str
    media_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class ProcessedImage:
    """Downscaled and recompressed image ready for upload."""

    data: bytes
    width: int
    height: int
    media_type: str = OUTPUT_MEDIA_TYPE

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class PhotoRecord:
    """Persisted photo metadata row."""

    id: UUID
    meeting_id: UUID
    photo_url: str
    file_name: str
    file_size: int
    created_at: datetime | None


class RejectionReason(StrEnum):
    """Structured reasons the metadata store gives for refusing an insert."""

    LIMIT_EXCEEDED = "limit_exceeded"
    OTHER = "other"


class PhotoInsertRejected(Exception):
    """Raised by photo repositories when the metadata store refuses an insert."""

    def __init__(self, reason: RejectionReason, message: str) -> None:
        super().__init__(message)
        self.reason = reason


class NotificationVariant(StrEnum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    """User-facing message describing the outcome of one entry."""

    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.DEFAULT


@dataclass(frozen=True)
class PhotoOutcome:
    """Result of running one batch entry through the pipeline."""

    file_name: str
    source_size: int
    record: PhotoRecord | None = None
    error: PipelineError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def notification(self) -> Notification:
        """Render the outcome as a notification for the caller."""
        if self.error is None and self.record is not None:
            return Notification(
                title="Photo Uploaded",
                description=(
                    "Photo compressed and uploaded successfully. "
                    f"Size reduced from {_kilobytes(self.source_size)}KB "
                    f"to {_kilobytes(self.record.file_size)}KB."
                ),
            )
        if isinstance(self.error, PhotoLimitExceeded):
            return Notification(
                title="Photo Limit Reached",
                description=self.error.user_message,
                variant=NotificationVariant.DESTRUCTIVE,
            )
        detail = self.error.user_message if self.error else "unknown error"
        return Notification(
            title="Upload Failed",
            description=f"Failed to upload {self.file_name}: {detail}",
            variant=NotificationVariant.DESTRUCTIVE,
        )


@dataclass(frozen=True)
class BatchReport:
    """Ordered outcomes of one batch, emitted once the batch finishes."""

    meeting_id: UUID
    outcomes: list[PhotoOutcome] = field(default_factory=list)

    @property
    def uploaded(self) -> list[PhotoRecord]:
        return [outcome.record for outcome in self.outcomes if outcome.record]

    @property
    def failed(self) -> list[PhotoOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]


def _kilobytes(size: int) -> int:
    """Whole kilobytes, rounding halves up."""
    return math.floor(size / 1024 + 0.5)
