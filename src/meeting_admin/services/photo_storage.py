"""Blob storage for meeting photos."""

import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from meeting_admin.domain.photos import OUTPUT_EXTENSION, ProcessedImage


class BlobStore(Protocol):
    """Interface for the object storage bucket holding photo files."""

    def put(self, key: str, data: bytes, content_type: str) -> None:
        """Store bytes under a new key, raising UploadError on failure."""

    def public_url(self, key: str) -> str:
        """Return the public retrieval URL for a key."""

    def remove(self, keys: list[str]) -> None:
        """Delete the objects under the given keys, raising StorageError on failure."""


def epoch_millis() -> int:
    """Return the current Unix time in milliseconds."""
    return int(datetime.now(tz=UTC).timestamp() * 1000)


def build_storage_key(
    meeting_id: UUID, millis: int, extension: str = OUTPUT_EXTENSION
) -> str:
    """Build the `{meeting_id}/{millis}.{ext}` object key."""
    return f"{meeting_id}/{millis}.{extension}"


def storage_path_from_url(photo_url: str) -> str:
    """Recover the object key from the last two segments of a public URL."""
    path = photo_url.split("?", 1)[0].rstrip("/")
    return "/".join(path.split("/")[-2:])


@dataclass
class PhotoUploader:
    """Uploads processed images under timestamped keys."""

    blob_store: BlobStore
    clock: Callable[[], int] = epoch_millis
    _last_millis: int = field(default=0, init=False, repr=False)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def next_key(self, meeting_id: UUID) -> str:
        """Return a fresh key; timestamps never repeat within this uploader."""
        with self._lock:
            millis = max(self.clock(), self._last_millis + 1)
            self._last_millis = millis
        return build_storage_key(meeting_id, millis)

    def upload(self, meeting_id: UUID, image: ProcessedImage) -> str:
        """Upload the image once and return its public URL."""
        key = self.next_key(meeting_id)
        self.blob_store.put(key, image.data, image.media_type)
        return self.blob_store.public_url(key)
