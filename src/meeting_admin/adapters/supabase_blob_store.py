"""Supabase Storage bucket adapter for meeting photos."""

from dataclasses import dataclass

import httpx
from storage3.utils import StorageException
from supabase import Client

from meeting_admin.domain.errors import StorageError, UploadError
from meeting_admin.services.photo_storage import BlobStore


@dataclass
class SupabaseBlobStore(BlobStore):
    """Stores photo files in a public Supabase Storage bucket."""

    client: Client
    bucket: str = "meeting-photos"

    def put(self, key: str, data: bytes, content_type: str) -> None:
        """Upload bytes once; an existing key is never overwritten."""
        try:
            self.client.storage.from_(self.bucket).upload(
                path=key,
                file=data,
                file_options={"content-type": content_type},
            )
        except (StorageException, httpx.HTTPError) as exc:
            raise UploadError(str(exc)) from exc

    def public_url(self, key: str) -> str:
        """Return the public URL for a stored key."""
        url = self.client.storage.from_(self.bucket).get_public_url(key)
        return url.rstrip("?")

    def remove(self, keys: list[str]) -> None:
        """Delete stored objects by key."""
        try:
            self.client.storage.from_(self.bucket).remove(keys)
        except (StorageException, httpx.HTTPError) as exc:
            raise StorageError(f"Failed to remove photos: {exc}") from exc
