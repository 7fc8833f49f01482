"""Supabase-backed contact repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from meeting_admin.domain.contacts import Contact
from meeting_admin.services.contacts import ContactRepository


@dataclass
class SupabaseContactRepository(ContactRepository):
    """Supabase implementation for the contacts list."""

    client: Client

    def create_contact(self, name: str) -> Contact:
        """Create a contact row and return it."""
        response = self.client.table("contacts").insert({"name": name}).execute()
        if not response.data:
            raise RuntimeError("Failed to create contact")
        return _parse_contact(response.data[0])

    def get_contact(self, contact_id: UUID) -> Contact | None:
        """Return a contact by id, if present."""
        response = (
            self.client.table("contacts")
            .select("id, name, created_at")
            .eq("id", str(contact_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_contact(response.data[0])

    def list_contacts(self) -> list[Contact]:
        """Return all contacts ordered by name."""
        response = (
            self.client.table("contacts")
            .select("id, name, created_at")
            .order("name")
            .execute()
        )
        return [_parse_contact(row) for row in response.data or []]

    def delete_contact(self, contact_id: UUID) -> None:
        """Delete a contact row."""
        self.client.table("contacts").delete().eq("id", str(contact_id)).execute()


def _parse_contact(row: dict[str, object]) -> Contact:
    created_raw = row.get("created_at")
    return Contact(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
    )
