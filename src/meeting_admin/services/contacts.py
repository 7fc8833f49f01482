"""Contact list service."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from meeting_admin.domain.contacts import Contact
from meeting_admin.domain.errors import InvalidInputError


class ContactRepository(Protocol):
    """Persistence interface for contacts."""

    def create_contact(self, name: str) -> Contact:
        """Create a contact and return it."""

    def get_contact(self, contact_id: UUID) -> Contact | None:
        """Return a contact by id, if present."""

    def list_contacts(self) -> list[Contact]:
        """Return all contacts ordered by name."""

    def delete_contact(self, contact_id: UUID) -> None:
        """Delete a contact."""


@dataclass
class ContactService:
    """Service for the shared contacts list."""

    repository: ContactRepository

    def list_contacts(self) -> list[Contact]:
        return self.repository.list_contacts()

    def get_contact(self, contact_id: UUID) -> Contact | None:
        return self.repository.get_contact(contact_id)

    def add_contact(self, name: str) -> Contact:
        """Add a contact with a trimmed, non-empty name."""
        cleaned = name.strip()
        if not cleaned:
            raise InvalidInputError("Contact name cannot be empty.")
        return self.repository.create_contact(cleaned)

    def remove_contact(self, contact_id: UUID) -> None:
        self.repository.delete_contact(contact_id)
