"""Contact list endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status

from meeting_admin.api.auth import require_admin
from meeting_admin.api.models import ContactCreate  # noqa: TC001

if TYPE_CHECKING:
    from meeting_admin.containers import AppContainer
    from meeting_admin.domain.contacts import Contact

router = APIRouter(
    prefix="/admin", tags=["contacts"], dependencies=[Depends(require_admin)]
)


@router.get("/contacts")
async def list_contacts(request: Request) -> dict[str, object]:
    """Return contacts ordered by name."""
    container: AppContainer = request.app.state.container
    return {
        "contacts": [
            _serialize_contact(contact)
            for contact in container.contact_service.list_contacts()
        ]
    }


@router.post("/contacts", status_code=status.HTTP_201_CREATED)
async def add_contact(payload: ContactCreate, request: Request) -> dict[str, object]:
    """Add a contact."""
    container: AppContainer = request.app.state.container
    return _serialize_contact(container.contact_service.add_contact(payload.name))


@router.delete("/contacts/{contact_id}")
async def remove_contact(contact_id: UUID, request: Request) -> dict[str, str]:
    """Remove a contact."""
    container: AppContainer = request.app.state.container
    container.contact_service.remove_contact(contact_id)
    return {"status": "deleted"}


def _serialize_contact(contact: Contact) -> dict[str, object]:
    return {
        "id": str(contact.id),
        "name": contact.name,
        "created_at": contact.created_at.isoformat() if contact.created_at else None,
    }
