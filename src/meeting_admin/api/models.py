"""Request bodies accepted by the admin API."""

import datetime as dt
from uuid import UUID

from pydantic import BaseModel


class MeetingCreate(BaseModel):
    title: str
    date: dt.date
    created_by: UUID | None = None


class MeetingUpdate(BaseModel):
    title: str
    date: dt.date


class ContactCreate(BaseModel):
    name: str


class AttendanceCreate(BaseModel):
    """Either a contact to mark present or a custom attendee name."""

    contact_id: UUID | None = None
    person_name: str | None = None
