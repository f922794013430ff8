"""Pydantic schemas for Events."""
from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, field_validator

from eventhub.schemas.rsvp import RSVPInEventOut


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Convert to UTC; a datetime without an offset is read as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class EventCreate(BaseModel):
    # Presence is checked by the lifecycle service so that a missing field is
    # reported as a validation error rather than a schema mismatch.
    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[datetime] = None
    location: Optional[str] = None

    @field_validator("date")
    @classmethod
    def _date_in_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class EventUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[datetime] = None
    location: Optional[str] = None

    @field_validator("date")
    @classmethod
    def _date_in_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class OrganizerOut(BaseModel):
    email: str

    model_config = {"from_attributes": True}


class EventOut(BaseModel):
    id: str
    title: str
    description: str
    date: datetime
    location: str
    organizer_id: str
    approved: bool
    created_at: datetime
    updated_at: datetime
    organizer: OrganizerOut
    rsvps: list[RSVPInEventOut] = []

    model_config = {"from_attributes": True}


class EventDeletedOut(BaseModel):
    status: str = "deleted"
    event_id: str
    title: str
