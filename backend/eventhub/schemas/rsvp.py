"""Pydantic schemas for RSVPs."""
from __future__ import annotations
from datetime import datetime
from pydantic import BaseModel

from eventhub.models.rsvp import RSVPStatus
from eventhub.models.user import Role


class RSVPRequest(BaseModel):
    status: RSVPStatus = RSVPStatus.going


class ResponderEmailOut(BaseModel):
    email: str

    model_config = {"from_attributes": True}


class ResponderOut(BaseModel):
    email: str
    role: Role

    model_config = {"from_attributes": True}


class EventRefOut(BaseModel):
    id: str
    title: str

    model_config = {"from_attributes": True}


class RSVPInEventOut(BaseModel):
    """RSVP as nested under an event listing."""

    id: str
    user_id: str
    event_id: str
    status: RSVPStatus
    created_at: datetime
    updated_at: datetime
    user: ResponderEmailOut

    model_config = {"from_attributes": True}


class RSVPOut(BaseModel):
    """RSVP as listed per event, with the responder's email and role."""

    id: str
    user_id: str
    event_id: str
    status: RSVPStatus
    created_at: datetime
    updated_at: datetime
    user: ResponderOut

    model_config = {"from_attributes": True}


class RSVPDetailOut(RSVPOut):
    """RSVP returned from a response, with the target event's projection."""

    event: EventRefOut
