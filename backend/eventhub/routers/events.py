"""Event API routes — delegates to event_service for the lifecycle rules."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from eventhub.database import get_db
from eventhub.dependencies import get_current_identity, get_hub
from eventhub.schemas.event import EventCreate, EventDeletedOut, EventOut, EventUpdate
from eventhub.security import Identity
from eventhub.services import event_service
from eventhub.services.broadcast import BroadcastHub

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=EventOut, status_code=status.HTTP_201_CREATED)
async def create_event(
    payload: EventCreate,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
    hub: BroadcastHub = Depends(get_hub),
):
    """Create an event (ORGANIZER or ADMIN); approved immediately for ADMIN."""
    return await event_service.create_event(db, hub, identity, payload.model_dump())


@router.get("/", response_model=list[EventOut])
def list_events(identity: Identity = Depends(get_current_identity), db: Session = Depends(get_db)):
    """List events visible to the caller, soonest first."""
    return event_service.list_events(db, identity)


@router.get("/{event_id}", response_model=EventOut)
def get_event(event_id: str, identity: Identity = Depends(get_current_identity), db: Session = Depends(get_db)):
    """Fetch a single event with organizer and RSVPs."""
    return event_service.get_event(db, identity, event_id)


@router.put("/{event_id}/approve", response_model=EventOut)
async def approve_event(
    event_id: str,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
    hub: BroadcastHub = Depends(get_hub),
):
    """Approve a pending event (ADMIN only, idempotent)."""
    return await event_service.approve_event(db, hub, identity, event_id)


@router.put("/{event_id}", response_model=EventOut)
async def update_event(
    event_id: str,
    payload: EventUpdate,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
    hub: BroadcastHub = Depends(get_hub),
):
    """Partially update an event (its organizer or ADMIN)."""
    changes = payload.model_dump(exclude_unset=True)
    return await event_service.update_event(db, hub, identity, event_id, changes)


@router.delete("/{event_id}", response_model=EventDeletedOut)
async def delete_event(
    event_id: str,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
    hub: BroadcastHub = Depends(get_hub),
):
    """Delete an event and its RSVPs (its organizer or ADMIN)."""
    former_id, title = await event_service.delete_event(db, hub, identity, event_id)
    return EventDeletedOut(event_id=former_id, title=title)
