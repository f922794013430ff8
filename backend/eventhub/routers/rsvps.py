"""RSVP API routes, nested under an event."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from eventhub.database import get_db
from eventhub.dependencies import get_current_identity, get_hub
from eventhub.models.rsvp import RSVPStatus
from eventhub.schemas.rsvp import RSVPDetailOut, RSVPOut, RSVPRequest
from eventhub.security import Identity
from eventhub.services import rsvp_service
from eventhub.services.broadcast import BroadcastHub

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/{event_id}/rsvp", response_model=RSVPDetailOut)
async def respond(
    event_id: str,
    payload: Optional[RSVPRequest] = None,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
    hub: BroadcastHub = Depends(get_hub),
):
    """Set or change the caller's RSVP (defaults to GOING)."""
    status = payload.status if payload else RSVPStatus.going
    return await rsvp_service.respond(db, hub, identity, event_id, status)


@router.get("/{event_id}/rsvps", response_model=list[RSVPOut])
def list_rsvps(event_id: str, identity: Identity = Depends(get_current_identity), db: Session = Depends(get_db)):
    """List an event's RSVPs, newest first."""
    return rsvp_service.list_rsvps(db, event_id)
