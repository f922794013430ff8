"""RSVP coordination — one response per user per event.

The row for a (user, event) pair is written with the store's atomic upsert.
No lock is taken here: concurrent responses from the same
user resolve to whichever write the database commits last.
"""
import logging

import anyio.to_thread
from sqlalchemy.orm import Session, selectinload

from eventhub.errors import NotFoundError
from eventhub.models.rsvp import RSVP, RSVPStatus
from eventhub.schemas.rsvp import RSVPDetailOut
from eventhub.security import Identity
from eventhub.services import store
from eventhub.services.broadcast import BroadcastHub, EnvelopeType
from eventhub.services.policy import Action, require

logger = logging.getLogger(__name__)


def _record(db: Session, actor: Identity, event_id: str, status: RSVPStatus) -> RSVPDetailOut:
    event = store.find_event(db, event_id)
    if not event:
        raise NotFoundError("Event not found")
    require(actor.role, actor.subject, Action.rsvp_event, event)

    rsvp = store.upsert_rsvp(db, actor.subject, event.id, RSVPStatus(status))
    logger.info("RSVP %s by %s for event '%s' (%s)", rsvp.status.value, actor.email, event.title, event.id)
    return RSVPDetailOut.model_validate(rsvp)


async def respond(
    db: Session,
    hub: BroadcastHub,
    actor: Identity,
    event_id: str,
    status: RSVPStatus = RSVPStatus.going,
) -> RSVPDetailOut:
    """Record ``actor``'s response to an event, replacing any earlier one."""
    rsvp = await anyio.to_thread.run_sync(_record, db, actor, event_id, status)
    await hub.broadcast(EnvelopeType.rsvp_updated, rsvp=rsvp.model_dump(mode="json"), event_id=rsvp.event_id)
    return rsvp


def list_rsvps(db: Session, event_id: str) -> list[RSVP]:
    """All RSVPs for an event, newest first. Unknown events have none."""
    return (
        db.query(RSVP)
        .options(selectinload(RSVP.user))
        .filter(RSVP.event_id == event_id)
        .order_by(RSVP.created_at.desc())
        .all()
    )
