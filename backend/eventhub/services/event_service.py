"""Event lifecycle — creation, approval, update and deletion.

Responsibilities:
- Authorization through the policy module on every call
- Required-field validation on create, partial updates on update
- Approval gate: events start Pending unless an ADMIN creates them
- Cascade removal of RSVPs on delete
- One broadcast per successful mutation, sent after the commit

The session is blocking, so each mutation does its store work (including
the lazy loads behind the response projection) in a worker thread, and only
the broadcast runs on the event loop.
"""
import logging
from typing import Any, Optional

import anyio.to_thread
from sqlalchemy.orm import Session, selectinload

from eventhub.errors import NotFoundError, ValidationError
from eventhub.models.event import ApprovalState, Event
from eventhub.models.rsvp import RSVP
from eventhub.models.user import Role
from eventhub.schemas.event import EventOut
from eventhub.security import Identity
from eventhub.services import store
from eventhub.services.broadcast import BroadcastHub, EnvelopeType
from eventhub.services.policy import Action, require, sees_pending_events

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "description", "date", "location")
EDITABLE_FIELDS = REQUIRED_FIELDS


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _load_event(db: Session, event_id: str) -> Event:
    event = store.find_event(db, event_id)
    if not event:
        raise NotFoundError("Event not found")
    return event


def _create(db: Session, actor: Identity, fields: dict[str, Any]) -> EventOut:
    require(actor.role, actor.subject, Action.create_event)

    missing = [name for name in REQUIRED_FIELDS if _is_blank(fields.get(name))]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    approval = ApprovalState.approved if actor.role == Role.admin else ApprovalState.pending
    event = Event(
        title=fields["title"].strip(),
        description=fields["description"].strip(),
        date=fields["date"],
        location=fields["location"].strip(),
        organizer_id=actor.subject,
        approval=approval,
    )
    db.add(event)
    store.commit(db, "create event")
    db.refresh(event)
    logger.info(
        "Created event '%s' (%s) by %s, %s",
        event.title, event.id, actor.email, approval.value.lower(),
    )
    return EventOut.model_validate(event)


def _approve(db: Session, actor: Identity, event_id: str) -> EventOut:
    require(actor.role, actor.subject, Action.approve_event)
    event = _load_event(db, event_id)

    if event.approved:
        logger.info("Event %s already approved; re-approval by %s ignored", event_id, actor.email)
    else:
        event.approve()
        store.commit(db, "approve event")
        db.refresh(event)
        logger.info("Approved event '%s' (%s) by %s", event.title, event.id, actor.email)
    return EventOut.model_validate(event)


def _update(db: Session, actor: Identity, event_id: str, changes: dict[str, Any]) -> EventOut:
    event = _load_event(db, event_id)
    require(actor.role, actor.subject, Action.update_event, event)

    updates = {name: value for name, value in changes.items() if name in EDITABLE_FIELDS and value is not None}
    blank = [name for name, value in updates.items() if _is_blank(value)]
    if blank:
        raise ValidationError(f"Fields cannot be blank: {', '.join(blank)}")

    for name, value in updates.items():
        setattr(event, name, value.strip() if isinstance(value, str) else value)

    store.commit(db, "update event")
    db.refresh(event)
    logger.info("Updated event %s (%s) by %s", event.id, ", ".join(sorted(updates)) or "no changes", actor.email)
    return EventOut.model_validate(event)


def _delete(db: Session, actor: Identity, event_id: str) -> tuple[str, str]:
    event = _load_event(db, event_id)
    require(actor.role, actor.subject, Action.delete_event, event)

    former_id, former_title = event.id, event.title
    db.delete(event)
    store.commit(db, "delete event")
    logger.info("Deleted event '%s' (%s) by %s", former_title, former_id, actor.email)
    return former_id, former_title


async def create_event(db: Session, hub: BroadcastHub, actor: Identity, fields: dict[str, Any]) -> EventOut:
    """Create an event; ADMIN-created events are approved on the spot."""
    event = await anyio.to_thread.run_sync(_create, db, actor, fields)
    await hub.broadcast(EnvelopeType.event_created, event=event.model_dump(mode="json"))
    return event


async def approve_event(db: Session, hub: BroadcastHub, actor: Identity, event_id: str) -> EventOut:
    """Approve a pending event. Approving an approved event is a no-op success."""
    event = await anyio.to_thread.run_sync(_approve, db, actor, event_id)
    await hub.broadcast(EnvelopeType.event_approved, event=event.model_dump(mode="json"))
    return event


async def update_event(
    db: Session,
    hub: BroadcastHub,
    actor: Identity,
    event_id: str,
    changes: dict[str, Any],
) -> EventOut:
    """Apply the supplied fields only; omitted or null fields keep their values."""
    event = await anyio.to_thread.run_sync(_update, db, actor, event_id, changes)
    await hub.broadcast(EnvelopeType.event_updated, event=event.model_dump(mode="json"))
    return event


async def delete_event(db: Session, hub: BroadcastHub, actor: Identity, event_id: str) -> tuple[str, str]:
    """Delete an event together with its RSVPs; return its former id and title."""
    former_id, former_title = await anyio.to_thread.run_sync(_delete, db, actor, event_id)
    await hub.broadcast(EnvelopeType.event_deleted, event_id=former_id, event_title=former_title)
    return former_id, former_title


def list_events(db: Session, actor: Identity) -> list[Event]:
    """Events visible to ``actor``, soonest first, with organizer and RSVPs loaded."""
    query = db.query(Event).options(
        selectinload(Event.organizer),
        selectinload(Event.rsvps).selectinload(RSVP.user),
    )
    if not sees_pending_events(actor.role):
        query = query.filter(Event.approval == ApprovalState.approved)
    return query.order_by(Event.date.asc(), Event.created_at.asc()).all()


def get_event(db: Session, actor: Identity, event_id: str) -> Event:
    """Fetch one event; a pending event exists only for ADMIN and its organizer."""
    event: Optional[Event] = store.find_event(db, event_id)
    if not event:
        raise NotFoundError("Event not found")
    if not event.approved and actor.role != Role.admin and event.organizer_id != actor.subject:
        raise NotFoundError("Event not found")
    return event
