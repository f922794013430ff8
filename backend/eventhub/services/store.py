"""Record store helpers on top of the SQLAlchemy session.

The RSVP upsert is a single ``INSERT ... ON CONFLICT (user_id, event_id)
DO UPDATE`` statement, so two concurrent responses for the same pair can
never produce two rows; whichever statement the database applies last wins.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from eventhub.errors import ConflictError, StorageError
from eventhub.models.event import Event
from eventhub.models.rsvp import RSVP, RSVPStatus

logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def find_event(db: Session, event_id: str) -> Optional[Event]:
    return db.query(Event).filter(Event.id == event_id).first()


def commit(db: Session, what: str) -> None:
    """Commit the session, translating store failures into the error taxonomy."""
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Integrity violation while trying to %s: %s", what, exc.orig)
        raise ConflictError(f"Could not {what}: conflicting record") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Store failure while trying to %s", what)
        raise StorageError(f"Could not {what}") from exc


def upsert_rsvp(db: Session, user_id: str, event_id: str, status: RSVPStatus) -> RSVP:
    """Create or overwrite the RSVP for ``(user_id, event_id)`` and return it."""
    dialect = db.get_bind().dialect.name
    insert = _UPSERT_DIALECTS.get(dialect)
    if insert is None:
        raise StorageError(f"Atomic upsert is not supported on {dialect}")

    now = datetime.now(timezone.utc)
    stmt = insert(RSVP).values(
        id=str(uuid.uuid4()),
        user_id=user_id,
        event_id=event_id,
        status=status,
        created_at=now,
        updated_at=now,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["user_id", "event_id"],
        set_={"status": stmt.excluded.status, "updated_at": stmt.excluded.updated_at},
    )
    try:
        db.execute(stmt)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("RSVP upsert failed for user %s on event %s", user_id, event_id)
        raise StorageError("Could not record RSVP") from exc
    commit(db, "record RSVP")

    return (
        db.query(RSVP)
        .populate_existing()
        .filter(RSVP.user_id == user_id, RSVP.event_id == event_id)
        .one()
    )
