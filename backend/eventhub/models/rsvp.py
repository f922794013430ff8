"""RSVP ORM model — one row per (user, event) pair."""
import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, ForeignKey, UniqueConstraint, Enum as SAEnum
from sqlalchemy.orm import relationship

from eventhub.database import Base, UTCDateTime


class RSVPStatus(str, enum.Enum):
    going = "GOING"
    maybe = "MAYBE"
    not_going = "NOT_GOING"


class RSVP(Base):
    __tablename__ = "rsvps"
    __table_args__ = (UniqueConstraint("user_id", "event_id", name="uq_rsvps_user_event"),)

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    event_id = Column(String(36), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(SAEnum(RSVPStatus), nullable=False, default=RSVPStatus.going)
    created_at = Column(UTCDateTime(), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(UTCDateTime(), nullable=False, default=lambda: datetime.now(timezone.utc))

    user = relationship("User", back_populates="rsvps")
    event = relationship("Event", back_populates="rsvps")
