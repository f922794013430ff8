"""User ORM model."""
import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Enum as SAEnum
from sqlalchemy.orm import relationship

from eventhub.database import Base, UTCDateTime


class Role(str, enum.Enum):
    admin = "ADMIN"
    organizer = "ORGANIZER"
    attendee = "ATTENDEE"


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(SAEnum(Role), nullable=False, default=Role.attendee)
    created_at = Column(UTCDateTime(), nullable=False, default=lambda: datetime.now(timezone.utc))

    events = relationship("Event", back_populates="organizer")
    rsvps = relationship("RSVP", back_populates="user")
