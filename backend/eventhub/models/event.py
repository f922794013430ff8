"""Event ORM model and its approval state machine."""
import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import relationship

from eventhub.database import Base, UTCDateTime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ApprovalState(str, enum.Enum):
    """Pending -> Approved is the only transition; there is no way back."""

    pending = "PENDING"
    approved = "APPROVED"


class Event(Base):
    __tablename__ = "events"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    date = Column(UTCDateTime(), nullable=False, index=True)
    location = Column(String(500), nullable=False)
    organizer_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    approval = Column(SAEnum(ApprovalState), nullable=False, default=ApprovalState.pending)
    created_at = Column(UTCDateTime(), nullable=False, default=_utcnow)
    updated_at = Column(UTCDateTime(), nullable=False, default=_utcnow, onupdate=_utcnow)

    organizer = relationship("User", back_populates="events")
    rsvps = relationship(
        "RSVP",
        back_populates="event",
        cascade="all, delete-orphan",
        order_by="RSVP.created_at.desc()",
    )

    @property
    def approved(self) -> bool:
        return self.approval == ApprovalState.approved

    def approve(self) -> None:
        """Move to Approved. Calling it on an approved event changes nothing."""
        self.approval = ApprovalState.approved
