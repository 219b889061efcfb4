"""EventInvite ORM model."""
import enum
from sqlalchemy import Column, Integer, DateTime, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
from app.models.event import _utcnow


class InviteStatus(str, enum.Enum):
    pending = "pending"
    accepted = "accepted"
    maybe = "maybe"
    declined = "declined"


class EventInvite(Base):
    __tablename__ = "event_invites"

    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    status = Column(
        SAEnum(InviteStatus, name="invite_status", native_enum=False, create_constraint=True),
        nullable=False,
        default=InviteStatus.pending,
        server_default=InviteStatus.pending.value,
    )
    created_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now(), onupdate=_utcnow)

    event = relationship("Event", back_populates="invites")
    user = relationship("User")
