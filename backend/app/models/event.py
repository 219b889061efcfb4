"""Event and EventHost ORM models."""
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    date = Column(DateTime(timezone=True), nullable=False)
    location = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now(), onupdate=_utcnow)

    hosts = relationship(
        "EventHost",
        back_populates="event",
        cascade="all, delete-orphan",
        order_by="EventHost.created_at",
    )
    invites = relationship("EventInvite", back_populates="event", cascade="all, delete-orphan")

    @property
    def primary_host(self):
        """The earliest host row's user, i.e. the creator unless they were removed."""
        return self.hosts[0].user if self.hosts else None

    @property
    def host_id(self):
        host = self.primary_host
        return host.id if host else None

    @property
    def host_first_name(self):
        host = self.primary_host
        return host.first_name if host else None

    @property
    def host_last_name(self):
        host = self.primary_host
        return host.last_name if host else None

    @property
    def host_email(self):
        host = self.primary_host
        return host.email if host else None

    @property
    def host_slug(self):
        host = self.primary_host
        return host.slug if host else None


class EventHost(Base):
    __tablename__ = "event_hosts"

    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now())

    event = relationship("Event", back_populates="hosts")
    user = relationship("User")
