"""Friendship ORM model.

A row is a directed request: ``user_id`` sent it, ``friend_id`` received it.
Once accepted it stands for a mutual friendship, so lookups check both
directions.
"""
import enum
from sqlalchemy import (
    Column, Integer, DateTime, ForeignKey, UniqueConstraint, CheckConstraint, Enum as SAEnum,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
from app.models.event import _utcnow


class FriendshipStatus(str, enum.Enum):
    pending = "pending"
    accepted = "accepted"
    declined = "declined"


class Friendship(Base):
    __tablename__ = "friends"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    friend_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    status = Column(
        SAEnum(FriendshipStatus, name="friend_status", native_enum=False, create_constraint=True),
        nullable=False,
        default=FriendshipStatus.pending,
        server_default=FriendshipStatus.pending.value,
    )
    created_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now(), onupdate=_utcnow)

    sender = relationship("User", foreign_keys=[user_id])
    receiver = relationship("User", foreign_keys=[friend_id])

    __table_args__ = (
        UniqueConstraint("user_id", "friend_id", name="uq_friends_pair"),
        CheckConstraint("user_id <> friend_id", name="ck_friends_not_self"),
    )
