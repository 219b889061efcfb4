"""Friendship service — directed friend requests and their status lifecycle.

Rows are stored sender → receiver (``user_id`` → ``friend_id``) so that only
the receiver's side can accept or decline. At most one row may exist for an
unordered pair of users: a request in the opposite direction of an existing
row is refused instead of creating a second, competing row.

Status transitions:
    pending → accepted
    pending → declined
Removing a row (either direction) serves as unfriend and as cancel-request.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import and_, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.errors import ConstraintViolationError, InvalidInputError, NotFoundError
from app.models.friendship import Friendship, FriendshipStatus
from app.models.user import User

logger = logging.getLogger(__name__)


def _pair_filter(user_a: int, user_b: int):
    return or_(
        and_(Friendship.user_id == user_a, Friendship.friend_id == user_b),
        and_(Friendship.user_id == user_b, Friendship.friend_id == user_a),
    )


def find_friendship(db: Session, user_a: int, user_b: int) -> Optional[Friendship]:
    """The row linking two users, whichever of them sent it."""
    return db.query(Friendship).filter(_pair_filter(user_a, user_b)).first()


def send_request(db: Session, sender_id: int, receiver_id: int) -> Friendship:
    if sender_id == receiver_id:
        raise InvalidInputError("Cannot send a friend request to yourself")

    found = db.query(User.id).filter(User.id.in_([sender_id, receiver_id])).count()
    if found != 2:
        raise NotFoundError("User not found")

    existing = find_friendship(db, sender_id, receiver_id)
    if existing:
        if existing.status == FriendshipStatus.accepted:
            raise ConstraintViolationError("You are already friends")
        if existing.status == FriendshipStatus.declined:
            raise ConstraintViolationError("A declined friend request exists; remove it first")
        if existing.user_id == sender_id:
            raise ConstraintViolationError("Friend request already exists")
        raise ConstraintViolationError("This user has already sent you a friend request")

    friendship = Friendship(
        user_id=sender_id,
        friend_id=receiver_id,
        status=FriendshipStatus.pending,
    )
    db.add(friendship)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConstraintViolationError("Friend request already exists")
    db.refresh(friendship)
    logger.info("User %s sent a friend request to %s", sender_id, receiver_id)
    return friendship


def _resolve_pending(
    db: Session, sender_id: int, receiver_id: int, new_status: FriendshipStatus
) -> Optional[Friendship]:
    """Move the pending sender → receiver row to ``new_status``; None if there is none."""
    friendship = (
        db.query(Friendship)
        .filter(
            Friendship.user_id == sender_id,
            Friendship.friend_id == receiver_id,
            Friendship.status == FriendshipStatus.pending,
        )
        .first()
    )
    if not friendship:
        logger.warning(
            "No pending friend request from %s to %s to mark %s",
            sender_id, receiver_id, new_status.value,
        )
        return None

    friendship.status = new_status
    friendship.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(friendship)
    logger.info("Friend request %s → %s %s", sender_id, receiver_id, new_status.value)
    return friendship


def accept_request(db: Session, sender_id: int, receiver_id: int) -> Optional[Friendship]:
    return _resolve_pending(db, sender_id, receiver_id, FriendshipStatus.accepted)


def decline_request(db: Session, sender_id: int, receiver_id: int) -> Optional[Friendship]:
    return _resolve_pending(db, sender_id, receiver_id, FriendshipStatus.declined)


def remove_friendship(db: Session, user_a: int, user_b: int) -> Optional[Friendship]:
    """Delete the row between two users regardless of who sent it."""
    friendship = find_friendship(db, user_a, user_b)
    if not friendship:
        return None
    db.delete(friendship)
    db.commit()
    logger.info("Removed friendship %s between %s and %s", friendship.id, user_a, user_b)
    return friendship


def list_friendships(db: Session, user_id: int) -> list[Friendship]:
    """Every row the user is part of, any status, either direction."""
    return (
        db.query(Friendship)
        .filter(or_(Friendship.user_id == user_id, Friendship.friend_id == user_id))
        .all()
    )


def list_accepted_friends(db: Session, user_id: int) -> list[User]:
    return (
        db.query(User)
        .join(
            Friendship,
            or_(
                and_(Friendship.user_id == user_id, Friendship.friend_id == User.id),
                and_(Friendship.friend_id == user_id, Friendship.user_id == User.id),
            ),
        )
        .filter(Friendship.status == FriendshipStatus.accepted, User.id != user_id)
        .all()
    )


def list_incoming_requests(db: Session, user_id: int) -> list[tuple[Friendship, User]]:
    """Pending requests addressed to the user, each with the sender's profile."""
    return (
        db.query(Friendship, User)
        .join(User, User.id == Friendship.user_id)
        .filter(Friendship.friend_id == user_id, Friendship.status == FriendshipStatus.pending)
        .all()
    )


def list_outgoing_requests(db: Session, user_id: int) -> list[tuple[Friendship, User]]:
    """Pending requests the user sent, each with the receiver's profile."""
    return (
        db.query(Friendship, User)
        .join(User, User.id == Friendship.friend_id)
        .filter(Friendship.user_id == user_id, Friendship.status == FriendshipStatus.pending)
        .all()
    )
