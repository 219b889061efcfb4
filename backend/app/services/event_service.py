"""Core event service — events, hosts and the invitation lifecycle.

Responsibilities:
- Event create/update/delete; creation and the creator's host row commit together
- Host management (additive co-hosts)
- Invitations: existence checks, one invite per (event, user)
- Invitation status state machine:
      pending → accepted | maybe | declined
      accepted | maybe | declined → any other of the three
  Re-entering the current status is rejected, and nothing returns to pending.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.errors import (
    ConstraintViolationError,
    ForbiddenError,
    InvalidStatusError,
    InvalidTransitionError,
    NoOpRejectedError,
    NotFoundError,
)
from app.models.event import Event, EventHost
from app.models.invite import EventInvite, InviteStatus
from app.models.user import User

logger = logging.getLogger(__name__)

VALID_STATUSES = [s.value for s in InviteStatus]


def _parse_status(value: str) -> InviteStatus:
    try:
        return InviteStatus(value)
    except ValueError:
        raise InvalidStatusError(f"Invalid status. Must be one of: {', '.join(VALID_STATUSES)}")


def _require_event(db: Session, event_id: int) -> Event:
    event = db.query(Event).filter(Event.id == event_id).first()
    if not event:
        raise NotFoundError("Event not found")
    return event


def _require_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")
    return user


def is_host(db: Session, event_id: int, user_id: int) -> bool:
    return (
        db.query(EventHost)
        .filter(EventHost.event_id == event_id, EventHost.user_id == user_id)
        .first()
        is not None
    )


def check_host(db: Session, event_id: int, user_id: int) -> None:
    """Only hosts may manage an event. A missing event reports 404 before 403."""
    _require_event(db, event_id)
    if not is_host(db, event_id, user_id):
        raise ForbiddenError("Only a host may manage this event")


def create_event(
    db: Session,
    title: str,
    description: Optional[str],
    date: datetime,
    location: Optional[str],
    creator_id: int,
) -> Event:
    """Insert the event and make the creator its host in a single transaction."""
    _require_user(db, creator_id)
    event = Event(title=title, description=description, date=date, location=location)
    db.add(event)
    try:
        db.flush()
        db.add(EventHost(event_id=event.id, user_id=creator_id))
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Rolled back event '%s': host %s could not be attached", title, creator_id)
        raise ConstraintViolationError("Event could not be created")
    db.refresh(event)
    logger.info("Created event '%s' (%s) hosted by %s", title, event.id, creator_id)
    return event


def update_event(
    db: Session,
    event_id: int,
    title: str,
    description: Optional[str],
    date: datetime,
    location: Optional[str],
) -> Event:
    """Overwrite every editable field; omitted optional fields become NULL."""
    event = _require_event(db, event_id)
    event.title = title
    event.description = description
    event.date = date
    event.location = location
    event.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(event)
    logger.info("Updated event %s", event_id)
    return event


def delete_event(db: Session, event_id: int) -> Event:
    """Delete an event; its host and invite rows go with it."""
    event = _require_event(db, event_id)
    db.delete(event)
    db.commit()
    logger.info("Deleted event %s", event_id)
    return event


def get_all_events(db: Session) -> list[Event]:
    return db.query(Event).order_by(Event.date).all()


def get_event(db: Session, event_id: int) -> Optional[Event]:
    return db.query(Event).filter(Event.id == event_id).first()


def get_events_hosted_by(db: Session, user_id: int) -> list[Event]:
    return (
        db.query(Event)
        .join(EventHost, EventHost.event_id == Event.id)
        .filter(EventHost.user_id == user_id)
        .order_by(Event.date)
        .all()
    )


def set_host(db: Session, event_id: int, user_id: int) -> EventHost:
    """Add a co-host. Existing hosts are kept."""
    _require_event(db, event_id)
    _require_user(db, user_id)
    if is_host(db, event_id, user_id):
        raise ConstraintViolationError("User is already a host of this event")

    host = EventHost(event_id=event_id, user_id=user_id)
    db.add(host)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConstraintViolationError("User is already a host of this event")
    db.refresh(host)
    logger.info("User %s set as host of event %s", user_id, event_id)
    return host


def invite_user(db: Session, event_id: int, user_id: int) -> EventInvite:
    _require_event(db, event_id)
    _require_user(db, user_id)
    if get_invitation_status(db, event_id, user_id) is not None:
        raise ConstraintViolationError("User is already invited to this event")

    invite = EventInvite(event_id=event_id, user_id=user_id, status=InviteStatus.pending)
    db.add(invite)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConstraintViolationError("User is already invited to this event")
    db.refresh(invite)
    logger.info("Invited user %s to event %s", user_id, event_id)
    return invite


def list_invites(db: Session, event_id: int) -> list[EventInvite]:
    return db.query(EventInvite).filter(EventInvite.event_id == event_id).all()


def remove_invite(db: Session, event_id: int, user_id: int) -> Optional[EventInvite]:
    invite = get_invitation_status(db, event_id, user_id)
    if invite is None:
        return None
    db.delete(invite)
    db.commit()
    logger.info("Removed invite of user %s from event %s", user_id, event_id)
    return invite


def get_invitation_status(db: Session, event_id: int, user_id: int) -> Optional[EventInvite]:
    return (
        db.query(EventInvite)
        .filter(EventInvite.event_id == event_id, EventInvite.user_id == user_id)
        .first()
    )


def update_invitation_status(db: Session, event_id: int, user_id: int, new_status: str) -> EventInvite:
    """Drive one invitee's response through the invitation state machine."""
    target = _parse_status(new_status)

    invite = get_invitation_status(db, event_id, user_id)
    if invite is None:
        raise NotFoundError("Invitation not found")

    if invite.status == target:
        raise NoOpRejectedError(f"Invitation is already {target.value}")

    if target == InviteStatus.pending:
        raise InvalidTransitionError("A responded invitation cannot return to pending")

    previous = invite.status
    invite.status = target
    invite.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(invite)
    logger.info(
        "User %s changed invitation to event %s from %s to %s",
        user_id, event_id, previous.value, target.value,
    )
    return invite


def get_attendees(db: Session, event_id: int, status_filter: Optional[str] = None) -> list[dict]:
    """Invitees with their response, most recently updated first."""
    _require_event(db, event_id)
    query = (
        db.query(User, EventInvite)
        .join(EventInvite, EventInvite.user_id == User.id)
        .filter(EventInvite.event_id == event_id)
    )
    if status_filter:
        query = query.filter(EventInvite.status == _parse_status(status_filter))

    rows = query.order_by(EventInvite.updated_at.desc()).all()
    return [
        {
            "id": user.id,
            "first_name": user.first_name,
            "last_name": user.last_name,
            "email": user.email,
            "slug": user.slug,
            "status": invite.status.value,
            "invited_at": invite.created_at,
            "responded_at": invite.updated_at,
        }
        for user, invite in rows
    ]


def count_attendees(db: Session, event_id: int) -> dict[str, int]:
    """Number of invitees per status; every status is present, zero if unused."""
    _require_event(db, event_id)
    counts = {s: 0 for s in VALID_STATUSES}
    rows = (
        db.query(EventInvite.status, func.count())
        .filter(EventInvite.event_id == event_id)
        .group_by(EventInvite.status)
        .all()
    )
    for invite_status, total in rows:
        counts[invite_status.value] = total
    return counts
