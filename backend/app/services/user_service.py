"""User profile reads and updates."""
import logging
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from app.errors import ConstraintViolationError, NotFoundError
from app.models.event import Event, EventHost
from app.models.invite import EventInvite
from app.models.user import User

logger = logging.getLogger(__name__)


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.id).all()


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_slug(db: Session, slug: str) -> Optional[User]:
    return db.query(User).filter(User.slug == slug).first()


def update_user(db: Session, user_id: int, first_name: str, last_name: str, email: str) -> User:
    """Overwrite name and email. The slug is left as assigned at registration."""
    user = get_user(db, user_id)
    if not user:
        raise NotFoundError("User not found")

    taken = db.query(User.id).filter(User.email == email, User.id != user_id).first()
    if taken is not None:
        raise ConstraintViolationError("Email already registered")

    user.first_name = first_name
    user.last_name = last_name
    user.email = email
    db.commit()
    db.refresh(user)
    logger.info("Updated user %s", user_id)
    return user


def delete_user(db: Session, user_id: int) -> User:
    user = get_user(db, user_id)
    if not user:
        raise NotFoundError("User not found")
    db.delete(user)
    db.commit()
    logger.info("Deleted user %s", user_id)
    return user


def get_events_for_user(db: Session, user_id: int) -> list[Event]:
    """Events the user hosts or is invited to, each listed once."""
    hosted = select(EventHost.event_id).where(EventHost.user_id == user_id)
    invited = select(EventInvite.event_id).where(EventInvite.user_id == user_id)
    return (
        db.query(Event)
        .filter(or_(Event.id.in_(hosted), Event.id.in_(invited)))
        .order_by(Event.date)
        .all()
    )
