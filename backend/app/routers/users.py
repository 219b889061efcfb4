"""User API routes."""
import logging
from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from app.database import get_db
from app.errors import ForbiddenError, NotFoundError
from app.models.user import User
from app.schemas.common import Envelope, envelope
from app.schemas.event import EventOut
from app.schemas.user import UserOut, UserUpdate
from app.services import user_service
from app.services.auth_service import get_current_user

logger = logging.getLogger(__name__)
router = APIRouter()


def _require_self(current_user: User, user_id: int) -> None:
    if current_user.id != user_id:
        raise ForbiddenError("You can only modify your own account")


@router.get("/", response_model=Envelope[list[UserOut]])
def list_users(db: Session = Depends(get_db)):
    users = user_service.list_users(db)
    return envelope(200, "Users retrieved successfully", [UserOut.model_validate(u) for u in users])


@router.get("/slug/{slug}", response_model=Envelope[UserOut])
def get_user_by_slug(slug: str, db: Session = Depends(get_db)):
    user = user_service.get_user_by_slug(db, slug)
    if not user:
        raise NotFoundError("No user found")
    return envelope(200, "User found", UserOut.model_validate(user))


@router.get("/{user_id}", response_model=Envelope[UserOut])
def get_user(user_id: int = Path(gt=0), db: Session = Depends(get_db)):
    user = user_service.get_user(db, user_id)
    if not user:
        raise NotFoundError("User not found")
    return envelope(200, "User retrieved successfully", UserOut.model_validate(user))


@router.put("/{user_id}", response_model=Envelope[UserOut])
def update_user(
    payload: UserUpdate,
    user_id: int = Path(gt=0),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update name and email. The slug keeps its registration value."""
    _require_self(current_user, user_id)
    user = user_service.update_user(db, user_id, payload.first_name, payload.last_name, payload.email)
    return envelope(200, "User updated successfully", UserOut.model_validate(user))


@router.delete("/{user_id}", response_model=Envelope[UserOut])
def delete_user(
    user_id: int = Path(gt=0),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    _require_self(current_user, user_id)
    user = user_service.delete_user(db, user_id)
    return envelope(200, "User deleted successfully", UserOut.model_validate(user))


@router.get("/{user_id}/events", response_model=Envelope[list[EventOut]])
def list_user_events(user_id: int = Path(gt=0), db: Session = Depends(get_db)):
    """Events the user hosts or is invited to."""
    events = user_service.get_events_for_user(db, user_id)
    return envelope(
        200, "Events for user retrieved successfully", [EventOut.model_validate(e) for e in events]
    )
