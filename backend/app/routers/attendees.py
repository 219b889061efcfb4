"""Invitation response / attendee API routes."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.errors import ForbiddenError, NotFoundError
from app.models.user import User
from app.schemas.common import Envelope, envelope
from app.schemas.event import AttendeeCounts, AttendeeOut, InvitationStatusUpdate, InviteOut
from app.services import event_service
from app.services.auth_service import get_current_user

logger = logging.getLogger(__name__)
router = APIRouter()


@router.put("/invitation/status", response_model=Envelope[InviteOut])
def update_invitation_status(
    payload: InvitationStatusUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Respond to an invitation: accepted, maybe or declined.

    The invitee answers for themself; a host may record an answer on their behalf.
    """
    if event_service.get_event(db, payload.event_id) is None:
        raise NotFoundError("Event not found")
    if payload.user_id != current_user.id and not event_service.is_host(db, payload.event_id, current_user.id):
        raise ForbiddenError("You can only respond to your own invitations")
    invite = event_service.update_invitation_status(
        db, payload.event_id, payload.user_id, payload.status
    )
    return envelope(200, f"Invitation {invite.status.value} successfully", InviteOut.model_validate(invite))


@router.get("/{event_id}/invitation/status", response_model=Envelope[InviteOut])
def get_invitation_status(
    event_id: int = Path(gt=0),
    user_id: Optional[int] = Query(None, alias="userId", gt=0),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """One invitee's invite row; defaults to the caller. ``data`` is null when not invited."""
    target = user_id or current_user.id
    invite = event_service.get_invitation_status(db, event_id, target)
    data = InviteOut.model_validate(invite) if invite else None
    return envelope(200, "Invitation status retrieved", data)


@router.get("/{event_id}/attendees", response_model=Envelope[list[AttendeeOut]])
def list_attendees(
    event_id: int = Path(gt=0),
    status_filter: Optional[str] = Query(None, alias="status"),
    db: Session = Depends(get_db),
):
    attendees = event_service.get_attendees(db, event_id, status_filter)
    return envelope(200, "Attendees retrieved successfully", attendees)


@router.get("/{event_id}/attendees/counts", response_model=Envelope[AttendeeCounts])
def count_attendees(event_id: int = Path(gt=0), db: Session = Depends(get_db)):
    counts = event_service.count_attendees(db, event_id)
    return envelope(200, "Attendee counts retrieved successfully", counts)
