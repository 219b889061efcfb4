"""Event API routes — CRUD, hosts and invitations; delegates to event_service."""
import logging
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.errors import NotFoundError
from app.models.user import User
from app.schemas.common import Envelope, envelope
from app.schemas.event import EventCreate, EventUpdate, EventOut, HostOut, InviteOut, UserIdPayload
from app.services import event_service
from app.services.auth_service import get_current_user

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=Envelope[list[EventOut]])
def list_events(db: Session = Depends(get_db)):
    """All events, soonest first, each with its first host's profile."""
    events = event_service.get_all_events(db)
    return envelope(200, "Events retrieved successfully", [EventOut.model_validate(e) for e in events])


@router.post("/", response_model=Envelope[EventOut], status_code=status.HTTP_201_CREATED)
def create_event(
    payload: EventCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create an event; the caller becomes its host."""
    event = event_service.create_event(
        db=db,
        title=payload.title,
        description=payload.description,
        date=payload.date,
        location=payload.location,
        creator_id=current_user.id,
    )
    return envelope(201, "Event created successfully", EventOut.model_validate(event))


@router.get("/hosted", response_model=Envelope[list[EventOut]])
def list_hosted_events(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    events = event_service.get_events_hosted_by(db, current_user.id)
    return envelope(200, "Events where user is host retrieved", [EventOut.model_validate(e) for e in events])


@router.get("/{event_id}", response_model=Envelope[EventOut])
def get_event(event_id: int = Path(gt=0), db: Session = Depends(get_db)):
    event = event_service.get_event(db, event_id)
    if not event:
        raise NotFoundError("Event not found")
    return envelope(200, "Event retrieved successfully", EventOut.model_validate(event))


@router.put("/{event_id}", response_model=Envelope[EventOut])
def update_event(
    payload: EventUpdate,
    event_id: int = Path(gt=0),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Replace title, description, date and location (hosts only)."""
    event_service.check_host(db, event_id, current_user.id)
    event = event_service.update_event(
        db=db,
        event_id=event_id,
        title=payload.title,
        description=payload.description,
        date=payload.date,
        location=payload.location,
    )
    return envelope(200, "Event updated successfully", EventOut.model_validate(event))


@router.delete("/{event_id}", response_model=Envelope[None])
def delete_event(
    event_id: int = Path(gt=0),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    event_service.check_host(db, event_id, current_user.id)
    event_service.delete_event(db, event_id)
    return envelope(200, "Event deleted successfully")


@router.post("/{event_id}/invite", response_model=Envelope[InviteOut])
def invite_user(
    payload: UserIdPayload,
    event_id: int = Path(gt=0),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    event_service.check_host(db, event_id, current_user.id)
    invite = event_service.invite_user(db, event_id, payload.user_id)
    return envelope(200, "User invited to event successfully", InviteOut.model_validate(invite))


@router.post("/{event_id}/host", response_model=Envelope[HostOut])
def set_host(
    payload: UserIdPayload,
    event_id: int = Path(gt=0),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Add a co-host; existing hosts stay."""
    event_service.check_host(db, event_id, current_user.id)
    host = event_service.set_host(db, event_id, payload.user_id)
    return envelope(200, "User set as event host successfully", HostOut.model_validate(host))


@router.get("/{event_id}/invites", response_model=Envelope[list[InviteOut]])
def list_invites(event_id: int = Path(gt=0), db: Session = Depends(get_db)):
    invites = event_service.list_invites(db, event_id)
    return envelope(200, "Invites retrieved successfully", [InviteOut.model_validate(i) for i in invites])


@router.delete("/{event_id}/invite/{user_id}/remove", response_model=Envelope[InviteOut])
def remove_invite(
    event_id: int = Path(gt=0),
    user_id: int = Path(gt=0),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    event_service.check_host(db, event_id, current_user.id)
    invite = event_service.remove_invite(db, event_id, user_id)
    if invite is None:
        raise NotFoundError("Invite not found for given event and user")
    return envelope(200, "User removed from event invites successfully", InviteOut.model_validate(invite))
