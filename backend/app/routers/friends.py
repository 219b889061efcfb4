"""Friendship API routes."""
import logging
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.errors import ForbiddenError, InvalidInputError
from app.models.user import User
from app.schemas.common import Envelope, envelope
from app.schemas.friend import FriendPair, FriendRequestOut, FriendshipOut
from app.schemas.user import UserOut
from app.services import friend_service
from app.services.auth_service import get_current_user

logger = logging.getLogger(__name__)
router = APIRouter()


def _require_party(current_user: User, pair: FriendPair) -> None:
    if current_user.id not in (pair.user_id, pair.friend_id):
        raise ForbiddenError("You can only manage your own friendships")


def _require_receiver(current_user: User, pair: FriendPair) -> None:
    if current_user.id != pair.friend_id:
        raise ForbiddenError("Only the receiver can answer a friend request")


def _request_out(friendship, user) -> FriendRequestOut:
    return FriendRequestOut(
        id=friendship.id,
        user_id=friendship.user_id,
        friend_id=friendship.friend_id,
        status=friendship.status.value,
        created_at=friendship.created_at,
        updated_at=friendship.updated_at,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        slug=user.slug,
    )


@router.post("/friend-request", response_model=Envelope[FriendshipOut], status_code=status.HTTP_201_CREATED)
def send_friend_request(
    payload: FriendPair,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """``userId`` sends a request to ``friendId``."""
    if current_user.id != payload.user_id:
        raise ForbiddenError("You can only send friend requests as yourself")
    friendship = friend_service.send_request(db, payload.user_id, payload.friend_id)
    return envelope(201, "Friend request sent", FriendshipOut.model_validate(friendship))


@router.put("/accept", response_model=Envelope[FriendshipOut])
def accept_friend_request(
    payload: FriendPair,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Accept the pending request ``userId`` → ``friendId``."""
    _require_receiver(current_user, payload)
    friendship = friend_service.accept_request(db, payload.user_id, payload.friend_id)
    if not friendship:
        raise InvalidInputError("Can not accept friend request")
    return envelope(200, "Friend request accepted", FriendshipOut.model_validate(friendship))


@router.put("/decline", response_model=Envelope[FriendshipOut])
def decline_friend_request(
    payload: FriendPair,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    _require_receiver(current_user, payload)
    friendship = friend_service.decline_request(db, payload.user_id, payload.friend_id)
    if not friendship:
        raise InvalidInputError("Can not decline friend request")
    return envelope(200, "Friend request declined", FriendshipOut.model_validate(friendship))


@router.delete("/remove", response_model=Envelope[FriendshipOut])
def remove_friend(
    payload: FriendPair,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Unfriend, or cancel a request, whichever direction the row was stored in."""
    _require_party(current_user, payload)
    friendship = friend_service.remove_friendship(db, payload.user_id, payload.friend_id)
    if not friendship:
        raise InvalidInputError("Can not delete friend")
    return envelope(200, "Friend deleted", FriendshipOut.model_validate(friendship))


@router.get("/friendships/{user_id}", response_model=Envelope[list[FriendshipOut]])
def list_friendships(user_id: int = Path(gt=0), db: Session = Depends(get_db)):
    friendships = friend_service.list_friendships(db, user_id)
    return envelope(200, "Friendships retrieved", [FriendshipOut.model_validate(f) for f in friendships])


@router.get("/requests/incoming/{user_id}", response_model=Envelope[list[FriendRequestOut]])
def list_incoming_requests(user_id: int = Path(gt=0), db: Session = Depends(get_db)):
    rows = friend_service.list_incoming_requests(db, user_id)
    return envelope(200, "Friend requests retrieved", [_request_out(f, u) for f, u in rows])


@router.get("/requests/outgoing/{user_id}", response_model=Envelope[list[FriendRequestOut]])
def list_outgoing_requests(user_id: int = Path(gt=0), db: Session = Depends(get_db)):
    rows = friend_service.list_outgoing_requests(db, user_id)
    return envelope(200, "Sent friend requests retrieved", [_request_out(f, u) for f, u in rows])


@router.get("/{user_id}", response_model=Envelope[list[UserOut]])
def list_friends(user_id: int = Path(gt=0), db: Session = Depends(get_db)):
    friends = friend_service.list_accepted_friends(db, user_id)
    return envelope(200, "Users friends retrieved", [UserOut.model_validate(u) for u in friends])
