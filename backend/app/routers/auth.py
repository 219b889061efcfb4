"""Registration and login routes. These are the only unauthenticated routes."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.common import Envelope, envelope
from app.schemas.user import LoginOut, UserLogin, UserOut, UserRegister
from app.services import auth_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/register", response_model=Envelope[UserOut], status_code=status.HTTP_201_CREATED)
def register(payload: UserRegister, db: Session = Depends(get_db)):
    user = auth_service.register_user(
        db,
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        password=payload.password,
    )
    return envelope(201, "User created successfully", UserOut.model_validate(user))


@router.post("/login", response_model=Envelope[LoginOut])
def login(payload: UserLogin, db: Session = Depends(get_db)):
    """Verify credentials and hand back a signed bearer token."""
    user = auth_service.authenticate(db, payload.email, payload.password)
    token = auth_service.create_access_token(user)
    logger.info("User %s logged in", user.id)
    return envelope(200, "Login successful", LoginOut(token=token, user=UserOut.model_validate(user)))
