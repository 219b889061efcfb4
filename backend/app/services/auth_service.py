"""Registration, login and bearer-token handling.

- Slugs are derived from the user's name and disambiguated with a numeric
  suffix (``ann-lee``, ``ann-lee-1``, ...). They are assigned once.
- Passwords are stored as bcrypt hashes.
- Access tokens are HS256 JWTs carrying the user id, email and slug.
"""
import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.errors import AuthError, ConstraintViolationError, ForbiddenError, InvalidInputError, NotFoundError
from app.models.user import User
from app.schemas.user import MAX_PASSWORD_BYTES

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


def slugify(first_name: str, last_name: str) -> str:
    slug = f"{first_name} {last_name}".lower()
    slug = re.sub(r"[^a-z0-9]+", "-", slug)
    return slug.strip("-")


def unique_slug(db: Session, first_name: str, last_name: str) -> str:
    base = slugify(first_name, last_name)
    candidate = base
    count = 1
    while db.query(User.id).filter(User.slug == candidate).first() is not None:
        candidate = f"{base}-{count}"
        count += 1
    return candidate


def hash_password(password: str) -> str:
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise InvalidInputError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(encoded, bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """False for any password bcrypt could not have hashed (over 72 bytes)."""
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(encoded, hashed.encode("utf-8"))


def register_user(db: Session, first_name: str, last_name: str, email: str, password: str) -> User:
    """Create a user with a hashed password and a collision-free slug."""
    if db.query(User.id).filter(User.email == email).first() is not None:
        raise ConstraintViolationError("Email already registered")

    user = User(
        first_name=first_name,
        last_name=last_name,
        email=email,
        password=hash_password(password),
        slug=unique_slug(db, first_name, last_name),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConstraintViolationError("Email or slug already taken")
    db.refresh(user)
    logger.info("Registered user %s (%s)", user.id, user.slug)
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    user = db.query(User).filter(User.email == email).first()
    if not user:
        raise NotFoundError("Email invalid")
    if not verify_password(password, user.password):
        raise AuthError("Password invalid")
    return user


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    claims = {
        "sub": str(user.id),
        "email": user.email,
        "slug": user.slug,
        "exp": expire,
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer token to a User. Missing token → 401, bad token → 403."""
    if credentials is None:
        raise AuthError("No token provided")
    try:
        claims = jwt.decode(
            credentials.credentials, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM]
        )
        user_id = int(claims["sub"])
    except (JWTError, KeyError, TypeError, ValueError):
        raise ForbiddenError("Invalid token")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise AuthError("User no longer exists")
    return user
