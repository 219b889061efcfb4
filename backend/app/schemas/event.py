"""Pydantic schemas for Events, hosts, invites and attendees."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class EventCreate(BaseModel):
    title: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None
    date: datetime
    location: Optional[str] = Field(default=None, max_length=255)


class EventUpdate(EventCreate):
    """Full overwrite: optional fields left out are cleared."""


class EventOut(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    date: datetime
    location: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    host_id: Optional[int] = None
    host_first_name: Optional[str] = None
    host_last_name: Optional[str] = None
    host_email: Optional[str] = None
    host_slug: Optional[str] = None

    model_config = {"from_attributes": True}


class UserIdPayload(BaseModel):
    user_id: int = Field(alias="userId", gt=0)

    model_config = {"populate_by_name": True}


class HostOut(BaseModel):
    event_id: int
    user_id: int

    model_config = {"from_attributes": True}


class InviteOut(BaseModel):
    event_id: int
    user_id: int
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class InvitationStatusUpdate(BaseModel):
    event_id: int = Field(alias="eventId", gt=0)
    user_id: int = Field(alias="userId", gt=0)
    # Checked by the service so an unknown value reports InvalidStatus.
    status: str = Field(min_length=1)

    model_config = {"populate_by_name": True}


class AttendeeOut(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str
    slug: Optional[str] = None
    status: str
    invited_at: Optional[datetime] = None
    responded_at: Optional[datetime] = None


class AttendeeCounts(BaseModel):
    pending: int = 0
    accepted: int = 0
    maybe: int = 0
    declined: int = 0
