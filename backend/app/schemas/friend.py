"""Pydantic schemas for friendships."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class FriendPair(BaseModel):
    """Body shared by every friendship write: ``userId`` sent, ``friendId`` received."""

    user_id: int = Field(alias="userId", gt=0)
    friend_id: int = Field(alias="friendId", gt=0)

    model_config = {"populate_by_name": True}


class FriendshipOut(BaseModel):
    id: int
    user_id: int
    friend_id: int
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class FriendRequestOut(FriendshipOut):
    """A pending request with the profile of the user on the other side."""

    first_name: str
    last_name: str
    email: str
    slug: Optional[str] = None
