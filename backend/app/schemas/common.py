"""Uniform response envelope shared by every route."""
from typing import Generic, Optional, TypeVar
from pydantic import BaseModel

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    status: int
    message: str
    data: Optional[T] = None


def envelope(status: int, message: str, data=None) -> dict:
    return {"status": status, "message": message, "data": data}
