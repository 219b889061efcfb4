"""Domain error taxonomy.

Services raise these; the handlers registered in ``app.main`` turn them into
the ``{status, message, data}`` envelope with the matching HTTP status.
"""
from fastapi import status


class AppError(Exception):
    """Base class for errors whose message is safe to show to the caller."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class ConstraintViolationError(AppError):
    """Duplicate insert: unique key or composite primary key already taken."""

    status_code = status.HTTP_400_BAD_REQUEST


class InvalidInputError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidStatusError(InvalidInputError):
    pass


class InvalidTransitionError(InvalidStatusError):
    """The status is valid but cannot be reached from the current one."""


class NoOpRejectedError(AppError):
    """Transition to the status the row already holds."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
