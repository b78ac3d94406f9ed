"""Application exceptions raised by the favorites use cases.

Each exception carries the :class:`~lifehacking.schemas.error.ErrorType` the
HTTP layer uses to pick a status code, so routers never inspect messages.
Infrastructure failures keep the original exception as ``__cause__`` for the
logs while exposing only a generic message to callers.
"""

from __future__ import annotations

from lifehacking.schemas.error import ErrorType


class AppError(Exception):
    """Base class for failures the API translates into structured responses."""

    error_type: ErrorType = ErrorType.INTERNAL_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(AppError, LookupError):
    """A referenced user, tip, or favorite does not exist."""

    error_type = ErrorType.NOT_FOUND


class ConflictError(AppError):
    """The favorite being added already exists."""

    error_type = ErrorType.CONFLICT


class InfrastructureError(AppError):
    """Unexpected storage failure; the underlying error is chained as the cause."""

    error_type = ErrorType.INFRASTRUCTURE_ERROR


__all__ = [
    "AppError",
    "ConflictError",
    "InfrastructureError",
    "NotFoundError",
]
