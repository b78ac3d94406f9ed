"""Builders for the structured error payloads returned by the favorites API.

Every payload carries the active request identifier and a timezone-aware
timestamp. :func:`status_code_for` maps application exceptions onto HTTP
status codes so routers and handlers never inspect exception messages.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from fastapi import status

from lifehacking.exceptions import AppError
from lifehacking.schemas.error import (
    ErrorResponse,
    ErrorType,
    ValidationErrorDetail,
    ValidationErrorResponse,
)
from lifehacking.utils.request_context import get_request_id

__all__ = [
    "build_app_error_response",
    "build_error_response",
    "build_validation_error_response",
    "status_code_for",
]

_STATUS_BY_ERROR_TYPE: dict[ErrorType, int] = {
    ErrorType.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorType.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorType.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorType.AUTHENTICATION_ERROR: status.HTTP_401_UNAUTHORIZED,
    ErrorType.DATABASE_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorType.INFRASTRUCTURE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorType.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

_MESSAGE_BY_ERROR_TYPE: dict[ErrorType, str] = {
    ErrorType.NOT_FOUND: "Resource not found",
    ErrorType.CONFLICT: "Resource already exists",
    ErrorType.INFRASTRUCTURE_ERROR: "Storage operation failed",
}


def _current_timestamp() -> datetime:
    """Return the payload timestamp; tests monkeypatch this for fixed values."""

    return datetime.now(UTC)


def status_code_for(error_type: ErrorType) -> int:
    return _STATUS_BY_ERROR_TYPE.get(error_type, status.HTTP_500_INTERNAL_SERVER_ERROR)


def build_validation_error_response(
    *,
    errors: Sequence[ValidationErrorDetail],
    message: str,
    detail: str,
    status_code: int,
    path: str,
    error_type: ErrorType = ErrorType.VALIDATION_ERROR,
    request_id: str | None = None,
) -> ValidationErrorResponse:
    return ValidationErrorResponse(
        error_type=error_type,
        message=message,
        detail=detail,
        status_code=status_code,
        timestamp=_current_timestamp(),
        request_id=request_id or get_request_id(),
        path=path,
        errors=list(errors),
    )


def build_error_response(
    *,
    error_type: ErrorType,
    message: str,
    detail: str | None,
    status_code: int,
    path: str,
    retry_after: int | None = None,
    request_id: str | None = None,
) -> ErrorResponse:
    return ErrorResponse(
        error_type=error_type,
        message=message,
        detail=detail,
        status_code=status_code,
        timestamp=_current_timestamp(),
        request_id=request_id or get_request_id(),
        path=path,
        retry_after=retry_after,
    )


def build_app_error_response(exc: AppError, *, path: str) -> ErrorResponse:
    """Translate an :class:`AppError` into its HTTP payload.

    The exception message becomes ``detail``; the cause of an infrastructure
    failure is never included.
    """

    return build_error_response(
        error_type=exc.error_type,
        message=_MESSAGE_BY_ERROR_TYPE.get(exc.error_type, "Request failed"),
        detail=exc.message,
        status_code=status_code_for(exc.error_type),
        path=path,
    )
