"""Helper functions for constructing structured API error responses.

Every exception handler in :mod:`ipl_stats.main` goes through these builders
so that all error payloads share the ``{success: false, message, error, ...}``
envelope, stamped with the request id and a timezone-aware timestamp.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from ipl_stats.schemas.error import (
    ErrorResponse,
    ErrorType,
    ValidationErrorDetail,
    ValidationErrorResponse,
)
from ipl_stats.utils.request_context import get_request_id

__all__ = [
    "build_error_response",
    "build_validation_error_response",
    "error_type_for_status",
]


def _current_timestamp() -> datetime:
    return datetime.now(UTC)


def error_type_for_status(status_code: int) -> ErrorType:
    """Pick the error category matching an HTTP status code."""

    if status_code == 404:
        return ErrorType.NOT_FOUND
    if status_code == 422:
        return ErrorType.VALIDATION_ERROR
    if status_code == 504:
        return ErrorType.TIMEOUT_ERROR
    if status_code in (502, 503):
        return ErrorType.UPSTREAM_ERROR
    if status_code >= 500:
        return ErrorType.INTERNAL_ERROR
    return ErrorType.HTTP_ERROR


def build_validation_error_response(
    *,
    errors: Sequence[ValidationErrorDetail],
    message: str,
    status_code: int,
    path: str,
    error: str | None = None,
    request_id: str | None = None,
) -> ValidationErrorResponse:
    """Construct a ``ValidationErrorResponse`` enriched with metadata.

    ``errors`` is copied into a list so a generator cannot be consumed twice.
    """

    return ValidationErrorResponse(
        message=message,
        error=error,
        status_code=status_code,
        timestamp=_current_timestamp(),
        request_id=request_id or get_request_id() or None,
        path=path,
        errors=list(errors),
    )


def build_error_response(
    *,
    error_type: ErrorType,
    message: str,
    status_code: int,
    path: str,
    error: str | None = None,
    request_id: str | None = None,
) -> ErrorResponse:
    """Construct a generic ``ErrorResponse`` enriched with metadata."""

    return ErrorResponse(
        message=message,
        error=error,
        error_type=error_type,
        status_code=status_code,
        timestamp=_current_timestamp(),
        request_id=request_id or get_request_id() or None,
        path=path,
    )
