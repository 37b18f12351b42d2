"""Error response schemas for consistent error handling."""

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorType(str, Enum):
    """Types of errors that can occur."""

    VALIDATION_ERROR = "validation_error"
    NOT_FOUND = "not_found"
    UPSTREAM_ERROR = "upstream_error"
    INTERNAL_ERROR = "internal_error"
    TIMEOUT_ERROR = "timeout_error"
    HTTP_ERROR = "http_error"


class ErrorResponse(BaseModel):
    """Standardized error envelope returned by every endpoint."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": False,
                "message": "Match not found",
                "error": None,
                "error_type": "not_found",
                "status_code": 404,
                "timestamp": "2025-04-12T10:30:00Z",
                "request_id": "9a6c0f8e-0c1f-4a0e-9c55-3d1f3d0b7d2e",
                "path": "/api/match/42",
            }
        }
    )

    success: bool = Field(False, description="Always false for error payloads")
    message: str = Field(..., description="Human-readable error message")
    error: str | None = Field(
        None, description="Diagnostic detail; only populated in development mode"
    )
    error_type: ErrorType = Field(..., description="Category of error")
    status_code: int = Field(..., description="HTTP status code")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC), description="When error occurred"
    )
    request_id: str | None = Field(None, description="Unique request identifier for tracking")
    path: str | None = Field(None, description="Request path that caused the error")


class ValidationErrorDetail(BaseModel):
    """Details for validation errors."""

    field: str = Field(..., description="Field that failed validation")
    message: str = Field(..., description="Validation error message")
    value: Any = Field(None, description="Value that failed validation")


class ValidationErrorResponse(ErrorResponse):
    """Extended error response for validation errors."""

    error_type: ErrorType = Field(default=ErrorType.VALIDATION_ERROR)
    errors: list[ValidationErrorDetail] = Field(
        default_factory=list, description="List of validation errors"
    )
