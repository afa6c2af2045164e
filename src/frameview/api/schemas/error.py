"""
Error schemas - Pydantic models for error responses
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ErrorDetail(BaseModel):
    """Detailed error information"""
    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(
        None,
        description="Additional context (field names, valid values, etc.)"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the error occurred"
    )


class ErrorResponse(BaseModel):
    """API error response - standardized format

    All API errors use this structure so the frontend can handle them predictably.
    """
    error: ErrorDetail = Field(description="Error information")
    request_id: Optional[str] = Field(None, description="Request ID for logging/debugging")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "error": {
                "code": "COLOR_NOT_FOUND",
                "message": "Color 'pink' not found for product 'tank-300'",
                "details": {
                    "color_id": "pink",
                    "valid_values": ["orange", "black", "white"]
                },
                "timestamp": "2025-11-26T10:30:00Z"
            },
            "request_id": "req-12345"
        }
    })


class ValidationErrorResponse(BaseModel):
    """Validation error - when request body is invalid"""
    error: ErrorDetail = Field(description="Error information")
    validation_errors: list[Dict[str, Any]] = Field(
        description="Per-field validation errors"
    )
    request_id: Optional[str] = Field(None, description="Request ID for logging/debugging")
