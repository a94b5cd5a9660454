"""
Pydantic schemas for error responses.
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standard error response format.

    Examples:
        400: {"error": "not_found", "message": "File Not Found"}
        400: {"error": "validation_failed", "message": "..."}
        401: {"error": "unauthorized", "message": "Valid token required"}
        403: {"error": "forbidden", "message": "...", "details": {...}}
        413: {"error": "payload_too_large", "message": "..."}
    """

    error: str = Field(
        ...,
        description="Error code string",
        examples=["validation_failed", "unauthorized", "forbidden", "not_found"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] | None = Field(
        default=None,
        description="Optional additional error details",
    )
