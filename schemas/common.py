"""Schemas shared across endpoints."""

from pydantic import BaseModel, Field

from core.exceptions import FieldError


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    detail: str = Field(
        description="Error message",
    )
    error_code: str | None = Field(
        default=None,
        description="Optional error code for client handling",
    )
    errors: list[FieldError] | None = Field(
        default=None,
        description="Field-level failures, present on validation errors",
    )


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str
