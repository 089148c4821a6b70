"""Common Pydantic schemas."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error payload written by the command line interface."""

    detail: str = Field(..., description="Human-readable error message")
    error_code: str = Field(..., description="Machine-readable error code")
    errors: list[dict] | None = Field(
        None,
        description="Validation error details",
    )
