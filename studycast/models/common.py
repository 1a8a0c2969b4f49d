"""
Common response models and utilities.

Generic response wrappers, error schemas and timestamp helpers.

Dependencies: pydantic
System role: Common API response structures
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


def utc_now() -> datetime:
    """Timezone-aware UTC timestamp used for every created_at/updated_at."""
    return datetime.now(timezone.utc)


class ErrorResponse(BaseModel):
    """Error response schema."""

    success: bool = False
    error: str = Field(description="Error message")
    kind: str = Field(description="Error kind from the failure taxonomy")
    details: dict | None = Field(default=None, description="Additional error context")
