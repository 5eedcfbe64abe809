"""API request and response schemas.

This module contains Pydantic models for API request validation
and response serialization.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_serializer


def to_utc_iso(value: datetime) -> str:
    """Format as ISO-8601 UTC with a ``Z`` suffix. Naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class LinkCreateRequest(BaseModel):
    """Request schema for creating a link.

    Fields accept any JSON value. URL and code checks happen in the service,
    so a number is reported as an invalid URL or code.
    """
    full: Optional[Any] = None
    code: Optional[Any] = None


class LinkResponse(BaseModel):
    """Response schema for a link."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    full: str
    short: str
    clicks: int
    last_clicked: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("last_clicked", "lastClicked"),
        serialization_alias="lastClicked",
    )

    @field_serializer("last_clicked")
    def serialize_last_clicked(self, value: Optional[datetime]) -> Optional[str]:
        return to_utc_iso(value) if value is not None else None


class LinkSummary(BaseModel):
    """Link fields echoed by the per-link health check."""
    model_config = ConfigDict(from_attributes=True)

    short: str
    full: str
    clicks: int


class LinkHealthResponse(BaseModel):
    """Response schema for ``/{prefix}/healthz``."""
    status: str
    code: int
    message: str
    link: Optional[LinkSummary] = None
    timestamp: Optional[str] = None


class ErrorResponse(BaseModel):
    """Response schema for API errors."""
    error: str
