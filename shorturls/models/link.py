"""Link data models.

This module defines the Link model mapping a short code to its destination URL.
"""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LinkBase(SQLModel):
    """Base model for link data."""

    full: str = Field(
        description="The destination URL to redirect to"
    )
    short: str = Field(
        description="Unique short code used in the redirect path",
        unique=True,   # Creates the unique index that settles races on custom codes
        max_length=16,
    )


class Link(LinkBase, table=True):
    """
    Link model for storing short links in the database.

    Rows are created with ``clicks`` at zero and are only mutated by a
    redirect, which bumps ``clicks`` and stamps ``last_clicked``.
    """

    __tablename__ = "links"

    id: Optional[int] = Field(default=None, primary_key=True)
    clicks: int = Field(
        default=0,
        description="Counter for the number of redirects"
    )
    last_clicked: Optional[datetime] = Field(
        default=None,
        sa_type=DateTime(timezone=True),
        description="Timestamp of the most recent redirect"
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        description="Timestamp when this link was created"
    )


class LinkCreate(LinkBase):
    """Schema for creating a new link."""
    pass
