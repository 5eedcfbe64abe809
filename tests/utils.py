"""Test utilities for URL shortener tests."""

import random
import string
from typing import Optional

from sqlalchemy import func, select

from shorturls.models.link import Link


def random_string(length: int = 10) -> str:
    """Generate a random alphanumeric string."""
    return ''.join(random.choice(string.ascii_letters + string.digits) for _ in range(length))


def random_url() -> str:
    """Generate a random URL for testing."""
    domain = f"{random_string(8).lower()}.com"
    path = random_string(12)
    return f"https://{domain}/{path}"


def random_code(length: int = 6) -> str:
    """Generate a valid short code."""
    return random_string(length)


async def create_test_link(
    db,
    full: Optional[str] = None,
    short: Optional[str] = None,
    clicks: int = 0,
    commit: bool = False
) -> Link:
    """Create and persist a test Link in the database."""
    link = Link(full=full or random_url(), short=short or random_code(), clicks=clicks)
    db.add(link)
    if commit:
        await db.commit()
    else:
        await db.flush()
    await db.refresh(link)
    return link


async def count_links(db) -> int:
    """Return the number of stored links."""
    result = await db.execute(select(func.count()).select_from(Link))
    return result.scalar_one()
