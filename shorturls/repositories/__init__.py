"""Repository layer for the URL shortener application.

This module provides repository classes that abstract database operations
and implement the Repository pattern for clean separation of concerns.
"""

from shorturls.repositories.base import (
    BaseRepository,
    RepositoryError,
    DuplicateEntityError
)
from shorturls.repositories.link_repository import LinkRepository

__all__ = [
    # Base classes and exceptions
    "BaseRepository",
    "RepositoryError",
    "DuplicateEntityError",

    # Concrete repositories
    "LinkRepository",
]
