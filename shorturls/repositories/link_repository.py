"""Link Repository for the URL shortener application.

This module provides the LinkRepository class for database operations related to Link models.
Following the Repository pattern, it abstracts database interactions for link management.
"""

from typing import Any, Dict, List, Optional, Union

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from shorturls.models.link import Link, LinkCreate, utc_now
from shorturls.repositories.base import BaseRepository, RepositoryError, DuplicateEntityError


class LinkRepository(BaseRepository[Link, LinkCreate]):
    """
    Repository for Link model database operations.

    Provides creation, lookup by code or id, deletion and the atomic
    click counter update used by redirects.
    """

    def __init__(self):
        """Initialize the repository with the Link model type."""
        super().__init__(Link)

    async def list_all(self, db: AsyncSession) -> List[Link]:
        """Return every link in insertion order."""
        return await self.get_all(db, order_by=self.model_type.id)

    async def create_link(
        self,
        db: AsyncSession,
        data: Union[LinkCreate, Dict[str, Any]]
    ) -> Link:
        """
        Create a new link.

        The unique index on ``short`` is the authoritative duplicate check;
        the pre-check only avoids a failed insert in the common case.

        Args:
            db: Database session
            data: Link data (either as a LinkCreate model or dictionary)

        Returns:
            The created Link entity

        Raises:
            DuplicateEntityError: If the short code already exists
            RepositoryError: On other database errors
        """
        short = data.short if isinstance(data, LinkCreate) else data.get("short")

        if short and await self.check_code_exists(db, short):
            raise DuplicateEntityError(self.model_type, "short", short)

        try:
            return await self.create(db, data)
        except IntegrityError as e:
            raise DuplicateEntityError(self.model_type, "short", short) from e

    async def get_by_code(self, db: AsyncSession, short: str) -> Optional[Link]:
        """
        Find a link by its short code.

        Raises:
            RepositoryError: On database errors
        """
        try:
            query = select(self.model_type).where(self.model_type.short == short)
            result = await db.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Error retrieving link by short code: {e}") from e

    async def delete_by_code(self, db: AsyncSession, short: str) -> Optional[Link]:
        """Delete the link with this code, returning it, or None if absent."""
        link = await self.get_by_code(db, short)
        if link is None:
            return None
        return await self.delete_entity(db, link)

    async def delete_by_id(self, db: AsyncSession, link_id: int) -> Optional[Link]:
        """Delete the link with this id, returning it, or None if absent."""
        return await self.delete(db, link_id)

    async def record_click(self, db: AsyncSession, link_id: int) -> None:
        """
        Count one redirect through a link.

        Uses a single UPDATE so concurrent redirects never lose increments.

        Raises:
            RepositoryError: On database errors
        """
        try:
            stmt = (
                update(self.model_type)
                .where(self.model_type.id == link_id)
                .values(
                    clicks=self.model_type.clicks + 1,
                    last_clicked=utc_now(),
                )
                .execution_options(synchronize_session=False)
            )
            await db.execute(stmt)
        except SQLAlchemyError as e:
            raise RepositoryError(f"Error recording click: {e}") from e

    async def check_code_exists(self, db: AsyncSession, short: str) -> bool:
        """
        Check if a short code is already taken.

        Raises:
            RepositoryError: On database errors
        """
        return await self.exists(db, short=short)
