"""Link service for the URL shortener application.

This module contains the LinkService class which implements business logic
for creating, resolving, listing and deleting short links.
"""

import logging
import secrets
import string
from typing import Any, List, Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from shorturls.core.config import settings
from shorturls.core.validators import is_valid_code, is_valid_url
from shorturls.db.session import db_transaction
from shorturls.models.link import Link
from shorturls.repositories.base import RepositoryError, DuplicateEntityError
from shorturls.repositories.link_repository import LinkRepository
from shorturls.services.exceptions import (
    MissingURLError,
    InvalidURLError,
    InvalidCodeError,
    LinkCreationError,
    CodeAlreadyExistsError,
    ShortCodeGenerationError,
    LinkNotFoundError,
    LinkLookupError,
    LinkDeletionError,
    ClickTrackingError,
)

logger = logging.getLogger(__name__)

CODE_ALPHABET = string.ascii_letters + string.digits

# Upper bound of the INTEGER primary key column
MAX_LINK_ID = 2**31 - 1


class LinkService:
    """
    Service for link business logic.

    Validates input, generates short codes, and runs each operation in
    its own transaction on the session it is handed.
    """

    def __init__(self, link_repository: LinkRepository):
        """
        Initialize the link service.

        Args:
            link_repository: Repository for link data access
        """
        self.link_repository = link_repository

    async def list_links(self, db: AsyncSession) -> List[Link]:
        """Return every link in insertion order.

        Raises:
            LinkLookupError: If the store cannot be read
        """
        try:
            return await self.link_repository.list_all(db)
        except RepositoryError as e:
            logger.error(f"Error listing links: {e}")
            raise LinkLookupError("Failed to list links") from e

    @db_transaction(db_param_name="db")
    async def create_link(
        self,
        db: AsyncSession,
        full: Optional[Any],
        code: Optional[Any] = None
    ) -> Link:
        """
        Create a link, using ``code`` when given or a generated one otherwise.

        Args:
            db: Database session
            full: The destination URL
            code: Optional caller-chosen short code

        Returns:
            Link: The created link

        Raises:
            MissingURLError: If no destination URL was given
            InvalidURLError: If the destination is not an http(s) URL
            InvalidCodeError: If the custom code is not 6-8 alphanumerics
            CodeAlreadyExistsError: If the custom code is already in use
            ShortCodeGenerationError: If no free code could be generated
            LinkCreationError: If the insert fails for other reasons
        """
        if not full:
            raise MissingURLError("A destination URL is required")

        if not is_valid_url(full):
            raise InvalidURLError(f"Invalid URL format: {full}")
        full = full.strip()

        if code:
            if not is_valid_code(code):
                raise InvalidCodeError(
                    f"Short code '{code}' must be 6-8 alphanumeric characters"
                )
            return await self._insert(db, full, code)

        # A generated code can still lose an insert race; draw another one
        for _ in range(settings.CODE_GENERATION_ATTEMPTS):
            candidate = await self._generate_unique_code(db)
            try:
                return await self._insert(db, full, candidate)
            except CodeAlreadyExistsError:
                logger.warning(f"Generated code '{candidate}' was taken concurrently, retrying")

        raise ShortCodeGenerationError("Failed to generate a unique short code")

    async def _insert(self, db: AsyncSession, full: str, short: str) -> Link:
        try:
            link = await self.link_repository.create_link(db, {"full": full, "short": short})
        except DuplicateEntityError as e:
            raise CodeAlreadyExistsError(f"Short code '{short}' is already in use") from e
        except RepositoryError as e:
            logger.error(f"Error creating link: {e}")
            raise LinkCreationError(f"Failed to create link: {e}") from e

        logger.info(f"Link created: {link.short} -> {link.full}")
        return link

    async def get_link_by_code(self, db: AsyncSession, code: str) -> Link:
        """
        Retrieve a link by its short code.

        Raises:
            LinkNotFoundError: If no link with this code exists
            LinkLookupError: If the store cannot be read
        """
        try:
            link = await self.link_repository.get_by_code(db, code)
        except RepositoryError as e:
            logger.error(f"Error retrieving link by code: {e}")
            raise LinkLookupError(f"Failed to retrieve link '{code}'") from e

        if link is None:
            raise LinkNotFoundError(f"Link with code '{code}' not found")
        return link

    @db_transaction(db_param_name="db")
    async def resolve_and_record_click(self, db: AsyncSession, code: str) -> Link:
        """
        Look up a link for a redirect and count the click.

        Returns:
            Link: The link that was followed

        Raises:
            LinkNotFoundError: If no link with this code exists
            ClickTrackingError: If the counter update fails
        """
        link = await self.get_link_by_code(db, code)
        try:
            await self.link_repository.record_click(db, link.id)
        except RepositoryError as e:
            logger.error(f"Error recording click for '{code}': {e}")
            raise ClickTrackingError(f"Failed to record click for '{code}'") from e
        return link

    @db_transaction(db_param_name="db")
    async def delete_link_by_code(self, db: AsyncSession, code: str) -> Link:
        """
        Delete a link by its short code.

        Raises:
            LinkNotFoundError: If no link with this code exists
            LinkDeletionError: If the delete fails
        """
        try:
            deleted = await self.link_repository.delete_by_code(db, code)
        except RepositoryError as e:
            logger.error(f"Error deleting link '{code}': {e}")
            raise LinkDeletionError(f"Failed to delete link '{code}'") from e

        if deleted is None:
            raise LinkNotFoundError(f"Link with code '{code}' not found")
        logger.info(f"Link deleted: {deleted.short}")
        return deleted

    @db_transaction(db_param_name="db")
    async def delete_link_by_id(self, db: AsyncSession, link_id: Union[int, str]) -> Link:
        """
        Delete a link by its store-assigned id.

        Ids that are not positive integers can never match and are
        reported as not found.

        Raises:
            LinkNotFoundError: If no link with this id exists
            LinkDeletionError: If the delete fails
        """
        try:
            parsed_id = int(link_id)
        except (TypeError, ValueError):
            raise LinkNotFoundError(f"Link with id '{link_id}' not found")
        if not 0 < parsed_id <= MAX_LINK_ID:
            raise LinkNotFoundError(f"Link with id '{link_id}' not found")

        try:
            deleted = await self.link_repository.delete_by_id(db, parsed_id)
        except RepositoryError as e:
            logger.error(f"Error deleting link {parsed_id}: {e}")
            raise LinkDeletionError(f"Failed to delete link {parsed_id}") from e

        if deleted is None:
            raise LinkNotFoundError(f"Link with id '{link_id}' not found")
        logger.info(f"Link deleted: {deleted.short}")
        return deleted

    async def _generate_unique_code(self, db: AsyncSession) -> str:
        """
        Generate a short code that isn't already in use.

        Tries ``CODE_GENERATION_ATTEMPTS`` candidates at each length from
        ``CODE_LENGTH`` up to ``CODE_MAX_LENGTH``.

        Raises:
            ShortCodeGenerationError: If unable to generate a unique code
        """
        for length in range(settings.CODE_LENGTH, settings.CODE_MAX_LENGTH + 1):
            for _ in range(settings.CODE_GENERATION_ATTEMPTS):
                candidate = self._generate_code(length)
                try:
                    exists = await self.link_repository.check_code_exists(db, candidate)
                except RepositoryError as e:
                    raise LinkCreationError(f"Failed to check short code: {e}") from e
                if not exists:
                    return candidate

        raise ShortCodeGenerationError(
            "Failed to generate unique short code after multiple attempts. "
            "Try again later or use a custom code."
        )

    @staticmethod
    def _generate_code(length: int) -> str:
        """Return a random base62 code of the given length."""
        return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))
