"""Session management for database operations.

This module provides the FastAPI session dependency and a decorator that
runs a coroutine inside a transaction on the session it was given.
"""

from typing import AsyncGenerator, Callable, Optional, TypeVar
import inspect
import logging
from functools import wraps

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from shorturls.db.base import get_session

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions.

    Yields one session per request and rolls it back if the handler
    raised before committing.

    Yields:
        AsyncSession: A SQLAlchemy async session object.
    """
    async with get_session() as session:
        try:
            yield session
        except SQLAlchemyError:
            logger.exception("Database error occurred")
            await session.rollback()
            raise
        except Exception:
            await session.rollback()
            raise


def _find_session_param(func: Callable, db_param_name: Optional[str]):
    """Return (position, name) of the session parameter of ``func``."""
    for position, (name, param) in enumerate(inspect.signature(func).parameters.items()):
        if db_param_name is not None:
            if name == db_param_name:
                return position, name
        elif param.annotation is AsyncSession:
            return position, name
    return None, None


def db_transaction(db_param_name: Optional[str] = None) -> Callable:
    """Decorator to wrap a coroutine in a database transaction.

    Commits on success and rolls back on any exception, which is re-raised.
    The session is located by ``db_param_name`` or, when omitted, by the
    first parameter annotated as ``AsyncSession``.

    Example:
        ```python
        @db_transaction(db_param_name="db")
        async def create_link(self, db: AsyncSession, full: str) -> Link:
            ...
        ```

    Raises:
        ValueError: If no database session is passed to the wrapped call
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        db_param_pos, db_param_key = _find_session_param(func, db_param_name)

        if db_param_key is None:
            logger.warning(
                f"Unable to find database session parameter in function '{func.__name__}'"
            )

        @wraps(func)
        async def wrapper(*args, **kwargs):
            db = None
            if db_param_key is not None and db_param_key in kwargs:
                db = kwargs[db_param_key]
            elif db_param_pos is not None and len(args) > db_param_pos:
                db = args[db_param_pos]
            else:
                db = next(
                    (value for value in (*args, *kwargs.values()) if isinstance(value, AsyncSession)),
                    None,
                )

            if db is None:
                raise ValueError(
                    f"Database session not found in function arguments for '{func.__name__}'"
                )

            try:
                result = await func(*args, **kwargs)
                await db.commit()
                return result
            except Exception:
                await db.rollback()
                raise

        return wrapper
    return decorator
