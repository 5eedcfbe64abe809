"""Database base configuration for SQLAlchemy with SQLModel.

This module provides base database configuration for async SQLAlchemy with SQLModel.
It includes:
- Engine configuration
- Schema creation
"""

from typing import AsyncGenerator, Dict
import logging
from contextlib import asynccontextmanager

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel

from shorturls.core.config import settings

logger = logging.getLogger(__name__)

POOLED_ENGINE_CONFIG: Dict = {
    "pool_size": settings.DB_POOL_SIZE,
    "max_overflow": settings.DB_POOL_MAX_OVERFLOW,
    "pool_timeout": settings.DB_POOL_TIMEOUT,
    "pool_recycle": settings.DB_POOL_RECYCLE,
    "pool_pre_ping": True,
}

# Mapping of environment to SQLAlchemy engine configurations
ENGINE_CONFIGS: Dict[str, Dict] = {
    "development": POOLED_ENGINE_CONFIG,
    "staging": POOLED_ENGINE_CONFIG,
    "production": POOLED_ENGINE_CONFIG,
    "testing": {
        "poolclass": NullPool,  # Use NullPool for tests to avoid connection issues
    },
}


def get_engine_config(database_url: str) -> Dict:
    """Get the appropriate engine configuration for the environment and backend.

    SQLite manages its own connections, so queue pool sizing only applies
    to server databases.

    Returns:
        Dict: Engine configuration parameters for the current environment.
    """
    env = settings.ENVIRONMENT.value
    config = dict(ENGINE_CONFIGS.get(env, POOLED_ENGINE_CONFIG))
    if make_url(database_url).get_backend_name() == "sqlite" and "poolclass" not in config:
        config = {}
    config["echo"] = settings.DB_ECHO
    return config


def get_engine() -> AsyncEngine:
    """Create and configure an async SQLAlchemy engine.

    Returns:
        AsyncEngine: Configured SQLAlchemy async engine instance.
    """
    engine_url = settings.DATABASE_URL
    engine_config = get_engine_config(engine_url)

    logger.info(f"Creating database engine for {make_url(engine_url).render_as_string(hide_password=True)}")

    return create_async_engine(engine_url, **engine_config)


# Shared async engine instance
engine = get_engine()

# Async session factory
async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


@asynccontextmanager
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Get async session with proper error handling and cleanup.

    Yields:
        AsyncSession: SQLAlchemy async session
    """
    session = async_session_factory()
    try:
        yield session
    finally:
        await session.close()


async def create_tables(bind: AsyncEngine = engine) -> None:
    """Create the link table (and its unique index) if it does not exist."""
    # Register table models on the metadata before create_all
    from shorturls.models import Link  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database schema is up to date")


async def dispose_engine(bind: AsyncEngine = engine) -> None:
    """Close every pooled connection."""
    await bind.dispose()
    logger.info("Database engine disposed")
