from __future__ import annotations

import logging
from urllib.parse import urlsplit

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from lifehacking.settings import POSTGRES_ASYNC_PREFIX, get_settings

logger = logging.getLogger(__name__)


def _validate_postgres_url(database_url: str) -> str:
    """Perform lightweight structural checks on an async PostgreSQL URL."""

    parts = urlsplit(database_url)
    if not parts.hostname or not parts.path:
        raise RuntimeError(
            "DATABASE_URL appears malformed. Verify the host and database name are present."
        )
    return database_url


def get_database_url() -> str:
    """Return the async database URL the document store connects to."""

    url = get_settings().resolved_database_url
    if url.startswith(POSTGRES_ASYNC_PREFIX):
        return _validate_postgres_url(url)
    return url


def create_engine(url: str | None = None) -> AsyncEngine:
    """Create the async SQLAlchemy engine.

    PostgreSQL keeps a warm connection pool; SQLite runs with the driver
    defaults since aiosqlite serialises access to the file anyway.
    """

    url = url or get_database_url()
    if url.startswith(POSTGRES_ASYNC_PREFIX):
        return create_async_engine(
            url,
            future=True,
            echo=False,
            pool_size=10,
            max_overflow=20,
            pool_pre_ping=True,
            pool_recycle=1800,
            pool_timeout=30,
        )

    logger.info("Using SQLite document store at %s", url)
    return create_async_engine(url, future=True, echo=False)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


# Global engine/session instances for FastAPI dependency injection
_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """Get or create the global engine instance."""
    global _engine
    if _engine is None:
        _engine = create_engine()
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Lazily create a session factory bound to the shared engine."""
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory(get_engine())
    return _session_factory


async def dispose_engine() -> None:
    """Release pooled connections held by the global engine."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None


__all__ = [
    "create_engine",
    "create_session_factory",
    "dispose_engine",
    "get_database_url",
    "get_engine",
    "get_session_factory",
]
