"""
FastAPI dependencies for database services.

Provides dependency injection for database-related services.
"""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from campus_companion.db.database import get_async_session_local


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    FastAPI dependency for getting the async session factory.

    Callers open one session per lookup so independent queries can run
    concurrently.

    Returns:
        async_sessionmaker: The shared session factory
    """
    return get_async_session_local()
