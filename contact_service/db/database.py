"""Database Configuration.

AsyncPG + SQLAlchemy setup for PostgreSQL with async support.
The engine and session factory are built from an explicit Settings object at
startup and kept on the FastAPI application state.
"""

from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from ..core.config import Settings

Base = declarative_base()


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the pooled async engine.

    Args:
        settings: Service settings

    Returns:
        AsyncEngine bound to settings.DATABASE_URL
    """
    return create_async_engine(
        settings.async_database_url,
        echo=settings.DEBUG,
        pool_pre_ping=True,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory used to check out one session per request."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False
    )


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency to get database session.

    The session is closed on every exit path, returning its connection to the
    pool; any transaction still open at that point is rolled back.

    Yields:
        AsyncSession: Database session for the request

    Usage in FastAPI:
        @router.get("/contacts")
        async def list_contacts(db: AsyncSession = Depends(get_db)):
            ...
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
