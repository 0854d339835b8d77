"""
Pytest Configuration and Shared Fixtures

This module contains shared test fixtures and configuration for all test modules.
"""

import gc
import os

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

os.environ["ENVIRONMENT"] = "test"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from contact_service.core.config import Settings
from contact_service.core.logging import get_logger
from contact_service.db.database import Base, get_db
from contact_service.domain.contact import Contact
from contact_service.domain.group import Group
from contact_service.main import create_app

logger = get_logger(__name__)

from contact_service.models import ContactModel, GroupContactModel, GroupModel  # noqa: F401

DB_HOST = os.getenv("POSTGRES_HOST", "postgres")  # Default to 'postgres' for Docker
TEST_DATABASE_URL = os.getenv(
    "TEST_DATABASE_URL",
    f"postgresql://contact_user:contact_pass@{DB_HOST}:5432/contacts_test"
)


@pytest.fixture(autouse=True)
def cleanup_memory():
    """Force garbage collection after each test."""
    yield
    gc.collect()


@pytest.fixture()
def settings():
    """Settings for tests, independent of the process environment."""
    return Settings(
        ENVIRONMENT="test",
        DATABASE_URL=TEST_DATABASE_URL,
        LOG_LEVEL="WARNING",
        DEFAULT_PAGE_LIMIT=10,
        MAX_PAGE_LIMIT=100,
        DB_STATEMENT_TIMEOUT_MS=5000,
        PHONE_DEFAULT_REGION=None,
    )


@pytest.fixture()
def sample_contact_data():
    """Sample contact payload for testing"""
    return {
        "phone_number": "+16502530000",
        "email": "ivan.petrov@gmail.com",
        "name": "Ivan",
        "surname": "Petrov",
        "patronymic": "Sergeevich",
        "age": 34,
        "gender": "MALE",
    }


@pytest.fixture()
def make_contact(sample_contact_data):
    """Factory building valid contacts; keyword arguments override fields."""
    def _make(**overrides):
        return Contact.create(**{**sample_contact_data, **overrides})
    return _make


@pytest.fixture()
def make_group():
    """Factory building valid groups."""
    def _make(name="Family", description="Close relatives"):
        return Group.create(name=name, description=description)
    return _make


@pytest_asyncio.fixture()
async def test_db(settings):
    """
    Create a test database session factory for PostgreSQL.

    This fixture:
    - Connects to the PostgreSQL test database (skips the test if unreachable)
    - Creates all tables before each test
    - Provides a session factory that creates independent sessions
    - Drops all tables after the test completes
    """
    engine = create_async_engine(
        settings.async_database_url,
        echo=False,
        poolclass=NullPool,
        connect_args={"timeout": 5},
    )

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
    except (OSError, DBAPIError) as e:
        await engine.dispose()
        pytest.skip(f"PostgreSQL test database unavailable: {e}")

    async_session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False
    )

    yield async_session_factory

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
    except (OSError, DBAPIError) as e:
        logger.warning(f"Error during database cleanup: {e}")
    finally:
        await engine.dispose()


@pytest_asyncio.fixture()
async def db_client(test_db, settings):
    """HTTP client backed by the PostgreSQL test database."""
    app = create_app(settings)

    async def override_get_db():
        async with test_db() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture()
def row_count(test_db):
    """Count the rows of a table in a fresh session."""
    async def _count(table: str) -> int:
        async with test_db() as db:
            result = await db.execute(text(f'SELECT count(*) FROM "{table}"'))
            return result.scalar_one()
    return _count
