"""
Test Configuration Module
"""

import pytest
import pytest_asyncio
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from wms.db.embedded import EmbeddedDatabase
from wms.db.queries import build_query_registry
from wms.repositories.location_repo import LocationGroupRepository, LocationRepository


# Use in-memory database for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def embedded_db() -> AsyncGenerator[EmbeddedDatabase, None]:
    """Start an in-memory database with all tables"""
    db = EmbeddedDatabase(TEST_DATABASE_URL)
    await db.start()

    yield db

    # Clean up
    await db.stop()


@pytest.fixture
def session_factory(embedded_db) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test database"""
    return embedded_db.session_factory()


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for testing"""
    async with session_factory() as session:
        yield session


@pytest.fixture
def query_registry():
    return build_query_registry()


@pytest.fixture
def location_repo(query_registry) -> LocationRepository:
    return LocationRepository(query_registry, raise_on_missing=False)


@pytest.fixture
def location_group_repo(query_registry) -> LocationGroupRepository:
    return LocationGroupRepository(query_registry, raise_on_missing=False)
