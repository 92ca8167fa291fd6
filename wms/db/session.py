"""
Database Session Management Module

Provides asynchronous database session management and explicit transaction
scopes, supporting SQLite and PostgreSQL.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from wms.config import get_settings

# Get configuration
settings = get_settings()

# Create asynchronous database engine
# echo=True prints SQL statements in DEBUG mode
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    # SQLite specific configuration
    connect_args={"check_same_thread": False}
    if settings.DATABASE_TYPE == "sqlite"
    else {},
)


def enable_sqlite_foreign_keys(sync_engine) -> None:
    """Enable foreign keys on every new SQLite connection (required for ON DELETE actions)"""

    @event.listens_for(sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


if settings.DATABASE_TYPE == "sqlite":
    enable_sqlite_foreign_keys(engine.sync_engine)

# Create asynchronous session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,  # Entities stay readable after the transaction ends
    autocommit=False,
    autoflush=False,
)


@asynccontextmanager
async def transaction(
    session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
) -> AsyncGenerator[AsyncSession, None]:
    """
    Open a session and run the block in one transaction

    Commits when the block exits normally, rolls back on any exception.

    Example:
        async with transaction() as session:
            await location_repo.persist(session, location)
    """
    factory = session_factory or AsyncSessionLocal
    async with factory() as session:
        async with session.begin():
            yield session


async def init_db() -> None:
    """
    Initialize Database

    Creates all defined table structures.
    """
    from wms.db.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
