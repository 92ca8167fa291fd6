"""
Embedded Database Module

Starts and stops a throwaway database (in-memory SQLite by default) with
the full schema, for unit and integration tests.
"""

import logging
from typing import Optional

from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from wms.common.errors import PersistenceError
from wms.config import get_settings
from wms.db.models import Base
from wms.db.session import enable_sqlite_foreign_keys

logger = logging.getLogger(__name__)


class EmbeddedDatabase:
    """
    Embedded Database

    Lifecycle toggle around an engine: start() creates the schema,
    stop() drops it and releases all connections.
    """

    def __init__(
        self,
        url: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        enabled: bool = True,
    ):
        """
        Args:
            url: SQLAlchemy async database URL
            username: Optional user, overrides the one in the URL
            password: Optional password, overrides the one in the URL
            enabled: When False, start and stop do nothing
        """
        self.url = make_url(url)
        if username is not None:
            self.url = self.url.set(username=username)
        if password is not None:
            self.url = self.url.set(password=password)
        self.enabled = enabled
        self._engine: Optional[AsyncEngine] = None
        self._running = False

    @classmethod
    def from_settings(cls) -> "EmbeddedDatabase":
        """Build from EMBEDDED_DB_* settings"""
        settings = get_settings()
        return cls(
            url=settings.EMBEDDED_DB_URL,
            username=settings.EMBEDDED_DB_USERNAME,
            password=settings.EMBEDDED_DB_PASSWORD,
            enabled=settings.EMBEDDED_DB_ENABLED,
        )

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Embedded database is not running")
        return self._engine

    def _create_engine(self) -> AsyncEngine:
        is_sqlite = self.url.get_backend_name() == "sqlite"
        if is_sqlite and self.url.database in (None, "", ":memory:"):
            # One shared connection, otherwise every connection sees its own empty database
            engine = create_async_engine(
                self.url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            engine = create_async_engine(self.url)
        if is_sqlite:
            enable_sqlite_foreign_keys(engine.sync_engine)
        return engine

    async def start(self) -> None:
        """
        Start the database and create all tables

        Raises:
            PersistenceError: Database could not be started
        """
        if self._running or not self.enabled:
            return
        logger.info("Starting embedded database %s", self.url.render_as_string(hide_password=True))
        engine: Optional[AsyncEngine] = None
        try:
            engine = self._create_engine()
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as exc:
            if engine is not None:
                await engine.dispose()
            raise PersistenceError(
                message="Embedded database startup failed",
                code="embedded_db_start_failed",
            ) from exc
        self._engine = engine
        self._running = True

    async def stop(self) -> None:
        """
        Drop all tables and dispose the engine

        Raises:
            PersistenceError: Database could not be shut down cleanly
        """
        if not self._running or not self.enabled:
            return
        logger.info("Stopping embedded database")
        engine = self.engine
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.drop_all)
        except SQLAlchemyError as exc:
            raise PersistenceError(
                message="Embedded database shutdown failed",
                code="embedded_db_stop_failed",
            ) from exc
        finally:
            await engine.dispose()
            self._engine = None
            self._running = False

    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Session factory bound to the running database"""
        return async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
