"""
Generic Repository SQLAlchemy Implementation

Provides the concrete database operations behind GenericRepository for any mapped entity type.
"""

import logging
from typing import Any, Mapping, Optional

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wms.common.errors import (
    NotFoundError,
    PersistenceError,
    QueryError,
    TooManyResultsError,
    ValidationError,
)
from wms.repositories.base import ID, UNIQUE_ID_PARAM, GenericRepository, RepositoryConfig, T
from wms.repositories.named_query import NamedQueryRegistry

logger = logging.getLogger(__name__)


class SQLAlchemyGenericRepository(GenericRepository[T, ID]):
    """
    Generic Repository SQLAlchemy Implementation

    Translates repository calls into AsyncSession primitives (get, merge,
    add/flush, delete) and named-query executions. Never commits: the
    caller owns the transaction.
    """

    def __init__(self, config: RepositoryConfig[T, ID], queries: NamedQueryRegistry):
        """
        Initialize Repository

        Args:
            config: Entity type binding and query names
            queries: Registry the named queries are resolved from
        """
        self.config = config
        self.queries = queries

    @property
    def entity_type(self) -> type[T]:
        return self.config.entity_type

    @property
    def entity_name(self) -> str:
        return self.config.entity_type.__name__

    def _check_type(self, entity: Any) -> None:
        """Reject entities this repository is not bound to"""
        if not isinstance(entity, self.entity_type):
            raise ValidationError(
                message=f"Expected {self.entity_name}, got {type(entity).__name__}",
                code="wrong_entity_type",
            )

    def _before_update(self, entity: T) -> None:
        if self.config.before_update is not None:
            self.config.before_update(entity)

    def _identity_of(self, entity: T) -> Any:
        """Primary key value of an entity (tuple for composite keys)"""
        mapper = sa_inspect(self.entity_type)
        key = mapper.primary_key_from_instance(entity)
        if any(part is None for part in key):
            raise PersistenceError(
                message=f"{self.entity_name} has no identity",
                code="missing_identity",
            )
        return key[0] if len(key) == 1 else tuple(key)

    async def _run_query(
        self,
        session: AsyncSession,
        query_name: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> list[T]:
        query = self.queries.get(query_name)
        if query.entity is not self.entity_type:
            raise QueryError(
                message=f"Named query '{query_name}' does not select {self.entity_name}",
                code="wrong_entity_query",
                details={"query": query_name, "entity": self.entity_name},
            )
        statement, values = self.queries.bind(query_name, params)
        try:
            result = await session.execute(statement, values)
            return list(result.scalars().all())
        except SQLAlchemyError as exc:
            logger.warning("Named query %s failed: %s", query_name, exc)
            raise QueryError(
                message=f"Named query '{query_name}' failed",
                code="query_failed",
                details={"query": query_name},
            ) from exc

    async def find_by_id(self, session: AsyncSession, id: ID) -> Optional[T]:
        """Find entity by primary key"""
        if id is None:
            raise ValidationError(
                message=f"Identifier of {self.entity_name} must not be None",
                code="null_identifier",
            )
        if not isinstance(id, self.config.id_type):
            raise ValidationError(
                message=(
                    f"Identifier of {self.entity_name} must be "
                    f"{self.config.id_type.__name__}, got {type(id).__name__}"
                ),
                code="wrong_identifier_type",
            )
        logger.debug("Find %s by id %r", self.entity_name, id)
        try:
            entity = await session.get(self.entity_type, id)
        except SQLAlchemyError as exc:
            logger.warning("Find %s by id %r failed: %s", self.entity_name, id, exc)
            raise QueryError(
                message=f"Lookup of {self.entity_name} with id {id!r} failed",
                code="query_failed",
            ) from exc

        if entity is None and self.config.raise_on_missing:
            raise NotFoundError(
                message=f"{self.entity_name} with id {id!r} not found",
                code=f"{self.entity_name.lower()}_not_found",
                details={"id": id},
            )
        return entity

    async def find_all(self, session: AsyncSession) -> list[T]:
        """Find all entities"""
        logger.debug("Find all %s", self.entity_name)
        return await self._run_query(session, self.config.find_all_query)

    async def find_by_query(
        self,
        session: AsyncSession,
        query_name: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> list[T]:
        """Find entities with a named query"""
        logger.debug("Find %s by query %s", self.entity_name, query_name)
        return await self._run_query(session, query_name, params)

    async def find_by_unique_id(self, session: AsyncSession, unique_id: Any) -> Optional[T]:
        """
        Find entity by unique business identifier

        Raises:
            TooManyResultsError: More than one entity matches the unique id
        """
        logger.debug("Find %s by unique id %r", self.entity_name, unique_id)
        result = await self._run_query(
            session, self.config.find_by_unique_id_query, {UNIQUE_ID_PARAM: unique_id}
        )
        if len(result) > 1:
            logger.error(
                "Data integrity violation: %d %s rows for unique id %r",
                len(result), self.entity_name, unique_id,
            )
            raise TooManyResultsError(unique_id, len(result))
        return result[0] if result else None

    async def save(self, session: AsyncSession, entity: T) -> T:
        """Merge entity into the session and flush, returns the managed instance"""
        self._check_type(entity)
        self._before_update(entity)
        try:
            merged = await session.merge(entity)
            await session.flush()
        except SQLAlchemyError as exc:
            logger.warning("Save %s failed: %s", self.entity_name, exc)
            raise PersistenceError(
                message=f"Saving {self.entity_name} failed",
                code="save_failed",
            ) from exc
        logger.debug("Saved %s", self.entity_name)
        return merged

    async def persist(self, session: AsyncSession, entity: T) -> None:
        """Add a transient entity to the session and flush"""
        self._check_type(entity)
        if sa_inspect(entity).detached:
            raise PersistenceError(
                message=f"Detached {self.entity_name} passed to persist, use save instead",
                code="detached_entity",
            )
        self._before_update(entity)
        try:
            session.add(entity)
            await session.flush()
        except SQLAlchemyError as exc:
            logger.warning("Persist %s failed: %s", self.entity_name, exc)
            raise PersistenceError(
                message=f"Persisting {self.entity_name} failed",
                code="persist_failed",
            ) from exc
        logger.debug("Persisted %s", self.entity_name)

    async def remove(self, session: AsyncSession, entity: T) -> None:
        """
        Delete entity

        Entities not attached to this session are resolved by primary key first.

        Raises:
            PersistenceError: Entity no longer exists or the delete was rejected
        """
        self._check_type(entity)
        try:
            target = entity
            if entity not in session:
                target = await session.get(self.entity_type, self._identity_of(entity))
                if target is None:
                    raise PersistenceError(
                        message=f"{self.entity_name} no longer exists",
                        code="entity_gone",
                    )
            await session.delete(target)
            await session.flush()
        except SQLAlchemyError as exc:
            logger.warning("Remove %s failed: %s", self.entity_name, exc)
            raise PersistenceError(
                message=f"Removing {self.entity_name} failed",
                code="remove_failed",
            ) from exc
        logger.debug("Removed %s", self.entity_name)
