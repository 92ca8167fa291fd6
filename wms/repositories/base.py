"""
Base Repository Interface Module

Defines the generic interface for data access, decoupling business logic from specific database implementations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Generic, Mapping, Optional, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

# Entity type and identifier type
T = TypeVar("T")
ID = TypeVar("ID")

# Bind parameter name every "find by unique id" named query must declare
UNIQUE_ID_PARAM = "unique_id"


@dataclass(frozen=True)
class RepositoryConfig(Generic[T, ID]):
    """
    Binding of a repository to one entity type

    Fixed at construction; a repository serves exactly this entity type for its lifetime.
    """

    # Mapped entity class
    entity_type: type[T]
    # Primary key type, find_by_id rejects identifiers of other types
    id_type: type[ID]
    # Name of the "find all" named query
    find_all_query: str
    # Name of the "find by unique business id" named query
    find_by_unique_id_query: str
    # Runs on the entity right before save/persist reach the store
    before_update: Optional[Callable[[T], None]] = None
    # find_by_id on a missing entity: raise NotFoundError instead of returning None
    raise_on_missing: bool = False


class GenericRepository(ABC, Generic[T, ID]):
    """
    Generic Repository Interface

    Defines standard CRUD and named-query operations. Every operation runs in
    the unit of work represented by the session passed in by the caller.
    """

    @abstractmethod
    async def find_by_id(self, session: AsyncSession, id: ID) -> Optional[T]:
        """Find entity by primary key"""
        pass

    @abstractmethod
    async def find_all(self, session: AsyncSession) -> list[T]:
        """Find all entities"""
        pass

    @abstractmethod
    async def find_by_query(
        self,
        session: AsyncSession,
        query_name: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> list[T]:
        """Find entities with a named query"""
        pass

    @abstractmethod
    async def find_by_unique_id(self, session: AsyncSession, unique_id: Any) -> Optional[T]:
        """Find entity by unique business identifier"""
        pass

    @abstractmethod
    async def save(self, session: AsyncSession, entity: T) -> T:
        """Insert or update entity, returns the managed instance"""
        pass

    @abstractmethod
    async def persist(self, session: AsyncSession, entity: T) -> None:
        """Make a transient entity persistent"""
        pass

    @abstractmethod
    async def remove(self, session: AsyncSession, entity: T) -> None:
        """Delete entity"""
        pass
