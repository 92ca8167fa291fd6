"""
Location Repositories

Repositories for the warehouse topology, composed from the generic SQLAlchemy repository.
"""

from typing import Any, Mapping, Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from wms.config import get_settings
from wms.db.models import Location, LocationGroup
from wms.db.queries import (
    NQ_LOCATION_FIND_ALL,
    NQ_LOCATION_FIND_ALL_EAGER,
    NQ_LOCATION_FIND_BY_AREA,
    NQ_LOCATION_FIND_BY_UNIQUE_QUERY,
    NQ_LOCATION_GROUP_FIND_ALL,
    NQ_LOCATION_GROUP_FIND_BY_UNIQUE_QUERY,
)
from wms.domain.location import LocationPK, normalize_location
from wms.repositories.base import ID, GenericRepository, RepositoryConfig, T
from wms.repositories.named_query import NamedQueryRegistry
from wms.repositories.sqlalchemy.generic_repo import SQLAlchemyGenericRepository


def _raise_on_missing(value: Optional[bool]) -> bool:
    return get_settings().REPOSITORY_RAISE_ON_MISSING if value is None else value


class _DelegatingRepository(GenericRepository[T, ID]):
    """Forwards the generic operations to a composed repository"""

    def __init__(self, delegate: GenericRepository[T, ID]):
        self.delegate = delegate

    async def find_by_id(self, session: AsyncSession, id: ID) -> Optional[T]:
        return await self.delegate.find_by_id(session, id)

    async def find_all(self, session: AsyncSession) -> list[T]:
        return await self.delegate.find_all(session)

    async def find_by_query(
        self,
        session: AsyncSession,
        query_name: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> list[T]:
        return await self.delegate.find_by_query(session, query_name, params)

    async def find_by_unique_id(self, session: AsyncSession, unique_id: Any) -> Optional[T]:
        return await self.delegate.find_by_unique_id(session, unique_id)

    async def save(self, session: AsyncSession, entity: T) -> T:
        return await self.delegate.save(session, entity)

    async def persist(self, session: AsyncSession, entity: T) -> None:
        await self.delegate.persist(session, entity)

    async def remove(self, session: AsyncSession, entity: T) -> None:
        await self.delegate.remove(session, entity)


class LocationRepository(_DelegatingRepository[Location, int]):
    """
    Location Repository

    The business key location_pk is recomputed from area/aisle/x/y before every write.
    """

    def __init__(self, queries: NamedQueryRegistry, raise_on_missing: Optional[bool] = None):
        """
        Initialize Repository

        Args:
            queries: Registry holding the Location named queries
            raise_on_missing: find_by_id policy, defaults to REPOSITORY_RAISE_ON_MISSING
        """
        super().__init__(
            SQLAlchemyGenericRepository(
                RepositoryConfig(
                    entity_type=Location,
                    id_type=int,
                    find_all_query=NQ_LOCATION_FIND_ALL,
                    find_by_unique_id_query=NQ_LOCATION_FIND_BY_UNIQUE_QUERY,
                    before_update=normalize_location,
                    raise_on_missing=_raise_on_missing(raise_on_missing),
                ),
                queries,
            )
        )

    async def get_all_locations(self, session: AsyncSession) -> list[Location]:
        """Get all locations with their group loaded"""
        return await self.delegate.find_by_query(session, NQ_LOCATION_FIND_ALL_EAGER)

    async def find_by_location_pk(
        self, session: AsyncSession, pk: Union[str, LocationPK]
    ) -> Optional[Location]:
        """
        Find location by business key

        Args:
            pk: Key string (AREA/AISLE/X/Y) or LocationPK

        Raises:
            ValueError: Malformed key string
            TooManyResultsError: Key is not unique in the store
        """
        if not isinstance(pk, LocationPK):
            pk = LocationPK.parse(pk)
        return await self.delegate.find_by_unique_id(session, str(pk))

    async def find_by_area(self, session: AsyncSession, area: str) -> list[Location]:
        """Find locations of an area, ordered by business key"""
        return await self.delegate.find_by_query(
            session, NQ_LOCATION_FIND_BY_AREA, {"area": area.strip()}
        )


class LocationGroupRepository(_DelegatingRepository[LocationGroup, int]):
    """LocationGroup Repository, unique by name"""

    def __init__(self, queries: NamedQueryRegistry, raise_on_missing: Optional[bool] = None):
        super().__init__(
            SQLAlchemyGenericRepository(
                RepositoryConfig(
                    entity_type=LocationGroup,
                    id_type=int,
                    find_all_query=NQ_LOCATION_GROUP_FIND_ALL,
                    find_by_unique_id_query=NQ_LOCATION_GROUP_FIND_BY_UNIQUE_QUERY,
                    raise_on_missing=_raise_on_missing(raise_on_missing),
                ),
                queries,
            )
        )

    async def find_by_name(self, session: AsyncSession, name: str) -> Optional[LocationGroup]:
        """Find group by name"""
        return await self.delegate.find_by_unique_id(session, name)
