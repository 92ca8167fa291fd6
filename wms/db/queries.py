"""
Named Query Definitions

Declares the named queries of the persistent entities. Unique-id queries
take their key as the :unique_id bind parameter.
"""

from sqlalchemy import bindparam, select
from sqlalchemy.orm import selectinload

from wms.db.models import Location, LocationGroup
from wms.repositories.base import UNIQUE_ID_PARAM
from wms.repositories.named_query import NamedQueryRegistry

# Location
NQ_LOCATION_FIND_ALL = "Location.findAll"
NQ_LOCATION_FIND_ALL_EAGER = "Location.findAllEager"
NQ_LOCATION_FIND_BY_UNIQUE_QUERY = "Location.findByLocationPK"
NQ_LOCATION_FIND_BY_AREA = "Location.findByArea"

# LocationGroup
NQ_LOCATION_GROUP_FIND_ALL = "LocationGroup.findAll"
NQ_LOCATION_GROUP_FIND_BY_UNIQUE_QUERY = "LocationGroup.findByName"


def register_location_queries(registry: NamedQueryRegistry) -> None:
    """Register Location queries"""
    registry.register(
        NQ_LOCATION_FIND_ALL,
        select(Location).order_by(Location.id),
    )
    registry.register(
        NQ_LOCATION_FIND_ALL_EAGER,
        select(Location)
        .options(selectinload(Location.location_group))
        .order_by(Location.id),
    )
    registry.register(
        NQ_LOCATION_FIND_BY_UNIQUE_QUERY,
        select(Location).where(Location.location_pk == bindparam(UNIQUE_ID_PARAM)),
    )
    registry.register(
        NQ_LOCATION_FIND_BY_AREA,
        select(Location)
        .where(Location.area == bindparam("area"))
        .order_by(Location.location_pk),
    )


def register_location_group_queries(registry: NamedQueryRegistry) -> None:
    """Register LocationGroup queries"""
    registry.register(
        NQ_LOCATION_GROUP_FIND_ALL,
        select(LocationGroup).order_by(LocationGroup.name),
    )
    registry.register(
        NQ_LOCATION_GROUP_FIND_BY_UNIQUE_QUERY,
        select(LocationGroup).where(LocationGroup.name == bindparam(UNIQUE_ID_PARAM)),
    )


def build_query_registry() -> NamedQueryRegistry:
    """
    Build the registry with all named queries

    Returns:
        NamedQueryRegistry: Registry shared by all repositories
    """
    registry = NamedQueryRegistry()
    register_location_queries(registry)
    register_location_group_queries(registry)
    return registry
