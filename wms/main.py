"""
Application Wiring

Builds the long-lived repository instances once at startup. Repositories
are stateless, so one set is shared by all tasks; each call brings its own session.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from wms.config import get_settings
from wms.db.queries import build_query_registry
from wms.db.session import init_db
from wms.logging_config import setup_logging
from wms.repositories.location_repo import LocationGroupRepository, LocationRepository
from wms.repositories.named_query import NamedQueryRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Repositories:
    """Repository instances of the application"""

    locations: LocationRepository
    location_groups: LocationGroupRepository


def build_repositories(queries: Optional[NamedQueryRegistry] = None) -> Repositories:
    """
    Create all repositories over one named query registry

    Args:
        queries: Registry to use, defaults to build_query_registry()
    """
    if queries is None:
        queries = build_query_registry()
    return Repositories(
        locations=LocationRepository(queries),
        location_groups=LocationGroupRepository(queries),
    )


async def startup() -> Repositories:
    """
    Application startup

    Configures logging, creates the schema and wires the repositories.
    """
    setup_logging()
    await init_db()
    repositories = build_repositories()
    logger.info("%s persistence layer initialized", get_settings().APP_NAME)
    return repositories
