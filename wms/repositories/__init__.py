"""
Data Access Layer Module Initialization

Concrete repositories live in their own modules (e.g. wms.repositories.location_repo).
"""

from wms.repositories.base import GenericRepository, RepositoryConfig, UNIQUE_ID_PARAM
from wms.repositories.named_query import NamedQuery, NamedQueryRegistry

__all__ = [
    "GenericRepository",
    "RepositoryConfig",
    "UNIQUE_ID_PARAM",
    "NamedQuery",
    "NamedQueryRegistry",
]
