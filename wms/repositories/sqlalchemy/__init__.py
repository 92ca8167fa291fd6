"""
SQLAlchemy Repository Implementation Module Initialization
"""

from wms.repositories.sqlalchemy.generic_repo import SQLAlchemyGenericRepository

__all__ = [
    "SQLAlchemyGenericRepository",
]
