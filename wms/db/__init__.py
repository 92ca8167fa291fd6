"""
Database Module Initialization
"""

from wms.db.session import init_db, transaction, AsyncSessionLocal
from wms.db.models import (
    Base,
    Location,
    LocationGroup,
)

__all__ = [
    "init_db",
    "transaction",
    "AsyncSessionLocal",
    "Base",
    "Location",
    "LocationGroup",
]
