"""
Domain Model Module Initialization
"""

from wms.domain.location import LocationPK, normalize_location

__all__ = [
    "LocationPK",
    "normalize_location",
]
