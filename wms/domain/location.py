"""
Location Domain Model

Defines the LocationPK business key value object and the pre-save hook for Location entities.
"""

import logging

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wms.db.models import Location

logger = logging.getLogger(__name__)

# Separator between the business key components
PK_SEPARATOR = "/"


class LocationPK(BaseModel):
    """
    Location Business Key

    Identifies a location by its coordinates, rendered as AREA/AISLE/X/Y.
    """

    model_config = ConfigDict(frozen=True)

    # Warehouse area
    area: str = Field(..., min_length=1, max_length=20, description="Area")
    # Aisle within the area
    aisle: str = Field(..., min_length=1, max_length=20, description="Aisle")
    # Horizontal coordinate
    x: str = Field(..., min_length=1, max_length=20, description="X coordinate")
    # Vertical coordinate
    y: str = Field(..., min_length=1, max_length=20, description="Y coordinate")

    @field_validator("area", "aisle", "x", "y", mode="before")
    @classmethod
    def validate_component(cls, v):
        """Strip whitespace and reject the separator inside a component"""
        if isinstance(v, str):
            v = v.strip()
            if PK_SEPARATOR in v:
                raise ValueError(f"Component must not contain '{PK_SEPARATOR}'")
        return v

    def __str__(self) -> str:
        return PK_SEPARATOR.join((self.area, self.aisle, self.x, self.y))

    @classmethod
    def parse(cls, text: str) -> "LocationPK":
        """
        Parse a business key string

        Args:
            text: Key in the form AREA/AISLE/X/Y

        Returns:
            LocationPK: Parsed key

        Raises:
            ValueError: Wrong number of components or invalid component
        """
        parts = text.strip().split(PK_SEPARATOR)
        if len(parts) != 4:
            raise ValueError(
                f"Invalid location key {text!r}: expected 4 components, got {len(parts)}"
            )
        area, aisle, x, y = parts
        return cls(area=area, aisle=aisle, x=x, y=y)

    @classmethod
    def of(cls, location: Location) -> "LocationPK":
        """Build the key from a Location entity's components"""
        return cls(area=location.area, aisle=location.aisle, x=location.x, y=location.y)


def normalize_location(location: Location) -> None:
    """
    Pre-save hook for Location

    Recomputes the derived location_pk from the key components and writes
    the normalized components back onto the entity.
    """
    pk = LocationPK.of(location)
    location.area, location.aisle, location.x, location.y = pk.area, pk.aisle, pk.x, pk.y
    location.location_pk = str(pk)
    logger.debug("Normalized location key to %s", location.location_pk)
