"""
SQLAlchemy ORM Model Definitions

Defines the warehouse topology tables:
- location_groups: Location Groups Table
- locations: Locations Table
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from wms.common.time import utc_now_naive


class Base(DeclarativeBase):
    """SQLAlchemy ORM Base Class"""
    pass


class LocationGroup(Base):
    """
    Location Groups Table

    Groups locations into logical areas and carries the infeed/outfeed state of the group.
    """
    __tablename__ = "location_groups"

    # Primary Key ID
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Group name, unique
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    # Description
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    # Infeed state: AVAILABLE / NOT_AVAILABLE
    group_state_in: Mapped[str] = mapped_column(String(20), default="AVAILABLE")
    # Outfeed state: AVAILABLE / NOT_AVAILABLE
    group_state_out: Mapped[str] = mapped_column(String(20), default="AVAILABLE")
    # Optimistic lock version
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    # Creation Time
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now_naive, nullable=False
    )
    # Update Time
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now_naive, onupdate=utc_now_naive, nullable=False
    )

    # Relationship: Locations in this group
    locations: Mapped[list["Location"]] = relationship(
        "Location", back_populates="location_group"
    )

    __mapper_args__ = {"version_id_col": version}


class Location(Base):
    """
    Locations Table

    A physical storage place in the warehouse. The business key location_pk
    is derived from area/aisle/x/y and is deliberately not unique in the
    schema; duplicates are detected by the repository.
    """
    __tablename__ = "locations"

    # Primary Key ID
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Business key components
    area: Mapped[str] = mapped_column(String(20), nullable=False)
    aisle: Mapped[str] = mapped_column(String(20), nullable=False)
    x: Mapped[str] = mapped_column(String(20), nullable=False)
    y: Mapped[str] = mapped_column(String(20), nullable=False)
    # Business key, e.g. AREA01/01/01/01
    location_pk: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    # Description
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    # Max number of transport units on this location
    no_max_transport_units: Mapped[int] = mapped_column(Integer, default=1)
    # Infeed / outfeed allowed
    incoming_active: Mapped[bool] = mapped_column(Boolean, default=True)
    outgoing_active: Mapped[bool] = mapped_column(Boolean, default=True)
    # Owning group
    location_group_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("location_groups.id", ondelete="SET NULL"), nullable=True
    )
    # Optimistic lock version
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    # Creation Time
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now_naive, nullable=False
    )
    # Update Time
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now_naive, onupdate=utc_now_naive, nullable=False
    )

    # Relationship: Owning group
    location_group: Mapped[Optional["LocationGroup"]] = relationship(
        "LocationGroup", back_populates="locations"
    )

    __mapper_args__ = {"version_id_col": version}
