"""Data models for delivery-zone resolution.

Models use snake_case attributes in Python and camelCase aliases on the JSON
side, matching the documents stores keep their shipping settings in.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DeliveryType(str, Enum):
    """Kinds of delivery zone a store can configure."""

    STATE_BASED = "state-based"
    RADIUS_BASED = "radius-based"


class Coordinate(BaseModel):
    """A point on the Earth's surface in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90, description="Latitude in degrees")
    longitude: float = Field(
        ..., ge=-180, le=180, description="Longitude in degrees"
    )


class ZoneLocation(Coordinate):
    """Centre of a radius-based zone, with an optional display address."""

    address: Optional[str] = Field(default=None, description="Display address")


class DeliveryZone(BaseModel):
    """A named delivery policy configured by a store owner.

    Attributes:
        id: Zone identifier, unique within its store.
        name: Human-readable zone name.
        delivery_type: Raw type string; see :class:`DeliveryType`. Unknown
            values are kept so the zone can be carried but never matched.
        cost: Delivery cost in the store's currency.
        estimated_days: Free-text delivery estimate, e.g. "1-2 days".
        is_active: Whether the zone is offered. Missing or null means True.
        states: Covered state names (state-based zones).
        location: Zone centre (radius-based zones).
        radius: Zone radius in kilometers (radius-based zones).
    """

    model_config = ConfigDict(
        populate_by_name=True, frozen=True, coerce_numbers_to_str=True
    )

    id: str = Field(..., description="Zone identifier")
    name: str = Field(default="", description="Zone name")
    delivery_type: str = Field(..., alias="deliveryType")
    cost: float = Field(..., ge=0, allow_inf_nan=False, description="Delivery cost")
    estimated_days: str = Field(default="", alias="estimatedDays")
    is_active: bool = Field(default=True, alias="isActive")
    states: List[str] = Field(default_factory=list)
    location: Optional[ZoneLocation] = None
    radius: Optional[float] = Field(
        default=None, allow_inf_nan=False, description="Radius in km"
    )

    @field_validator("is_active", mode="before")
    @classmethod
    def _null_is_active(cls, value):
        # Only an explicit false disables a zone
        return True if value is None else value


class DeliveryQuery(BaseModel):
    """Where a buyer wants an order delivered.

    Either field may be omitted. A query with neither matches no zone.
    """

    location: Optional[Coordinate] = None
    state: Optional[str] = None


class DeliveryMatch(BaseModel):
    """A zone that qualifies for a delivery query."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    zone: DeliveryZone
    distance_km: Optional[float] = Field(default=None, alias="distanceKm")
    exact_distance_km: Optional[float] = Field(default=None, exclude=True)


class DeliveryResolution(BaseModel):
    """Outcome of resolving a store's zones against one query."""

    available: bool
    zones: List[DeliveryMatch] = Field(default_factory=list)
    cheapest: Optional[DeliveryMatch] = None
