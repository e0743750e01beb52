"""Seller data source and proximity filtering.

Seller records store their position GeoJSON style, as
``address.coordinates.coordinates == [longitude, latitude]``. This module is
the only place that swaps that order into a :class:`Coordinate`.
"""

import logging
import math
from typing import Any, Dict, List, NamedTuple, Optional, Sequence

import numpy as np

from src.catalog.utils import load_json_records, record_id
from src.delivery.geo import distances_km, is_valid_coordinate
from src.delivery.models import Coordinate

# Configure module logger
logger = logging.getLogger(__name__)

SELLER_TYPE = "seller"


class NearbySeller(NamedTuple):
    """A seller within range of a search location."""

    seller_id: str
    location: Coordinate
    distance_km: float
    seller: Dict[str, Any]


def _coordinate_value(value: Any) -> Optional[float]:
    # Exported records may wrap numbers as {"$numberDouble": "7.0134"}
    if isinstance(value, dict) and "$numberDouble" in value:
        value = value["$numberDouble"]
        try:
            value = float(value)
        except (TypeError, ValueError):
            return None

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None

    value = float(value)
    return value if math.isfinite(value) else None


def seller_coordinate(seller: Dict[str, Any]) -> Optional[Coordinate]:
    """Extract a seller's location.

    Args:
        seller: Seller record.

    Returns:
        The seller's Coordinate, or None if the record has no valid
        ``[longitude, latitude]`` pair.
    """
    address = seller.get("address")
    if not isinstance(address, dict):
        return None

    geo_point = address.get("coordinates")
    if not isinstance(geo_point, dict):
        return None

    pair = geo_point.get("coordinates")
    if not isinstance(pair, (list, tuple)) or len(pair) != 2:
        return None

    longitude = _coordinate_value(pair[0])
    latitude = _coordinate_value(pair[1])
    if longitude is None or latitude is None:
        return None

    if not is_valid_coordinate(latitude, longitude):
        return None

    return Coordinate(latitude=latitude, longitude=longitude)


def find_nearby_sellers(
    sellers: Sequence[Dict[str, Any]],
    location: Coordinate,
    radius_km: float,
) -> List[NearbySeller]:
    """Find sellers whose location is within a radius of a point.

    Sellers without a usable location are excluded. The radius boundary is
    inclusive. Results keep the input order of sellers.

    Args:
        sellers: Seller records.
        location: Search centre.
        radius_km: Search radius in kilometers.

    Returns:
        Sellers in range, each with its location and exact distance.
    """
    located = []
    for seller in sellers:
        coordinate = seller_coordinate(seller)
        seller_id = record_id(seller)
        if coordinate is None or seller_id is None:
            logger.debug(
                "Seller has no usable location",
                extra={"seller_id": seller_id},
            )
            continue
        located.append((str(seller_id), coordinate, seller))

    if not located:
        return []

    latitudes = np.array([coordinate.latitude for _, coordinate, _ in located])
    longitudes = np.array([coordinate.longitude for _, coordinate, _ in located])
    distances = distances_km(
        location.latitude, location.longitude, latitudes, longitudes
    )

    nearby = [
        NearbySeller(
            seller_id=seller_id,
            location=coordinate,
            distance_km=float(distance),
            seller=seller,
        )
        for (seller_id, coordinate, seller), distance in zip(located, distances)
        if distance <= radius_km
    ]

    logger.info(
        "Nearby sellers found",
        extra={
            "sellers_total": len(sellers),
            "sellers_located": len(located),
            "sellers_nearby": len(nearby),
            "radius_km": radius_km,
        },
    )

    return nearby


class SellerDirectory:
    """In-memory list of seller records."""

    def __init__(self, users: Optional[List[Dict[str, Any]]] = None):
        # Records without a type are treated as sellers
        self._sellers = [
            user for user in users or [] if user.get("type", SELLER_TYPE) == SELLER_TYPE
        ]

    @classmethod
    def from_json(cls, path: str) -> "SellerDirectory":
        """Load sellers from a JSON file holding a list of user records."""
        return cls(load_json_records(path))

    def __len__(self) -> int:
        return len(self._sellers)

    def all(self) -> List[Dict[str, Any]]:
        """Return all seller records."""
        return list(self._sellers)
