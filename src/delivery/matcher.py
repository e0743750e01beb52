"""Matching of a single delivery zone against a delivery query."""

import logging
import math
from typing import Optional

from src.delivery.geo import distance_km, is_valid_coordinate, round_distance
from src.delivery.models import DeliveryMatch, DeliveryQuery, DeliveryType, DeliveryZone

# Configure module logger
logger = logging.getLogger(__name__)


def normalize_state(state: Optional[str]) -> str:
    """Normalize a state name for case-insensitive comparison."""
    if not state:
        return ""
    return state.strip().casefold()


def match_zone(zone: DeliveryZone, query: DeliveryQuery) -> Optional[DeliveryMatch]:
    """Check whether a zone can deliver to the queried location or state.

    Malformed zones (no states, no centre, non-positive radius) and unknown
    delivery types never match; they are skipped rather than raised so one bad
    zone cannot break resolution of the others.

    Args:
        zone: Zone to evaluate.
        query: Buyer's location and/or state.

    Returns:
        DeliveryMatch if the zone applies, otherwise None. Radius-based
        matches carry the distance from the zone centre.
    """
    if not zone.is_active:
        return None

    if zone.delivery_type == DeliveryType.STATE_BASED:
        return _match_state_zone(zone, query)

    if zone.delivery_type == DeliveryType.RADIUS_BASED:
        return _match_radius_zone(zone, query)

    logger.debug(
        "Skipping zone with unknown delivery type",
        extra={"zone_id": zone.id, "delivery_type": zone.delivery_type},
    )
    return None


def _match_state_zone(
    zone: DeliveryZone, query: DeliveryQuery
) -> Optional[DeliveryMatch]:
    state = normalize_state(query.state)
    if not state:
        return None

    if not zone.states:
        logger.debug("State zone has no states", extra={"zone_id": zone.id})
        return None

    if any(normalize_state(covered) == state for covered in zone.states):
        return DeliveryMatch(zone=zone)

    return None


def _match_radius_zone(
    zone: DeliveryZone, query: DeliveryQuery
) -> Optional[DeliveryMatch]:
    if query.location is None:
        return None

    centre = zone.location
    if (
        centre is None
        or zone.radius is None
        or not math.isfinite(zone.radius)
        or zone.radius <= 0
    ):
        logger.debug(
            "Radius zone missing centre or radius",
            extra={"zone_id": zone.id, "radius": zone.radius},
        )
        return None

    if not is_valid_coordinate(centre.latitude, centre.longitude):
        logger.debug("Radius zone centre out of range", extra={"zone_id": zone.id})
        return None

    distance = distance_km(
        query.location.latitude,
        query.location.longitude,
        centre.latitude,
        centre.longitude,
    )

    # Boundary is inclusive
    if distance > zone.radius:
        return None

    return DeliveryMatch(
        zone=zone,
        distance_km=round_distance(distance),
        exact_distance_km=distance,
    )
