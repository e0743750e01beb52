"""Delivery-zone resolution.

Matches every zone of a store against a query and picks the cheapest one.
"""

import logging
import time
from typing import Callable, List, Optional, Sequence

from src.delivery.matcher import match_zone
from src.delivery.models import (
    DeliveryMatch,
    DeliveryQuery,
    DeliveryResolution,
    DeliveryZone,
)

# Configure module logger
logger = logging.getLogger(__name__)

ZoneMatchFn = Callable[[DeliveryZone, DeliveryQuery], Optional[DeliveryMatch]]


class ZoneResolver:
    """Resolves which of a store's zones can serve a delivery query.

    Matches are ranked by cost only. Zones with equal cost keep the order
    they have in the store's zone list.
    """

    def __init__(self, matcher: ZoneMatchFn = match_zone):
        self.matcher = matcher

    def resolve(
        self,
        zones: Sequence[DeliveryZone],
        query: DeliveryQuery,
    ) -> DeliveryResolution:
        """Resolve a zone set against a query.

        A query with neither location nor state, or an empty zone set, is
        not an error: it resolves to an unavailable result.

        Args:
            zones: The store's configured zones. Treated as read-only.
            query: Buyer's location and/or state.

        Returns:
            DeliveryResolution with all matching zones sorted by cost and
            the cheapest match, if any.
        """
        start_time = time.time()

        active_zones = [zone for zone in zones if zone.is_active]

        matches: List[DeliveryMatch] = []
        for zone in active_zones:
            match = self.matcher(zone, query)
            if match is not None:
                matches.append(match)

        # sorted() is stable, equal costs keep zone order
        matches = sorted(matches, key=lambda m: m.zone.cost)
        cheapest = matches[0] if matches else None

        logger.info(
            "Delivery zones resolved",
            extra={
                "zones_total": len(zones),
                "zones_active": len(active_zones),
                "zones_matched": len(matches),
                "cheapest_zone_id": cheapest.zone.id if cheapest else None,
                "has_location": query.location is not None,
                "has_state": bool(query.state),
                "resolve_time_ms": round((time.time() - start_time) * 1000, 2),
            },
        )

        return DeliveryResolution(
            available=len(matches) > 0,
            zones=matches,
            cheapest=cheapest,
        )


_default_resolver = ZoneResolver()


def resolve_delivery(
    zones: Sequence[DeliveryZone], query: DeliveryQuery
) -> DeliveryResolution:
    """Resolve zones with the default matcher."""
    return _default_resolver.resolve(zones, query)
