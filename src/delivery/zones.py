"""Reading delivery zones out of store documents."""

import logging
from typing import Any, Dict, List, Mapping

from pydantic import ValidationError

from src.delivery.models import DeliveryZone

# Configure module logger
logger = logging.getLogger(__name__)


def raw_zones_from_store(store: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """Return the raw zone dicts configured on a store document.

    Stores keep zones under ``shipping.zones``; older documents nest the
    shipping block under ``settings``. A store without zones yields an
    empty list.
    """
    shipping = store.get("shipping")
    if not isinstance(shipping, Mapping):
        settings = store.get("settings")
        shipping = settings.get("shipping") if isinstance(settings, Mapping) else None

    if not isinstance(shipping, Mapping):
        return []

    zones = shipping.get("zones") or []
    if not isinstance(zones, list):
        logger.warning(
            "Store shipping zones are not a list",
            extra={"store_id": store.get("id"), "zones_type": type(zones).__name__},
        )
        return []

    return [zone for zone in zones if isinstance(zone, Mapping)]


def zones_from_store(store: Mapping[str, Any]) -> List[DeliveryZone]:
    """Parse the delivery zones of a store document.

    Zones that fail validation are logged and skipped so that one malformed
    zone does not hide the store's other zones. When two zones share an id
    the first one wins.

    Args:
        store: Store document as loaded from the data source.

    Returns:
        Parsed zones in configured order.
    """
    store_id = store.get("id")
    zones: List[DeliveryZone] = []
    seen_ids = set()

    for position, raw_zone in enumerate(raw_zones_from_store(store)):
        try:
            zone = DeliveryZone.model_validate(raw_zone)
        except ValidationError as e:
            logger.warning(
                "Skipping invalid delivery zone",
                extra={
                    "store_id": store_id,
                    "zone_id": raw_zone.get("id"),
                    "position": position,
                    "error_count": e.error_count(),
                    "error": str(e),
                },
            )
            continue

        if zone.id in seen_ids:
            logger.warning(
                "Skipping duplicate delivery zone id",
                extra={"store_id": store_id, "zone_id": zone.id},
            )
            continue

        seen_ids.add(zone.id)
        zones.append(zone)

    return zones
