"""CLI script for checking a store's delivery zones against a location.

Useful for support and debugging. Loads a store from the data directory,
explains how every zone evaluates against the buyer's location/state, and
prints the resolved result.

Usage:
    python scripts/check_delivery.py helix-store --lat 4.9134 --lon 6.2932 --state Rivers
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.api.exceptions import ShopZoneException
from src.catalog.stores import StoreRepository
from src.config import DATA_DIR, STORES_FILENAME
from src.delivery.geo import InvalidCoordinateError, validate_coordinate
from src.delivery.matcher import match_zone
from src.delivery.models import Coordinate, DeliveryQuery, DeliveryType, DeliveryZone
from src.delivery.resolver import resolve_delivery

# Setup logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s"
)
logger = logging.getLogger(__name__)


def build_query(
    latitude: Optional[float],
    longitude: Optional[float],
    state: Optional[str],
) -> DeliveryQuery:
    """Build a delivery query from CLI arguments.

    Raises:
        ValueError: If only one of latitude/longitude is given.
        InvalidCoordinateError: If the coordinate is out of range.
    """
    if (latitude is None) != (longitude is None):
        raise ValueError("--lat and --lon must be given together")

    location = None
    if latitude is not None:
        validate_coordinate(latitude, longitude)
        location = Coordinate(latitude=latitude, longitude=longitude)

    return DeliveryQuery(location=location, state=state)


def describe_zone(zone: DeliveryZone, query: DeliveryQuery) -> None:
    """Print how a single zone evaluates against the query."""
    print(f"\nChecking zone: {zone.name} ({zone.id})")
    print(f"- Type: {zone.delivery_type}")
    print(f"- Active: {zone.is_active}")
    print(f"- Cost: {zone.cost:g}, ETA: {zone.estimated_days or 'n/a'}")

    if not zone.is_active:
        print("- Skipped (inactive)")
        return

    if zone.delivery_type == DeliveryType.STATE_BASED:
        print(f"- States covered: {', '.join(zone.states) or '(none)'}")
    elif zone.delivery_type == DeliveryType.RADIUS_BASED:
        if zone.location is not None:
            print(f"- Zone centre: ({zone.location.latitude}, {zone.location.longitude})")
        print(f"- Zone radius: {zone.radius} km")

    match = match_zone(zone, query)
    if match is None:
        print("- NOT covered")
    elif match.distance_km is not None:
        print(f"- Covered, {match.distance_km} km from zone centre")
    else:
        print("- Covered")


def main() -> int:
    """Main entry point for the delivery check CLI."""
    parser = argparse.ArgumentParser(
        description="Explain delivery-zone resolution for a store",
    )
    parser.add_argument("store_id", help="Store identifier")
    parser.add_argument("--lat", type=float, default=None, help="Buyer latitude")
    parser.add_argument("--lon", type=float, default=None, help="Buyer longitude")
    parser.add_argument("--state", default=None, help="Buyer state")
    parser.add_argument(
        "--data-dir",
        default=DATA_DIR,
        help=f"Directory containing {STORES_FILENAME} (default: {DATA_DIR})",
    )

    args = parser.parse_args()

    try:
        query = build_query(args.lat, args.lon, args.state)
    except (ValueError, InvalidCoordinateError) as e:
        parser.error(str(e))

    try:
        repository = StoreRepository.from_json(str(Path(args.data_dir) / STORES_FILENAME))
        zones = repository.zones_for(args.store_id)
    except ShopZoneException as e:
        print(f"Error: {e.message}")
        return 1

    print(f"Store: {args.store_id}")
    print(f"Delivery zones: {len(zones)}")

    if not zones:
        print("No delivery zones configured for this store")
        return 0

    for zone in zones:
        describe_zone(zone, query)

    resolution = resolve_delivery(zones, query)

    print("\n=== DELIVERY VALIDATION RESULT ===")
    print(f"Available zones: {len(resolution.zones)}")
    if resolution.cheapest is not None:
        cheapest = resolution.cheapest.zone
        print("Delivery is available")
        print(f"Cheapest option: {cheapest.name} - {cheapest.cost:g}")
    else:
        print("Delivery is not available")

    return 0


if __name__ == "__main__":
    sys.exit(main())
