"""Tests for delivery-zone resolution.

Covers ranking by cost, tie handling, inactive zones and the Port Harcourt
delivery scenario with mixed state and radius zones.
"""

from typing import List

import pytest

from src.delivery.geo import distance_km
from src.delivery.models import Coordinate, DeliveryQuery, DeliveryZone, ZoneLocation
from src.delivery.resolver import ZoneResolver, resolve_delivery

PORT_HARCOURT = ZoneLocation(
    latitude=4.8156, longitude=7.0134, address="Port Harcourt, Rivers State"
)
BUYER = Coordinate(latitude=4.9134, longitude=6.2932)


@pytest.fixture
def port_harcourt_zones() -> List[DeliveryZone]:
    """Fixture providing the Port Harcourt store's three zones."""
    return [
        DeliveryZone.model_validate({
            "id": "zone-rivers-state",
            "name": "Rivers State Delivery",
            "deliveryType": "state-based",
            "states": ["Rivers"],
            "cost": 1500,
            "estimatedDays": "1-2 days",
            "isActive": True,
        }),
        DeliveryZone.model_validate({
            "id": "zone-nearby-radius",
            "name": "Local Delivery (50km)",
            "deliveryType": "radius-based",
            "location": PORT_HARCOURT.model_dump(),
            "radius": 50,
            "cost": 1000,
            "estimatedDays": "1 day",
        }),
        DeliveryZone.model_validate({
            "id": "zone-extended-radius",
            "name": "Extended Delivery (100km)",
            "deliveryType": "radius-based",
            "location": PORT_HARCOURT.model_dump(),
            "radius": 100,
            "cost": 2000,
            "estimatedDays": "2-3 days",
        }),
    ]


def state_zone(zone_id: str, cost: float, **kwargs) -> DeliveryZone:
    return DeliveryZone(
        id=zone_id,
        name=zone_id,
        delivery_type="state-based",
        states=["Rivers"],
        cost=cost,
        **kwargs,
    )


def test_resolve_sorts_matches_by_cost():
    """Test that all matching zones are returned cheapest first."""
    zones = [state_zone("a", 2000), state_zone("b", 1000), state_zone("c", 1500)]

    result = resolve_delivery(zones, DeliveryQuery(state="Rivers"))

    assert result.available is True
    assert [m.zone.cost for m in result.zones] == [1000, 1500, 2000]
    assert result.cheapest.zone.cost == 1000
    assert result.cheapest.zone.id == "b"


def test_resolve_equal_costs_keep_zone_order():
    """Test that equal-cost zones keep their configured order."""
    zones = [
        state_zone("first", 1000),
        state_zone("pricey", 3000),
        state_zone("second", 1000),
        state_zone("third", 1000),
    ]

    result = resolve_delivery(zones, DeliveryQuery(state="rivers"))

    assert [m.zone.id for m in result.zones] == ["first", "second", "third", "pricey"]
    assert result.cheapest.zone.id == "first"


def test_resolve_empty_zone_set():
    """Test that an empty zone set resolves to unavailable."""
    result = resolve_delivery([], DeliveryQuery(state="Rivers"))

    assert result.available is False
    assert result.zones == []
    assert result.cheapest is None


def test_resolve_empty_query_is_not_an_error(port_harcourt_zones):
    """Test that a query with neither location nor state matches nothing."""
    result = resolve_delivery(port_harcourt_zones, DeliveryQuery())

    assert result.available is False
    assert result.zones == []
    assert result.cheapest is None


def test_resolve_excludes_inactive_zones(port_harcourt_zones):
    """Test that an inactive zone is excluded although it would match."""
    zones = list(port_harcourt_zones)
    zones[1] = zones[1].model_copy(update={"is_active": False})
    query = DeliveryQuery(location=Coordinate(latitude=4.8156, longitude=7.0134))

    result = resolve_delivery(zones, query)

    assert [m.zone.id for m in result.zones] == ["zone-extended-radius"]


def test_resolve_does_not_modify_zone_set(port_harcourt_zones):
    """Test that resolution leaves the input zones untouched."""
    before = [zone.model_dump() for zone in port_harcourt_zones]

    resolve_delivery(port_harcourt_zones, DeliveryQuery(state="Rivers", location=BUYER))

    assert [zone.model_dump() for zone in port_harcourt_zones] == before


def test_port_harcourt_buyer_in_rivers(port_harcourt_zones):
    """Test the ~80 km buyer: Rivers state zone beats the 100 km zone."""
    assert 50 < distance_km(4.8156, 7.0134, BUYER.latitude, BUYER.longitude) < 100

    result = resolve_delivery(
        port_harcourt_zones, DeliveryQuery(location=BUYER, state="Rivers")
    )

    assert result.available is True
    assert [m.zone.id for m in result.zones] == [
        "zone-rivers-state",
        "zone-extended-radius",
    ]
    assert result.cheapest.zone.id == "zone-rivers-state"
    assert result.cheapest.zone.cost == 1500
    assert result.cheapest.distance_km is None

    radius_match = result.zones[1]
    assert 79.0 < radius_match.distance_km < 82.0
    assert radius_match.distance_km == round(radius_match.distance_km, 2)


def test_port_harcourt_buyer_location_only(port_harcourt_zones):
    """Test that without a state only the 100 km zone matches."""
    result = resolve_delivery(port_harcourt_zones, DeliveryQuery(location=BUYER))

    assert [m.zone.id for m in result.zones] == ["zone-extended-radius"]
    assert result.cheapest.zone.cost == 2000


def test_port_harcourt_buyer_in_city_centre(port_harcourt_zones):
    """Test that a buyer in the city gets the 50 km zone as cheapest."""
    query = DeliveryQuery(
        location=Coordinate(latitude=4.82, longitude=7.02), state="Rivers"
    )

    result = resolve_delivery(port_harcourt_zones, query)

    assert [m.zone.cost for m in result.zones] == [1000, 1500, 2000]
    assert result.cheapest.zone.id == "zone-nearby-radius"


def test_zone_resolver_uses_custom_matcher(port_harcourt_zones):
    """Test that ZoneResolver delegates matching to its matcher."""
    seen = []

    def record_matcher(zone, query):
        seen.append(zone.id)
        return None

    result = ZoneResolver(matcher=record_matcher).resolve(
        port_harcourt_zones, DeliveryQuery(state="Rivers")
    )

    assert seen == [zone.id for zone in port_harcourt_zones]
    assert result.available is False


def test_resolver_skips_inactive_zones_before_matching(port_harcourt_zones):
    """Test that the matcher is never called for inactive zones."""
    seen = []

    def record_matcher(zone, query):
        seen.append(zone.id)
        return None

    zones = [port_harcourt_zones[0].model_copy(update={"is_active": False})]
    ZoneResolver(matcher=record_matcher).resolve(zones, DeliveryQuery(state="Rivers"))

    assert seen == []
