"""Tests for the great-circle distance module."""

import itertools
import math

import numpy as np
import pytest

from src.delivery.geo import (
    EARTH_RADIUS_KM,
    InvalidCoordinateError,
    distance_km,
    distances_km,
    is_valid_coordinate,
    round_distance,
    validate_coordinate,
)

PORT_HARCOURT = (4.8156, 7.0134)
BUYER = (4.9134, 6.2932)
LAGOS = (6.5244, 3.3792)
ABUJA = (9.0765, 7.3986)

SAMPLE_POINTS = [
    PORT_HARCOURT,
    BUYER,
    LAGOS,
    ABUJA,
    (0.0, 0.0),
    (51.5074, -0.1278),
    (-33.8688, 151.2093),
    (89.9, 179.9),
]


def test_distance_to_self_is_zero():
    """Test that the distance from a point to itself is exactly zero."""
    for lat, lon in SAMPLE_POINTS:
        assert distance_km(lat, lon, lat, lon) == 0.0


def test_distance_is_symmetric():
    """Test that distance(A, B) equals distance(B, A)."""
    for (lat1, lon1), (lat2, lon2) in itertools.combinations(SAMPLE_POINTS, 2):
        forward = distance_km(lat1, lon1, lat2, lon2)
        backward = distance_km(lat2, lon2, lat1, lon1)
        assert forward == pytest.approx(backward, abs=1e-9)


def test_triangle_inequality():
    """Test that no detour through a third point is shorter."""
    for a, b, c in itertools.permutations(SAMPLE_POINTS, 3):
        direct = distance_km(*a, *c)
        via_b = distance_km(*a, *b) + distance_km(*b, *c)
        assert direct <= via_b + 1e-6


def test_known_distance_port_harcourt_to_buyer():
    """Test the distance used by the Port Harcourt delivery scenario."""
    distance = distance_km(*PORT_HARCOURT, *BUYER)

    assert 79.0 < distance < 82.0


def test_one_degree_of_latitude():
    """Test that one degree along a meridian is R * pi / 180."""
    distance = distance_km(0.0, 0.0, 1.0, 0.0)

    assert distance == pytest.approx(EARTH_RADIUS_KM * math.pi / 180, rel=1e-9)


def test_antipodal_points():
    """Test that antipodal points are half the circumference apart."""
    distance = distance_km(0.0, 0.0, 0.0, 180.0)

    assert distance == pytest.approx(EARTH_RADIUS_KM * math.pi, rel=1e-9)


def test_distance_returns_python_float():
    """Test that scalar distance is a plain float."""
    assert type(distance_km(*PORT_HARCOURT, *LAGOS)) is float


def test_distances_km_matches_scalar_distance():
    """Test that the array form agrees with the scalar form."""
    lats = np.array([p[0] for p in SAMPLE_POINTS])
    lons = np.array([p[1] for p in SAMPLE_POINTS])

    distances = distances_km(*PORT_HARCOURT, lats, lons)

    assert distances.shape == (len(SAMPLE_POINTS),)
    for (lat, lon), distance in zip(SAMPLE_POINTS, distances):
        assert distance == pytest.approx(distance_km(*PORT_HARCOURT, lat, lon), abs=1e-9)


def test_distances_km_shape_mismatch_raises_valueerror():
    """Test that mismatched latitude/longitude arrays are rejected."""
    with pytest.raises(ValueError):
        distances_km(0.0, 0.0, np.array([1.0, 2.0]), np.array([1.0]))


def test_round_distance_half_up():
    """Test that rounding is half-up at two decimals."""
    assert round_distance(0.125) == 0.13
    assert round_distance(2.675) == 2.68
    assert round_distance(80.5349) == 80.53
    assert round_distance(0.0) == 0.0
    assert round_distance(12.3) == 12.3


def test_is_valid_coordinate():
    """Test coordinate range checks."""
    assert is_valid_coordinate(4.8156, 7.0134)
    assert is_valid_coordinate(90, 180)
    assert is_valid_coordinate(-90, -180)
    assert not is_valid_coordinate(90.0001, 0)
    assert not is_valid_coordinate(0, -180.5)
    assert not is_valid_coordinate(float("nan"), 0)
    assert not is_valid_coordinate(0, float("inf"))
    assert not is_valid_coordinate("north", 0)
    assert not is_valid_coordinate(None, 0)


def test_validate_coordinate_raises_invalid_coordinate_error():
    """Test that out-of-range coordinates raise InvalidCoordinateError."""
    validate_coordinate(4.8156, 7.0134)

    with pytest.raises(InvalidCoordinateError) as exc_info:
        validate_coordinate(120.0, 7.0)

    assert exc_info.value.latitude == 120.0
    assert isinstance(exc_info.value, ValueError)
