"""Great-circle distance utilities.

Every distance in the service goes through the Haversine implementation in this
module, both for single pairs of points (zone matching) and for one point
against many (nearby seller filtering). Functions take explicit latitude and
longitude arguments; GeoJSON ``[lon, lat]`` arrays are converted by callers.
"""

import logging
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

import numpy as np

# Configure module logger
logger = logging.getLogger(__name__)

# Mean Earth radius used by the Haversine formula
EARTH_RADIUS_KM = 6371.0

# Valid coordinate ranges
MIN_LATITUDE, MAX_LATITUDE = -90.0, 90.0
MIN_LONGITUDE, MAX_LONGITUDE = -180.0, 180.0

ArrayLike = Union[float, np.ndarray]


class InvalidCoordinateError(ValueError):
    """Raised when a latitude/longitude pair is outside the valid ranges."""

    def __init__(self, latitude: float, longitude: float):
        self.latitude = latitude
        self.longitude = longitude
        super().__init__(
            f"Invalid coordinate ({latitude}, {longitude}): latitude must be "
            f"between {MIN_LATITUDE:g} and {MAX_LATITUDE:g}, longitude between "
            f"{MIN_LONGITUDE:g} and {MAX_LONGITUDE:g}"
        )


def _haversine(
    lat1: ArrayLike,
    lon1: ArrayLike,
    lat2: ArrayLike,
    lon2: ArrayLike,
) -> ArrayLike:
    d_lat = np.radians(lat2 - lat1)
    d_lon = np.radians(lon2 - lon1)

    a = (
        np.sin(d_lat / 2) ** 2
        + np.cos(np.radians(lat1)) * np.cos(np.radians(lat2)) * np.sin(d_lon / 2) ** 2
    )
    # Floating point drift can push a marginally outside [0, 1]
    a = np.clip(a, 0.0, 1.0)
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute the great-circle distance between two points in kilometers.

    Uses the Haversine formula on a spherical Earth of radius 6371 km. Inputs
    are not validated; out-of-range values give meaningless but finite results.

    Args:
        lat1: Latitude of the first point in degrees.
        lon1: Longitude of the first point in degrees.
        lat2: Latitude of the second point in degrees.
        lon2: Longitude of the second point in degrees.

    Returns:
        Distance in kilometers (always >= 0).

    Example:
        >>> round(distance_km(4.8156, 7.0134, 4.9134, 6.2932), 1)
        80.5
    """
    return float(
        _haversine(float(lat1), float(lon1), float(lat2), float(lon2))
    )


def distances_km(
    latitude: float,
    longitude: float,
    latitudes: np.ndarray,
    longitudes: np.ndarray,
) -> np.ndarray:
    """Compute distances from one point to many points in kilometers.

    Element-wise counterpart of :func:`distance_km`; both share the same
    implementation.

    Args:
        latitude: Latitude of the origin in degrees.
        longitude: Longitude of the origin in degrees.
        latitudes: Array of target latitudes in degrees.
        longitudes: Array of target longitudes in degrees.

    Returns:
        Float array of distances, same shape as the target arrays.
    """
    lats = np.asarray(latitudes, dtype=np.float64)
    lons = np.asarray(longitudes, dtype=np.float64)

    if lats.shape != lons.shape:
        raise ValueError(
            f"latitudes and longitudes must have the same shape, "
            f"got {lats.shape} and {lons.shape}"
        )

    return _haversine(float(latitude), float(longitude), lats, lons)


def round_distance(value: float, places: int = 2) -> float:
    """Round a distance half-up to a fixed number of decimal places.

    The value goes through its shortest decimal representation first, so
    ``round_distance(0.125)`` is ``0.13`` rather than the ``0.12`` that
    :func:`round` gives.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


def is_valid_coordinate(latitude: float, longitude: float) -> bool:
    """Check that a latitude/longitude pair is finite and within range."""
    try:
        lat = float(latitude)
        lon = float(longitude)
    except (TypeError, ValueError):
        return False

    if not (math.isfinite(lat) and math.isfinite(lon)):
        return False

    return MIN_LATITUDE <= lat <= MAX_LATITUDE and MIN_LONGITUDE <= lon <= MAX_LONGITUDE


def validate_coordinate(latitude: float, longitude: float) -> None:
    """Raise InvalidCoordinateError if the pair is not a usable coordinate."""
    if not is_valid_coordinate(latitude, longitude):
        logger.debug(
            "Rejected coordinate",
            extra={"latitude": latitude, "longitude": longitude},
        )
        raise InvalidCoordinateError(latitude, longitude)
