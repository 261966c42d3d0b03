"""
NearSky Geographic Math
Great-circle distance and query-box helpers.
"""

from dataclasses import dataclass
from math import radians, sin, cos, sqrt, atan2
from typing import Tuple

EARTH_RADIUS_KM = 6371.0  # Mean Earth radius


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in signed decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class BoundingBox:
    """Rectangular latitude/longitude region used to scope provider queries."""

    lat_min: float
    lon_min: float
    lat_max: float
    lon_max: float

    def corners(self) -> Tuple[GeoPoint, GeoPoint, GeoPoint, GeoPoint]:
        """Return the corners as (south-west, south-east, north-east, north-west)."""
        return (
            GeoPoint(self.lat_min, self.lon_min),
            GeoPoint(self.lat_min, self.lon_max),
            GeoPoint(self.lat_max, self.lon_max),
            GeoPoint(self.lat_max, self.lon_min),
        )

    def as_tuple(self) -> Tuple[float, float, float, float]:
        """Return (lat_min, lon_min, lat_max, lon_max)."""
        return (self.lat_min, self.lon_min, self.lat_max, self.lon_max)


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the great circle distance between two points on Earth.

    Args:
        lat1: Latitude of first point in degrees
        lon1: Longitude of first point in degrees
        lat2: Latitude of second point in degrees
        lon2: Longitude of second point in degrees

    Returns:
        Distance in kilometers

    Example:
        >>> round(haversine_distance(42.3601, -71.0589, 40.7128, -74.0060))
        306
    """
    # Convert to radians
    lat1, lon1, lat2, lon2 = map(radians, [lat1, lon1, lat2, lon2])

    # Haversine formula
    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    c = 2 * atan2(sqrt(a), sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def distance_km(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two GeoPoints in kilometers."""
    return haversine_distance(a.latitude, a.longitude, b.latitude, b.longitude)


def bounding_box(center: GeoPoint, lat_delta: float, lon_delta: float) -> BoundingBox:
    """
    Calculate the query box around a center point.

    The box is not clamped at the poles or the antimeridian; callers near
    either edge receive coordinates outside [-90, 90] / [-180, 180].

    Args:
        center: Center of the box
        lat_delta: Half-height in degrees
        lon_delta: Half-width in degrees

    Returns:
        BoundingBox spanning center +/- the deltas

    Example:
        >>> bounding_box(GeoPoint(50.0, 8.0), 0.5, 0.5).as_tuple()
        (49.5, 7.5, 50.5, 8.5)
    """
    return BoundingBox(
        lat_min=center.latitude - lat_delta,
        lon_min=center.longitude - lon_delta,
        lat_max=center.latitude + lat_delta,
        lon_max=center.longitude + lon_delta,
    )


def validate_coordinates(lat: float, lon: float) -> bool:
    """
    Validate latitude and longitude coordinates.

    Example:
        >>> validate_coordinates(49.3508, 8.1364)
        True
        >>> validate_coordinates(100, 200)
        False
    """
    return -90 <= lat <= 90 and -180 <= lon <= 180
