from __future__ import annotations

import math
from dataclasses import dataclass
from math import asin, cos, radians, sin, sqrt
from typing import Any

from nearbite.core.errors import InvalidCoordinate

"""
Geospatial helpers.

We keep a tiny geometry layer here so the resolver and ranker can do distance
calculations without pulling in heavier GIS dependencies.
"""

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""

    lat: float
    lon: float


def haversine_km(a: GeoPoint, b: GeoPoint) -> float:
    """Compute great-circle distance in kilometers between two points."""
    lat1 = radians(a.lat)
    lon1 = radians(a.lon)
    lat2 = radians(b.lat)
    lon2 = radians(b.lon)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # Rounding can push h slightly outside [0, 1] near antipodes and poles.
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_RADIUS_KM * asin(sqrt(h))


def _as_degrees(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidCoordinate(f"{name} must be a number")
    try:
        out = float(value)
    except OverflowError as e:
        raise InvalidCoordinate(f"{name} is out of range") from e
    if not math.isfinite(out):
        raise InvalidCoordinate(f"{name} must be finite")
    return out


def validate_coordinate(lat: Any, lon: Any) -> GeoPoint:
    """Validate a caller-supplied latitude/longitude and return a GeoPoint.

    Raises `InvalidCoordinate` for non-numeric, non-finite or out-of-range values.
    """
    lat_f = _as_degrees(lat, "latitude")
    lon_f = _as_degrees(lon, "longitude")
    if not -90.0 <= lat_f <= 90.0:
        raise InvalidCoordinate(f"latitude must be between -90 and 90, got {lat_f}")
    if not -180.0 <= lon_f <= 180.0:
        raise InvalidCoordinate(f"longitude must be between -180 and 180, got {lon_f}")
    return GeoPoint(lat=lat_f, lon=lon_f)
