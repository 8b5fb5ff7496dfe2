from __future__ import annotations

from math import atan2, cos, radians, sin, sqrt
from typing import Optional

from ..core.constants import EARTH_RADIUS_METERS
from .model import Coordinate, GeofenceZone


def distance_meters(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance between two coordinates (haversine)."""
    phi1, phi2 = radians(a.latitude), radians(b.latitude)
    d_phi = radians(b.latitude - a.latitude)
    d_lambda = radians(b.longitude - a.longitude)

    h = sin(d_phi / 2) ** 2 + cos(phi1) * cos(phi2) * sin(d_lambda / 2) ** 2
    return EARTH_RADIUS_METERS * 2 * atan2(sqrt(h), sqrt(1 - h))


def is_within(point: Optional[Coordinate], zone: GeofenceZone) -> bool:
    if point is None:
        return False
    return distance_meters(point, zone.center) <= zone.radius_meters
