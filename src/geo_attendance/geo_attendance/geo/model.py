from __future__ import annotations

from dataclasses import dataclass

from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class Coordinate:
    """A point on Earth in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class GeofenceZone:
    """Named circular geofence (center + radius in meters)."""

    zone_id: str
    name: str
    center: Coordinate
    radius_meters: float

    def __post_init__(self):
        if not self.radius_meters > 0:
            raise ValidationError(f"Zone {self.name!r} radius must be positive")
