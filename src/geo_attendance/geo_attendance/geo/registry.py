from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..common.validators import require_latitude, require_longitude, require_non_empty, require_positive
from ..core.constants import DEFAULT_ZONE_RADIUS_METERS
from ..core.exceptions import ValidationError
from .distance import is_within
from .model import Coordinate, GeofenceZone


class ZoneRegistry:
    """Static, ordered list of geofence zones loaded at startup.

    The list never changes for the lifetime of the registry; zone CRUD lives in the
    office directory and only reaches the registry on the next startup.
    """

    def __init__(self, zones: Iterable[GeofenceZone]):
        zones = tuple(zones)
        seen: set[str] = set()
        for z in zones:
            if z.zone_id in seen:
                raise ValidationError(f"Duplicate zone id {z.zone_id!r}")
            seen.add(z.zone_id)
        self._zones = zones

    def all_zones(self) -> tuple[GeofenceZone, ...]:
        return self._zones

    def zones_containing(self, point: Coordinate) -> tuple[GeofenceZone, ...]:
        if point is None:
            raise ValidationError("A location is required to look up zones")
        return tuple(z for z in self._zones if is_within(point, z))

    def find(self, zone_id: str) -> Optional[GeofenceZone]:
        for z in self._zones:
            if z.zone_id == zone_id:
                return z
        return None

    def __len__(self) -> int:
        return len(self._zones)

    @classmethod
    def from_settings(cls, items: Sequence[dict]) -> "ZoneRegistry":
        """Build from the GEOFENCE_ZONES setting: [{id, name, latitude, longitude, radius}]."""

        zones = []
        for i, item in enumerate(items, start=1):
            zones.append(
                GeofenceZone(
                    zone_id=str(item.get("id", i)),
                    name=require_non_empty(item.get("name", ""), "Zone name"),
                    center=Coordinate(
                        latitude=require_latitude(item.get("latitude")),
                        longitude=require_longitude(item.get("longitude")),
                    ),
                    radius_meters=require_positive(item.get("radius", DEFAULT_ZONE_RADIUS_METERS), "Radius"),
                )
            )
        return cls(zones)

    @classmethod
    def from_offices(cls, offices) -> "ZoneRegistry":
        """Build from office directory entries (branch name becomes the zone name)."""

        return cls(
            GeofenceZone(
                zone_id=str(o.office_id),
                name=o.branch_name,
                center=Coordinate(latitude=o.latitude, longitude=o.longitude),
                radius_meters=float(o.radius_meters),
            )
            for o in offices
        )
