from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from ..core.enums import LocationErrorKind, SessionPhase
from ..geo.distance import is_within
from ..geo.model import Coordinate, GeofenceZone


@dataclass(frozen=True)
class Idle:
    """Not checked in and not waiting for face verification."""


@dataclass(frozen=True)
class PendingVerification:
    zone: GeofenceZone
    attempt_id: str


@dataclass(frozen=True)
class CheckedIn:
    zone: GeofenceZone
    since: datetime
    session_id: str


Attendance = Union[Idle, PendingVerification, CheckedIn]


@dataclass(frozen=True)
class SessionState:
    """Snapshot of one attendance session.

    Instances are never mutated; every transition produces a new one. The check-in
    zone lives inside ``CheckedIn`` so it cannot exist without the checked-in flag.
    """

    current_location: Optional[Coordinate] = None
    located_at: Optional[datetime] = None
    nearby_zones: tuple[GeofenceZone, ...] = ()
    active_zone: Optional[GeofenceZone] = None
    attendance: Attendance = Idle()
    location_error: Optional[LocationErrorKind] = None
    early_checkouts: int = 0

    @property
    def checked_in(self) -> bool:
        return isinstance(self.attendance, CheckedIn)

    @property
    def check_in_zone(self) -> Optional[GeofenceZone]:
        if isinstance(self.attendance, CheckedIn):
            return self.attendance.zone
        return None

    @property
    def pending(self) -> Optional[PendingVerification]:
        if isinstance(self.attendance, PendingVerification):
            return self.attendance
        return None

    @property
    def phase(self) -> SessionPhase:
        if self.pending is not None:
            return SessionPhase.IN_ZONE_PENDING_VERIFICATION
        if self.checked_in:
            if is_within(self.current_location, self.check_in_zone):
                return SessionPhase.IN_ZONE_CHECKED_IN
            return SessionPhase.CHECKED_IN_OUTSIDE_ANY_ZONE
        if self.current_location is None:
            return SessionPhase.NO_LOCATION
        if self.active_zone is None:
            return SessionPhase.LOCATION_KNOWN_NO_ZONE
        return SessionPhase.IN_ZONE_NOT_CHECKED_IN
