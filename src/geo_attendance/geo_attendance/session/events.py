"""Inputs and side effects of the session state machine."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from ..core.enums import LocationErrorKind, VerificationErrorKind
from ..location.model import LocationFix


@dataclass(frozen=True)
class LocationUpdated:
    fix: LocationFix


@dataclass(frozen=True)
class LocationFailed:
    kind: LocationErrorKind


@dataclass(frozen=True)
class ZoneSelected:
    zone_id: str


@dataclass(frozen=True)
class CheckInRequested:
    pass


@dataclass(frozen=True)
class VerificationSucceeded:
    label: str
    attempt_id: Optional[str] = None


@dataclass(frozen=True)
class VerificationFailed:
    kind: VerificationErrorKind
    attempt_id: Optional[str] = None
    message: Optional[str] = None


@dataclass(frozen=True)
class VerificationCancelled:
    pass


@dataclass(frozen=True)
class CheckOutRequested:
    pass


@dataclass(frozen=True)
class DeadlineReached:
    session_id: str


SessionEvent = Union[
    LocationUpdated,
    LocationFailed,
    ZoneSelected,
    CheckInRequested,
    VerificationSucceeded,
    VerificationFailed,
    VerificationCancelled,
    CheckOutRequested,
    DeadlineReached,
]


# Effects returned by a transition; the controller carries them out.


@dataclass(frozen=True)
class ArmDeadline:
    session_id: str
    at: datetime


@dataclass(frozen=True)
class DisarmDeadline:
    pass


SessionEffect = Union[ArmDeadline, DisarmDeadline]
