from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role used for access checks on directory endpoints."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class AttendanceAction(str, Enum):
    CHECK_IN = "check-in"
    CHECK_OUT = "check-out"


class CheckoutAnnotation(str, Enum):
    """Qualifier stored on check-out records."""

    MANUAL = "manual"
    MANUAL_EARLY = "manual-early"
    AUTO_EXIT = "auto-exit"
    AUTO_DEADLINE = "auto-8pm"


class CheckoutTrigger(str, Enum):
    MANUAL = "MANUAL"
    ZONE_EXIT = "ZONE_EXIT"
    DEADLINE = "DEADLINE"


class SessionPhase(str, Enum):
    """Session states derived from SessionState fields."""

    NO_LOCATION = "NO_LOCATION"
    LOCATION_KNOWN_NO_ZONE = "LOCATION_KNOWN_NO_ZONE"
    IN_ZONE_NOT_CHECKED_IN = "IN_ZONE_NOT_CHECKED_IN"
    IN_ZONE_PENDING_VERIFICATION = "IN_ZONE_PENDING_VERIFICATION"
    IN_ZONE_CHECKED_IN = "IN_ZONE_CHECKED_IN"
    CHECKED_IN_OUTSIDE_ANY_ZONE = "CHECKED_IN_OUTSIDE_ANY_ZONE"


class LocationErrorKind(str, Enum):
    PERMISSION_DENIED = "PERMISSION_DENIED"
    POSITION_UNAVAILABLE = "POSITION_UNAVAILABLE"
    TIMEOUT = "TIMEOUT"
    UNSUPPORTED = "UNSUPPORTED"


class VerificationErrorKind(str, Enum):
    NO_MATCH = "NO_MATCH"
    NO_FACE_DETECTED = "NO_FACE_DETECTED"
    MODEL_NOT_READY = "MODEL_NOT_READY"
    NO_REFERENCE_DATA = "NO_REFERENCE_DATA"


class ZoneSource(str, Enum):
    SETTINGS = "settings"
    DATABASE = "database"
