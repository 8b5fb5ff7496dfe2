from __future__ import annotations

from .enums import LocationErrorKind, VerificationErrorKind


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a requested office or employee does not exist."""


class ConflictError(DomainError):
    """Raised when a unique value (e.g. email) is already taken."""


class PreconditionViolation(DomainError):
    """An action was requested in a session state that does not allow it."""


class LocationError(DomainError):
    """The device position could not be obtained."""

    _messages = {
        LocationErrorKind.PERMISSION_DENIED: "Location access denied. Please enable location services.",
        LocationErrorKind.POSITION_UNAVAILABLE: "Location information is unavailable.",
        LocationErrorKind.TIMEOUT: "Location request timed out.",
        LocationErrorKind.UNSUPPORTED: "Geolocation is not supported by this device.",
    }

    def __init__(self, kind: LocationErrorKind, message: str | None = None):
        self.kind = kind
        super().__init__(message or self._messages.get(kind, "Failed to get location"))


class VerificationError(DomainError):
    """The identity gate could not produce a label for the image."""

    _messages = {
        VerificationErrorKind.NO_MATCH: "Face not recognized.",
        VerificationErrorKind.NO_FACE_DETECTED: "No face detected in the image.",
        VerificationErrorKind.MODEL_NOT_READY: "Face recognition models are not loaded yet.",
        VerificationErrorKind.NO_REFERENCE_DATA: "No reference faces are registered.",
    }

    def __init__(self, kind: VerificationErrorKind, message: str | None = None):
        self.kind = kind
        super().__init__(message or self._messages.get(kind, "Face verification failed"))
