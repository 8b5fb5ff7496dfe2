from __future__ import annotations

from typing import Callable, Optional, Protocol

from ..common.datetime_utils import now_local
from ..core.enums import LocationErrorKind
from ..core.exceptions import LocationError
from ..geo.model import Coordinate
from .model import LocationFix


class PositionProvider(Protocol):
    """Source of device positions (browser, GPS daemon, fixed point...)."""

    def request_position(self, *, timeout_seconds: float, max_age_seconds: float) -> LocationFix:
        raise NotImplementedError


class ReportedPositionProvider:
    """Positions pushed by the client.

    The browser owns the geolocation API, so it posts either a fix or an error code.
    Each report answers exactly one request; a fix is never handed out twice.
    """

    def __init__(self):
        self._fix: Optional[LocationFix] = None
        self._error: Optional[LocationErrorKind] = None

    def report_fix(self, fix: LocationFix) -> None:
        self._fix = fix
        self._error = None

    def report_error(self, kind: LocationErrorKind) -> None:
        self._fix = None
        self._error = kind

    def request_position(self, *, timeout_seconds: float, max_age_seconds: float) -> LocationFix:
        fix, error = self._fix, self._error
        self._fix, self._error = None, None
        if error is not None:
            raise LocationError(error)
        if fix is None:
            raise LocationError(LocationErrorKind.POSITION_UNAVAILABLE)
        return fix


class StaticPositionProvider:
    """Always answers with the same coordinate, observed now."""

    def __init__(self, coordinate: Coordinate, *, clock: Callable[[], object] = now_local):
        self._coordinate = coordinate
        self._clock = clock

    def request_position(self, *, timeout_seconds: float, max_age_seconds: float) -> LocationFix:
        return LocationFix(coordinate=self._coordinate, observed_at=self._clock())
