from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_LOCATION_MAX_AGE_SECONDS, DEFAULT_LOCATION_TIMEOUT_SECONDS
from ..core.enums import LocationErrorKind
from ..core.exceptions import LocationError
from .model import LocationFix
from .provider import PositionProvider

logger = logging.getLogger(__name__)


class LocationWatcher:
    """Wraps a position provider and enforces the staleness policy.

    A fix older than ``max_age_seconds`` is never handed out; with the default tolerance
    of zero every call must be answered by a fix observed at or after the request.
    No retries are made here, the caller decides when to ask again.
    """

    def __init__(
        self,
        provider: Optional[PositionProvider],
        *,
        max_age_seconds: float = DEFAULT_LOCATION_MAX_AGE_SECONDS,
        timeout_seconds: float = DEFAULT_LOCATION_TIMEOUT_SECONDS,
        clock: Callable[[], datetime] = now_local,
    ):
        if max_age_seconds < 0:
            raise ValueError("max_age_seconds must not be negative")
        self._provider = provider
        self._max_age_seconds = float(max_age_seconds)
        self._timeout_seconds = float(timeout_seconds)
        self._clock = clock
        self._last_fix: Optional[LocationFix] = None

    @property
    def last_fix(self) -> Optional[LocationFix]:
        return self._last_fix

    def current_location(self) -> LocationFix:
        if self._provider is None:
            raise LocationError(LocationErrorKind.UNSUPPORTED)

        requested_at = self._clock()
        fix = self._provider.request_position(
            timeout_seconds=self._timeout_seconds,
            max_age_seconds=self._max_age_seconds,
        )

        age = (requested_at - fix.observed_at).total_seconds()
        if age > self._max_age_seconds:
            logger.warning("Rejected stale location fix (age=%.1fs, tolerance=%.1fs)", age, self._max_age_seconds)
            raise LocationError(
                LocationErrorKind.POSITION_UNAVAILABLE,
                "Location fix is too old. Please refresh your location.",
            )

        self._last_fix = fix
        return fix
