from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable, Protocol

from ..common.datetime_utils import now_local

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None:
        """Cancel the pending call. Safe to call any number of times."""
        raise NotImplementedError


class Scheduler(Protocol):
    def call_at(self, when: datetime, callback: Callable[[], None]) -> TimerHandle:
        raise NotImplementedError


class _ThreadTimerHandle:
    def __init__(self, timer: threading.Timer):
        self._timer = timer

    def cancel(self) -> None:
        self._timer.cancel()


class ThreadingScheduler:
    """Runs callbacks on daemon ``threading.Timer`` threads.

    Used by the Flask host, where no event loop owns the session.
    """

    def __init__(self, *, clock: Callable[[], datetime] = now_local):
        self._clock = clock

    def call_at(self, when: datetime, callback: Callable[[], None]) -> TimerHandle:
        delay = max(0.0, (when - self._clock()).total_seconds())
        timer = threading.Timer(delay, self._run, args=(callback,))
        timer.daemon = True
        timer.start()
        logger.debug("Timer armed for %s (in %.0fs)", when.isoformat(timespec="seconds"), delay)
        return _ThreadTimerHandle(timer)

    @staticmethod
    def _run(callback: Callable[[], None]) -> None:
        try:
            callback()
        except Exception:
            logger.exception("Scheduled callback failed")
