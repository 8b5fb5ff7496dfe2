import logging
import threading
from datetime import timedelta

from src.geo_attendance.geo_attendance.common.datetime_utils import now_local
from src.geo_attendance.geo_attendance.session.scheduler import ThreadingScheduler

SCHEDULER_LOGGER = "src.geo_attendance.geo_attendance.session.scheduler"


def _join_timers():
    for thread in threading.enumerate():
        if isinstance(thread, threading.Timer):
            thread.join(timeout=2)


def test_call_at_runs_the_callback():
    fired = threading.Event()

    ThreadingScheduler().call_at(now_local() + timedelta(milliseconds=50), fired.set)

    assert fired.wait(timeout=2)


def test_cancelled_timer_never_fires():
    fired = threading.Event()
    handle = ThreadingScheduler().call_at(now_local() + timedelta(milliseconds=200), fired.set)

    handle.cancel()
    handle.cancel()

    assert not fired.wait(timeout=0.4)


def test_past_time_fires_immediately():
    fired = threading.Event()

    ThreadingScheduler().call_at(now_local() - timedelta(hours=1), fired.set)

    assert fired.wait(timeout=0.5)


def test_callback_errors_are_logged(caplog):
    scheduler = ThreadingScheduler()
    raised = threading.Event()
    fired = threading.Event()

    def broken():
        raised.set()
        raise RuntimeError("boom")

    with caplog.at_level(logging.ERROR, logger=SCHEDULER_LOGGER):
        scheduler.call_at(now_local(), broken)
        assert raised.wait(timeout=2)
        scheduler.call_at(now_local(), fired.set)
        assert fired.wait(timeout=2)
        _join_timers()

    assert "Scheduled callback failed" in caplog.text
    assert "boom" in caplog.text
