from datetime import datetime, timedelta

import pytest

from src.geo_attendance.geo_attendance.core.enums import LocationErrorKind
from src.geo_attendance.geo_attendance.core.exceptions import LocationError
from src.geo_attendance.geo_attendance.geo.model import Coordinate
from src.geo_attendance.geo_attendance.location.model import LocationFix
from src.geo_attendance.geo_attendance.location.provider import ReportedPositionProvider, StaticPositionProvider
from src.geo_attendance.geo_attendance.location.watcher import LocationWatcher

NOW = datetime(2026, 3, 2, 9, 0, 0)
POINT = Coordinate(latitude=28.470046, longitude=77.493496)


def _clock():
    return NOW


def test_missing_provider_is_unsupported():
    watcher = LocationWatcher(None, clock=_clock)

    with pytest.raises(LocationError) as exc:
        watcher.current_location()
    assert exc.value.kind == LocationErrorKind.UNSUPPORTED


def test_fresh_fix_is_returned_and_remembered():
    provider = ReportedPositionProvider()
    provider.report_fix(LocationFix(coordinate=POINT, observed_at=NOW))
    watcher = LocationWatcher(provider, clock=_clock)

    fix = watcher.current_location()

    assert fix.coordinate == POINT
    assert watcher.last_fix is fix


def test_stale_fix_is_rejected():
    provider = ReportedPositionProvider()
    provider.report_fix(LocationFix(coordinate=POINT, observed_at=NOW - timedelta(seconds=31)))
    watcher = LocationWatcher(provider, max_age_seconds=30, clock=_clock)

    with pytest.raises(LocationError) as exc:
        watcher.current_location()
    assert exc.value.kind == LocationErrorKind.POSITION_UNAVAILABLE
    assert watcher.last_fix is None


def test_fix_within_tolerance_is_accepted():
    provider = ReportedPositionProvider()
    provider.report_fix(LocationFix(coordinate=POINT, observed_at=NOW - timedelta(seconds=30)))
    watcher = LocationWatcher(provider, max_age_seconds=30, clock=_clock)

    assert watcher.current_location().coordinate == POINT


def test_reported_error_is_raised_with_its_kind():
    provider = ReportedPositionProvider()
    provider.report_error(LocationErrorKind.PERMISSION_DENIED)
    watcher = LocationWatcher(provider, clock=_clock)

    with pytest.raises(LocationError) as exc:
        watcher.current_location()
    assert exc.value.kind == LocationErrorKind.PERMISSION_DENIED
    assert "denied" in str(exc.value)


def test_a_reported_fix_answers_only_one_request():
    provider = ReportedPositionProvider()
    provider.report_fix(LocationFix(coordinate=POINT, observed_at=NOW))
    watcher = LocationWatcher(provider, clock=_clock)

    watcher.current_location()
    with pytest.raises(LocationError) as exc:
        watcher.current_location()
    assert exc.value.kind == LocationErrorKind.POSITION_UNAVAILABLE


def test_a_new_fix_replaces_a_reported_error():
    provider = ReportedPositionProvider()
    provider.report_error(LocationErrorKind.TIMEOUT)
    provider.report_fix(LocationFix(coordinate=POINT, observed_at=NOW))

    assert LocationWatcher(provider, clock=_clock).current_location().coordinate == POINT


def test_static_provider_is_always_fresh():
    watcher = LocationWatcher(StaticPositionProvider(POINT, clock=_clock), clock=_clock)

    assert watcher.current_location().observed_at == NOW


def test_negative_tolerance_is_rejected():
    with pytest.raises(ValueError):
        LocationWatcher(ReportedPositionProvider(), max_age_seconds=-1)
