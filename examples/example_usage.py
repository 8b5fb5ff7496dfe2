"""Drive one attendance session without Flask or a database.

A fixed position at the Main Office stands in for the browser, and the face
verification step is completed with a known label instead of a camera frame.
"""

import importlib

from config import get_settings_module

from src.geo_attendance.geo_attendance.container import build_policy
from src.geo_attendance.geo_attendance.geo.model import Coordinate
from src.geo_attendance.geo_attendance.geo.registry import ZoneRegistry
from src.geo_attendance.geo_attendance.ledger.report import SessionReportService
from src.geo_attendance.geo_attendance.location.provider import StaticPositionProvider
from src.geo_attendance.geo_attendance.location.watcher import LocationWatcher
from src.geo_attendance.geo_attendance.session.scheduler import ThreadingScheduler
from src.geo_attendance.geo_attendance.session.service import SessionController


def main():
    settings = importlib.import_module(get_settings_module())
    registry = ZoneRegistry.from_settings(settings.GEOFENCE_ZONES)

    main_office = registry.all_zones()[0]
    watcher = LocationWatcher(StaticPositionProvider(main_office.center), max_age_seconds=5)

    controller = SessionController(
        registry=registry,
        watcher=watcher,
        gate=None,
        scheduler=ThreadingScheduler(),
        policy=build_policy(settings),
    )

    controller.update_location()
    print("phase:", controller.state.phase.value, "| active zone:", controller.state.active_zone.name)

    controller.request_check_in()
    controller.complete_verification("Pranay")
    print("phase:", controller.state.phase.value)

    controller.request_check_out()
    controller.close()

    report = SessionReportService().build(controller.ledger, early_checkouts=controller.state.early_checkouts)
    for row in report.rows:
        print(row)
    print(report.summary)


if __name__ == "__main__":
    main()
