from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .common.datetime_utils import parse_hhmm
from .core.constants import (
    DEFAULT_DAILY_DEADLINE,
    DEFAULT_FACE_MATCH_THRESHOLD,
    DEFAULT_LOCATION_MAX_AGE_SECONDS,
    DEFAULT_LOCATION_TIMEOUT_SECONDS,
)
from .core.enums import ZoneSource
from .database.connection import DatabaseConnection, DBConfig
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import AuthService, EmployeeService
from .geo.registry import ZoneRegistry
from .identity.face_gate import FaceRecognitionGate
from .ledger.report import SessionReportService
from .offices.mysql_office_repository import MySQLOfficeRepository
from .offices.repository import OfficeRepository
from .offices.service import OfficeService
from .session.scheduler import Scheduler, ThreadingScheduler
from .session.service import SessionRegistry
from .session.transitions import SessionPolicy


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    offices_repo: OfficeRepository
    employees_repo: EmployeeRepository

    auth_service: AuthService
    employee_service: EmployeeService
    office_service: OfficeService
    report_service: SessionReportService

    zone_registry: ZoneRegistry
    gate: Optional[FaceRecognitionGate]
    session_registry: SessionRegistry


def build_zone_registry(settings, offices: OfficeRepository) -> ZoneRegistry:
    source = ZoneSource(str(getattr(settings, "ZONE_SOURCE", ZoneSource.SETTINGS.value)).lower())
    if source == ZoneSource.DATABASE:
        return ZoneRegistry.from_offices(offices.list_all())
    return ZoneRegistry.from_settings(getattr(settings, "GEOFENCE_ZONES", []))


def build_policy(settings) -> SessionPolicy:
    deadline = getattr(settings, "DAILY_DEADLINE", None)
    return SessionPolicy(
        deadline=parse_hhmm(deadline) if deadline else DEFAULT_DAILY_DEADLINE,
        checkout_on_location_error=bool(getattr(settings, "CHECKOUT_ON_LOCATION_ERROR", True)),
    )


def build_services(
    settings,
    *,
    offices_repo: OfficeRepository,
    employees_repo: EmployeeRepository,
    conn: Optional[DatabaseConnection] = None,
    gate: Optional[FaceRecognitionGate] = None,
    scheduler: Optional[Scheduler] = None,
) -> Container:
    """Wire services on top of the given repositories."""

    zone_registry = build_zone_registry(settings, offices_repo)
    session_registry = SessionRegistry(
        registry=zone_registry,
        gate=gate,
        scheduler=scheduler or ThreadingScheduler(),
        policy=build_policy(settings),
        location_max_age_seconds=float(
            getattr(settings, "LOCATION_MAX_AGE_SECONDS", DEFAULT_LOCATION_MAX_AGE_SECONDS)
        ),
        location_timeout_seconds=float(
            getattr(settings, "LOCATION_TIMEOUT_SECONDS", DEFAULT_LOCATION_TIMEOUT_SECONDS)
        ),
    )

    return Container(
        conn=conn,
        offices_repo=offices_repo,
        employees_repo=employees_repo,
        auth_service=AuthService(employees_repo),
        employee_service=EmployeeService(employees_repo, offices_repo),
        office_service=OfficeService(offices_repo, employees_repo),
        report_service=SessionReportService(),
        zone_registry=zone_registry,
        gate=gate,
        session_registry=session_registry,
    )


def build_container(*, settings) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))

    reference_dir = getattr(settings, "FACE_REFERENCE_DIR", None)
    gate = None
    if reference_dir:
        gate = FaceRecognitionGate(
            reference_dir,
            threshold=float(getattr(settings, "FACE_MATCH_THRESHOLD", DEFAULT_FACE_MATCH_THRESHOLD)),
        )

    return build_services(
        settings,
        offices_repo=MySQLOfficeRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        conn=conn,
        gate=gate,
    )
