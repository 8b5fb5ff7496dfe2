from __future__ import annotations

from datetime import datetime
from typing import Optional

import pytest

from src.geo_attendance.geo_attendance.core.enums import Role
from src.geo_attendance.geo_attendance.employees.model import Employee
from src.geo_attendance.geo_attendance.geo.model import Coordinate, GeofenceZone
from src.geo_attendance.geo_attendance.geo.registry import ZoneRegistry
from src.geo_attendance.geo_attendance.location.model import LocationFix
from src.geo_attendance.geo_attendance.location.provider import ReportedPositionProvider
from src.geo_attendance.geo_attendance.location.watcher import LocationWatcher
from src.geo_attendance.geo_attendance.offices.model import Office
from src.geo_attendance.geo_attendance.session.service import SessionController
from src.geo_attendance.geo_attendance.session.transitions import SessionPolicy

MAIN_OFFICE = GeofenceZone(
    zone_id="1",
    name="Main Office",
    center=Coordinate(latitude=28.470046, longitude=77.493496),
    radius_meters=100,
)
BRANCH_OFFICE = GeofenceZone(
    zone_id="2",
    name="Branch Office",
    center=Coordinate(latitude=28.6236477, longitude=77.3073903),
    radius_meters=100,
)


class MutableClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class FakeTimerHandle:
    def __init__(self, when, callback):
        self.when = when
        self.callback = callback
        self.cancel_count = 0

    @property
    def cancelled(self) -> bool:
        return self.cancel_count > 0

    def cancel(self) -> None:
        self.cancel_count += 1


class FakeScheduler:
    """Keeps timers in a list; tests fire them by hand."""

    def __init__(self):
        self.handles: list[FakeTimerHandle] = []

    def call_at(self, when, callback):
        handle = FakeTimerHandle(when, callback)
        self.handles.append(handle)
        return handle

    @property
    def armed(self) -> list[FakeTimerHandle]:
        return [h for h in self.handles if not h.cancelled]

    def fire_due(self, now: datetime) -> int:
        due = [h for h in self.armed if h.when <= now]
        for h in due:
            h.callback()
        return len(due)


class FakeGate:
    """Identity gate that answers with a preset label or raises a preset error."""

    def __init__(self, label: str = "Pranay", error: Optional[Exception] = None):
        self.label = label
        self.error = error
        self.ready = True
        self.calls = 0

    def load(self) -> None:
        self.ready = True

    def verify(self, image: bytes) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.label


class InMemoryOffices:
    def __init__(self, offices: Optional[list[Office]] = None):
        self._by_id: dict[int, Office] = {o.office_id: o for o in offices or []}
        self._next_id = max(self._by_id, default=0) + 1

    def create(self, *, branch_name, company_name, latitude, longitude, radius_meters):
        office_id = self._next_id
        self._next_id += 1
        self._by_id[office_id] = Office(
            office_id=office_id,
            branch_name=branch_name,
            company_name=company_name,
            latitude=latitude,
            longitude=longitude,
            radius_meters=radius_meters,
            created_at=datetime(2026, 1, 5, 9, 0, 0),
        )
        return office_id

    def get_by_id(self, office_id):
        return self._by_id.get(int(office_id))

    def list_all(self):
        return list(self._by_id.values())

    def list_by_company(self, company_name):
        return [o for o in self._by_id.values() if o.company_name == company_name]

    def exists(self, *, company_name, branch_name):
        return any(o.company_name == company_name and o.branch_name == branch_name for o in self._by_id.values())

    def delete_by_id(self, office_id):
        return self._by_id.pop(int(office_id), None) is not None


class InMemoryEmployees:
    def __init__(self, employees: Optional[list[Employee]] = None):
        self._by_id: dict[int, Employee] = {e.employee_id: e for e in employees or []}
        self._next_id = max(self._by_id, default=0) + 1

    def get_by_id(self, employee_id):
        return self._by_id.get(int(employee_id))

    def get_by_email(self, email):
        return next((e for e in self._by_id.values() if e.email == email), None)

    def create(
        self,
        *,
        first_name,
        last_name,
        email,
        password_hash,
        company_name,
        branch_name,
        profile_pic,
        role=Role.EMPLOYEE,
    ):
        employee_id = self._next_id
        self._next_id += 1
        self._by_id[employee_id] = Employee(
            employee_id=employee_id,
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=password_hash,
            company_name=company_name,
            branch_name=branch_name,
            profile_pic=profile_pic,
            role=role,
        )
        return employee_id

    def list_all(self):
        return list(self._by_id.values())

    def list_by_branch(self, *, company_name, branch_name):
        return [
            e for e in self._by_id.values() if e.company_name == company_name and e.branch_name == branch_name
        ]

    def count_by_branch(self, *, company_name, branch_name):
        return len(self.list_by_branch(company_name=company_name, branch_name=branch_name))

    def delete_by_id(self, employee_id):
        return self._by_id.pop(int(employee_id), None) is not None


class SessionHarness:
    """A controller wired to a reported provider, a fake scheduler and a hand-set clock."""

    def __init__(self, controller, provider, scheduler, clock):
        self.controller = controller
        self.provider = provider
        self.scheduler = scheduler
        self.clock = clock

    @property
    def state(self):
        return self.controller.state

    @property
    def records(self):
        return self.controller.ledger.all()

    def at(self, hour: int, minute: int = 0, second: int = 0) -> "SessionHarness":
        self.clock.now = self.clock.now.replace(hour=hour, minute=minute, second=second)
        return self

    def move_to(self, point: Coordinate) -> None:
        self.provider.report_fix(LocationFix(coordinate=point, observed_at=self.clock.now))
        self.controller.update_location()

    def check_in(self, label: str = "Pranay") -> None:
        self.controller.request_check_in()
        self.controller.complete_verification(label)


@pytest.fixture
def main_office():
    return MAIN_OFFICE


@pytest.fixture
def zones():
    return [MAIN_OFFICE, BRANCH_OFFICE]


@pytest.fixture
def registry(zones):
    return ZoneRegistry(zones)


@pytest.fixture
def clock():
    return MutableClock(datetime(2026, 3, 2, 9, 0, 0))


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def fake_gate():
    return FakeGate


@pytest.fixture
def make_session(registry, clock, scheduler):
    def _make(*, gate=None, policy: Optional[SessionPolicy] = None, zone_registry=None):
        provider = ReportedPositionProvider()
        watcher = LocationWatcher(provider, max_age_seconds=0, clock=clock)
        controller = SessionController(
            registry=zone_registry or registry,
            watcher=watcher,
            gate=gate,
            scheduler=scheduler,
            policy=policy,
            clock=clock,
        )
        return SessionHarness(controller, provider, scheduler, clock)

    return _make


@pytest.fixture
def session(make_session):
    return make_session(gate=FakeGate())


@pytest.fixture
def offices_repo():
    return InMemoryOffices(
        [
            Office(1, "Main Office", "Acme", 28.470046, 77.493496, 100),
            Office(2, "Branch Office", "Acme", 28.6236477, 77.3073903, 100),
        ]
    )


@pytest.fixture
def employees_repo():
    return InMemoryEmployees()
