from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from functools import partial
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..core.constants import UNKNOWN_FACE_LABEL
from ..core.enums import VerificationErrorKind
from ..core.exceptions import LocationError, VerificationError
from ..geo.registry import ZoneRegistry
from ..identity.gate import IdentityGate
from ..ledger.ledger import AttendanceLedger
from ..location.provider import ReportedPositionProvider
from ..location.watcher import LocationWatcher
from .events import (
    ArmDeadline,
    CheckInRequested,
    CheckOutRequested,
    DeadlineReached,
    DisarmDeadline,
    LocationFailed,
    LocationUpdated,
    SessionEvent,
    VerificationCancelled,
    VerificationFailed,
    VerificationSucceeded,
    ZoneSelected,
)
from .factory import CheckoutStrategyFactory
from .scheduler import Scheduler, TimerHandle
from .state import SessionState
from .transitions import SessionPolicy, transition

logger = logging.getLogger(__name__)


class SessionController:
    """Runs one attendance session.

    Events are handled one at a time in arrival order. An event dispatched while
    another is being handled (a deadline that is already due, a timer thread, a
    second HTTP request) is queued and handled after the current one completes.
    The location request, the face verification and the deadline timer are the
    only places where the session waits on the outside world.
    """

    def __init__(
        self,
        *,
        registry: ZoneRegistry,
        watcher: LocationWatcher,
        gate: Optional[IdentityGate],
        scheduler: Scheduler,
        ledger: Optional[AttendanceLedger] = None,
        policy: Optional[SessionPolicy] = None,
        strategy_factory: Optional[CheckoutStrategyFactory] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._registry = registry
        self._watcher = watcher
        self._gate = gate
        self._scheduler = scheduler
        self._ledger = ledger if ledger is not None else AttendanceLedger()
        self._policy = policy or SessionPolicy()
        self._strategies = strategy_factory or CheckoutStrategyFactory()
        self._clock = clock

        self._state = SessionState()
        self._lock = threading.RLock()
        self._queue: deque[SessionEvent] = deque()
        self._dispatching = False
        self._timer: Optional[TimerHandle] = None
        self.last_verification_error: Optional[VerificationError] = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def ledger(self) -> AttendanceLedger:
        return self._ledger

    @property
    def policy(self) -> SessionPolicy:
        return self._policy

    # ----- event loop -----

    def dispatch(self, event: SessionEvent) -> None:
        with self._lock:
            self._queue.append(event)
            if self._dispatching:
                return
            self._dispatching = True
            try:
                while self._queue:
                    self._handle(self._queue.popleft())
            finally:
                self._dispatching = False
                self._queue.clear()

    def _handle(self, event: SessionEvent) -> None:
        now = self._clock()
        result = transition(
            self._state,
            event,
            now=now,
            registry=self._registry,
            policy=self._policy,
            strategy_factory=self._strategies,
        )
        self._state = result.state

        if result.ignored:
            logger.debug("%s ignored: %s", type(event).__name__, result.ignored)

        if isinstance(event, VerificationFailed) and not result.ignored:
            self.last_verification_error = VerificationError(event.kind, event.message)
            logger.warning("Face verification failed: %s", self.last_verification_error)
        elif isinstance(event, (CheckInRequested, VerificationSucceeded, VerificationCancelled)):
            self.last_verification_error = None

        for record in result.records:
            self._ledger.append(record)
            logger.info(
                "%s at %s (%s)",
                record.action.value,
                record.zone_name,
                record.annotation or "-",
            )

        for effect in result.effects:
            if isinstance(effect, ArmDeadline):
                self._arm_deadline(effect, now)
            elif isinstance(effect, DisarmDeadline):
                self._disarm_deadline()

    def _arm_deadline(self, effect: ArmDeadline, now: datetime) -> None:
        self._disarm_deadline()
        if effect.at <= now:
            self._queue.append(DeadlineReached(session_id=effect.session_id))
            return
        self._timer = self._scheduler.call_at(effect.at, partial(self.on_deadline, effect.session_id))

    def _disarm_deadline(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    # ----- public API -----

    def update_location(self) -> None:
        try:
            fix = self._watcher.current_location()
        except LocationError as e:
            logger.warning("Location request failed: %s", e)
            self.dispatch(LocationFailed(kind=e.kind))
            return
        self.dispatch(LocationUpdated(fix=fix))

    def select_zone(self, zone_id: str) -> None:
        self.dispatch(ZoneSelected(zone_id=str(zone_id)))

    def request_check_in(self) -> None:
        self.dispatch(CheckInRequested())

    def submit_image(self, image: bytes) -> None:
        pending = self._state.pending
        if pending is None:
            logger.debug("Image submitted without a pending verification")
            return

        if self._gate is None:
            self.dispatch(VerificationFailed(kind=VerificationErrorKind.MODEL_NOT_READY, attempt_id=pending.attempt_id))
            return

        try:
            label = self._gate.verify(image)
        except VerificationError as e:
            self.dispatch(VerificationFailed(kind=e.kind, attempt_id=pending.attempt_id, message=str(e)))
            return

        if label == UNKNOWN_FACE_LABEL:
            self.dispatch(VerificationFailed(kind=VerificationErrorKind.NO_MATCH, attempt_id=pending.attempt_id))
        else:
            self.dispatch(VerificationSucceeded(label=label, attempt_id=pending.attempt_id))

    def complete_verification(self, label: str) -> None:
        """Accept a label from a gate that runs outside this process.

        For when the client matches the face itself (as the browser face-api build does) and
        posts only the label; ``submit_image`` is the path for the in-process gate.
        """
        with self._lock:
            pending = self._state.pending
            self.dispatch(VerificationSucceeded(label=label, attempt_id=pending.attempt_id if pending else None))

    def cancel_verification(self) -> None:
        self.dispatch(VerificationCancelled())

    def request_check_out(self) -> None:
        self.dispatch(CheckOutRequested())

    def on_deadline(self, session_id: str) -> None:
        self.dispatch(DeadlineReached(session_id=session_id))

    def close(self) -> None:
        with self._lock:
            self._disarm_deadline()

    # ----- presentation -----

    def available_actions(self) -> dict:
        with self._lock:
            s = self._state
            pending = s.pending is not None
            return {
                "check_in": s.active_zone is not None and not s.checked_in and not pending and s.location_error is None,
                "check_out": s.checked_in,
                "submit_image": pending,
                "cancel_verification": pending,
                "select_zone": bool(s.nearby_zones) and not pending,
            }

    def snapshot(self) -> dict:
        # Taken under the lock so a timer-thread dispatch never splits state and records.
        with self._lock:
            s = self._state
            return {
                "phase": s.phase.value,
                "location": _coord(s.current_location),
                "locatedAt": s.located_at.isoformat(timespec="seconds") if s.located_at else None,
                "locationError": str(LocationError(s.location_error)) if s.location_error else None,
                "nearbyZones": [_zone(z) for z in s.nearby_zones],
                "activeZone": _zone(s.active_zone),
                "checkedIn": s.checked_in,
                "checkInZone": _zone(s.check_in_zone),
                "earlyCheckouts": s.early_checkouts,
                "verificationError": str(self.last_verification_error) if self.last_verification_error else None,
                "actions": self.available_actions(),
                "records": [r.to_dict() for r in self._ledger.all()],
            }


def _coord(c) -> Optional[dict]:
    if c is None:
        return None
    return {"lat": c.latitude, "lng": c.longitude}


def _zone(z) -> Optional[dict]:
    if z is None:
        return None
    return {"id": z.zone_id, "name": z.name, "center": _coord(z.center), "radius": z.radius_meters}


@dataclass(frozen=True)
class SessionHandle:
    controller: SessionController
    provider: ReportedPositionProvider


class SessionRegistry:
    """One session per logged-in employee, created on first use."""

    def __init__(
        self,
        *,
        registry: ZoneRegistry,
        gate: Optional[IdentityGate],
        scheduler: Scheduler,
        policy: Optional[SessionPolicy] = None,
        location_max_age_seconds: float = 0.0,
        location_timeout_seconds: float = 10.0,
        clock: Callable[[], datetime] = now_local,
    ):
        self._registry = registry
        self._gate = gate
        self._scheduler = scheduler
        self._policy = policy or SessionPolicy()
        self._max_age = location_max_age_seconds
        self._timeout = location_timeout_seconds
        self._clock = clock
        self._sessions: dict[int, SessionHandle] = {}
        self._lock = threading.Lock()

    @property
    def zones(self) -> ZoneRegistry:
        return self._registry

    def get(self, employee_id: int) -> SessionHandle:
        with self._lock:
            handle = self._sessions.get(int(employee_id))
            if handle is None:
                handle = self._create()
                self._sessions[int(employee_id)] = handle
            return handle

    def close(self, employee_id: int) -> None:
        with self._lock:
            handle = self._sessions.pop(int(employee_id), None)
        if handle is not None:
            handle.controller.close()

    def _create(self) -> SessionHandle:
        provider = ReportedPositionProvider()
        watcher = LocationWatcher(
            provider,
            max_age_seconds=self._max_age,
            timeout_seconds=self._timeout,
            clock=self._clock,
        )
        controller = SessionController(
            registry=self._registry,
            watcher=watcher,
            gate=self._gate,
            scheduler=self._scheduler,
            policy=self._policy,
            clock=self._clock,
        )
        return SessionHandle(controller=controller, provider=provider)
