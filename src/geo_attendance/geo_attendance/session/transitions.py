"""The single transition function of the attendance session.

Every change to ``SessionState`` goes through ``transition``. It never mutates its
input and never raises for a request the current state does not allow; such requests
come back with ``ignored`` holding a ``PreconditionViolation`` and the state unchanged.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from datetime import datetime, time
from typing import Callable, Optional

from ..core.constants import DEFAULT_DAILY_DEADLINE
from ..core.enums import AttendanceAction, CheckoutTrigger
from ..core.exceptions import PreconditionViolation
from ..geo.distance import is_within
from ..geo.registry import ZoneRegistry
from ..ledger.model import AttendanceRecord
from .events import (
    ArmDeadline,
    CheckInRequested,
    CheckOutRequested,
    DeadlineReached,
    DisarmDeadline,
    LocationFailed,
    LocationUpdated,
    SessionEffect,
    SessionEvent,
    VerificationCancelled,
    VerificationFailed,
    VerificationSucceeded,
    ZoneSelected,
)
from .factory import CheckoutStrategyFactory
from .state import CheckedIn, Idle, PendingVerification, SessionState


@dataclass(frozen=True)
class SessionPolicy:
    deadline: time = DEFAULT_DAILY_DEADLINE
    # Treat a failed location request like leaving the zone while checked in.
    checkout_on_location_error: bool = True


@dataclass(frozen=True)
class Transition:
    state: SessionState
    records: tuple[AttendanceRecord, ...] = ()
    effects: tuple[SessionEffect, ...] = ()
    ignored: Optional[PreconditionViolation] = None


@dataclass
class _Context:
    now: datetime
    registry: ZoneRegistry
    policy: SessionPolicy
    strategies: CheckoutStrategyFactory
    new_id: Callable[[], str]


def transition(
    state: SessionState,
    event: SessionEvent,
    *,
    now: datetime,
    registry: ZoneRegistry,
    policy: Optional[SessionPolicy] = None,
    strategy_factory: Optional[CheckoutStrategyFactory] = None,
    new_id: Optional[Callable[[], str]] = None,
) -> Transition:
    ctx = _Context(
        now=now,
        registry=registry,
        policy=policy or SessionPolicy(),
        strategies=strategy_factory or CheckoutStrategyFactory(),
        new_id=new_id or _new_id,
    )

    handler = _HANDLERS.get(type(event))
    if handler is None:
        raise TypeError(f"Unsupported session event: {event!r}")
    return handler(state, event, ctx)


def _new_id() -> str:
    return uuid.uuid4().hex


def _ignore(state: SessionState, reason: str) -> Transition:
    return Transition(state=state, ignored=PreconditionViolation(reason))


def _on_location_updated(state: SessionState, event: LocationUpdated, ctx: _Context) -> Transition:
    point = event.fix.coordinate
    nearby = ctx.registry.zones_containing(point)
    nearby_ids = {z.zone_id for z in nearby}

    # Keep the previous zone while it is still nearby, even if another one comes first.
    if state.active_zone is not None and state.active_zone.zone_id in nearby_ids:
        active = next(z for z in nearby if z.zone_id == state.active_zone.zone_id)
    elif nearby:
        active = nearby[0]
    else:
        active = None

    updated = replace(
        state,
        current_location=point,
        located_at=event.fix.observed_at,
        nearby_zones=nearby,
        active_zone=active,
        location_error=None,
    )

    if updated.checked_in and not is_within(point, updated.check_in_zone):
        return _check_out(updated, CheckoutTrigger.ZONE_EXIT, ctx)
    return Transition(state=updated)


def _on_location_failed(state: SessionState, event: LocationFailed, ctx: _Context) -> Transition:
    updated = replace(state, location_error=event.kind)
    if updated.checked_in and ctx.policy.checkout_on_location_error:
        return _check_out(updated, CheckoutTrigger.ZONE_EXIT, ctx)
    return Transition(state=updated)


def _on_zone_selected(state: SessionState, event: ZoneSelected, ctx: _Context) -> Transition:
    if state.pending is not None:
        return _ignore(state, "zone cannot change while verification is pending")

    zone = next((z for z in state.nearby_zones if z.zone_id == event.zone_id), None)
    if zone is None:
        return _ignore(state, f"zone {event.zone_id!r} is not nearby")
    return Transition(state=replace(state, active_zone=zone))


def _on_check_in_requested(state: SessionState, event: CheckInRequested, ctx: _Context) -> Transition:
    if not isinstance(state.attendance, Idle):
        return _ignore(state, "check-in already pending or completed")
    if state.active_zone is None:
        return _ignore(state, "no active zone")
    if state.location_error is not None:
        return _ignore(state, "location unavailable")

    pending = PendingVerification(zone=state.active_zone, attempt_id=ctx.new_id())
    return Transition(state=replace(state, attendance=pending))


def _on_verification_succeeded(state: SessionState, event: VerificationSucceeded, ctx: _Context) -> Transition:
    pending = state.pending
    if pending is None:
        return _ignore(state, "no verification pending")
    if event.attempt_id is not None and event.attempt_id != pending.attempt_id:
        return _ignore(state, "stale verification result")

    zone = state.active_zone
    if zone is None:
        # The zone was lost while waiting; the result is discarded.
        return Transition(
            state=replace(state, attendance=Idle()),
            ignored=PreconditionViolation("active zone lost during verification"),
        )
    if state.location_error is not None:
        # Same precondition as the check-in request: no verified position, no check-in.
        return Transition(
            state=replace(state, attendance=Idle()),
            ignored=PreconditionViolation("location unavailable during verification"),
        )

    session_id = ctx.new_id()
    record = AttendanceRecord(
        record_id=ctx.new_id(),
        timestamp=ctx.now,
        action=AttendanceAction.CHECK_IN,
        zone_name=zone.name,
        annotation=event.label,
    )
    checked_in = CheckedIn(zone=zone, since=ctx.now, session_id=session_id)
    deadline_at = datetime.combine(ctx.now.date(), ctx.policy.deadline)
    return Transition(
        state=replace(state, attendance=checked_in),
        records=(record,),
        effects=(ArmDeadline(session_id=session_id, at=deadline_at),),
    )


def _on_verification_failed(state: SessionState, event: VerificationFailed, ctx: _Context) -> Transition:
    pending = state.pending
    if pending is None:
        return _ignore(state, "no verification pending")
    if event.attempt_id is not None and event.attempt_id != pending.attempt_id:
        return _ignore(state, "stale verification result")
    return Transition(state=state)


def _on_verification_cancelled(state: SessionState, event: VerificationCancelled, ctx: _Context) -> Transition:
    if state.pending is None:
        return _ignore(state, "no verification pending")
    return Transition(state=replace(state, attendance=Idle()))


def _on_check_out_requested(state: SessionState, event: CheckOutRequested, ctx: _Context) -> Transition:
    if not state.checked_in:
        return _ignore(state, "not checked in")
    return _check_out(state, CheckoutTrigger.MANUAL, ctx)


def _on_deadline_reached(state: SessionState, event: DeadlineReached, ctx: _Context) -> Transition:
    if not isinstance(state.attendance, CheckedIn):
        return _ignore(state, "deadline fired while not checked in")
    if state.attendance.session_id != event.session_id:
        return _ignore(state, "deadline belongs to an earlier check-in")
    return _check_out(state, CheckoutTrigger.DEADLINE, ctx)


def _check_out(state: SessionState, trigger: CheckoutTrigger, ctx: _Context) -> Transition:
    zone = state.check_in_zone
    strategy = ctx.strategies.for_checkout(trigger=trigger, now=ctx.now, deadline=ctx.policy.deadline)
    decision = strategy.decide_checkout(now=ctx.now, deadline=ctx.policy.deadline)

    record = AttendanceRecord(
        record_id=ctx.new_id(),
        timestamp=ctx.now,
        action=AttendanceAction.CHECK_OUT,
        zone_name=zone.name,
        annotation=decision.annotation.value,
    )
    updated = replace(
        state,
        attendance=Idle(),
        early_checkouts=state.early_checkouts + (1 if decision.early else 0),
    )
    return Transition(state=updated, records=(record,), effects=(DisarmDeadline(),))


_HANDLERS = {
    LocationUpdated: _on_location_updated,
    LocationFailed: _on_location_failed,
    ZoneSelected: _on_zone_selected,
    CheckInRequested: _on_check_in_requested,
    VerificationSucceeded: _on_verification_succeeded,
    VerificationFailed: _on_verification_failed,
    VerificationCancelled: _on_verification_cancelled,
    CheckOutRequested: _on_check_out_requested,
    DeadlineReached: _on_deadline_reached,
}
