from __future__ import annotations

from datetime import datetime, time

from ...core.enums import CheckoutAnnotation
from .base import CheckoutDecision, CheckoutStrategy, is_before_deadline


class ZoneExitStrategy(CheckoutStrategy):
    """Automatic check-out after leaving the check-in zone (or losing the location)."""

    def decide_checkout(self, *, now: datetime, deadline: time) -> CheckoutDecision:
        return CheckoutDecision(
            annotation=CheckoutAnnotation.AUTO_EXIT,
            early=is_before_deadline(now, deadline),
        )
