from __future__ import annotations

from datetime import datetime, time

from ...core.enums import CheckoutAnnotation
from .base import CheckoutDecision, CheckoutStrategy


class ManualCheckoutStrategy(CheckoutStrategy):
    """User pressed check-out at or after the deadline."""

    def decide_checkout(self, *, now: datetime, deadline: time) -> CheckoutDecision:
        return CheckoutDecision(annotation=CheckoutAnnotation.MANUAL)


class EarlyManualCheckoutStrategy(CheckoutStrategy):
    """User pressed check-out before the deadline."""

    def decide_checkout(self, *, now: datetime, deadline: time) -> CheckoutDecision:
        return CheckoutDecision(annotation=CheckoutAnnotation.MANUAL_EARLY, early=True)
