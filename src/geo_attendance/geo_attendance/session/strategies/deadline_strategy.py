from __future__ import annotations

from datetime import datetime, time

from ...core.enums import CheckoutAnnotation
from .base import CheckoutDecision, CheckoutStrategy


class DeadlineCheckoutStrategy(CheckoutStrategy):
    """Daily deadline check-out. Never counted as early."""

    def decide_checkout(self, *, now: datetime, deadline: time) -> CheckoutDecision:
        return CheckoutDecision(annotation=CheckoutAnnotation.AUTO_DEADLINE)
