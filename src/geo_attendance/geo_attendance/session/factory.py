from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time

from ..core.enums import CheckoutTrigger
from .strategies.base import CheckoutStrategy, is_before_deadline
from .strategies.deadline_strategy import DeadlineCheckoutStrategy
from .strategies.exit_strategy import ZoneExitStrategy
from .strategies.manual_strategy import EarlyManualCheckoutStrategy, ManualCheckoutStrategy


@dataclass
class CheckoutStrategyFactory:
    """Factory Pattern: choose the check-out strategy for a trigger."""

    def for_checkout(self, *, trigger: CheckoutTrigger, now: datetime, deadline: time) -> CheckoutStrategy:
        if trigger == CheckoutTrigger.DEADLINE:
            return DeadlineCheckoutStrategy()
        if trigger == CheckoutTrigger.ZONE_EXIT:
            return ZoneExitStrategy()

        if is_before_deadline(now, deadline):
            return EarlyManualCheckoutStrategy()
        return ManualCheckoutStrategy()
