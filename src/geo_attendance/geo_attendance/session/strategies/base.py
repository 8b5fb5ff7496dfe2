from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, time

from ...core.enums import CheckoutAnnotation


@dataclass(frozen=True)
class CheckoutDecision:
    annotation: CheckoutAnnotation
    early: bool = False


class CheckoutStrategy(ABC):
    """Strategy Pattern: encapsulate how a check-out is labelled."""

    @abstractmethod
    def decide_checkout(self, *, now: datetime, deadline: time) -> CheckoutDecision:
        raise NotImplementedError


def is_before_deadline(now: datetime, deadline: time) -> bool:
    return now.time() < deadline
