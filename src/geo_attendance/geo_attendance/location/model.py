from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..geo.model import Coordinate


@dataclass(frozen=True)
class LocationFix:
    """A device position and the instant it was observed."""

    coordinate: Coordinate
    observed_at: datetime
