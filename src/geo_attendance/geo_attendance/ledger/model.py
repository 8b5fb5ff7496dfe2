from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AttendanceAction


@dataclass(frozen=True)
class AttendanceRecord:
    """One check-in or check-out event of the current session."""

    record_id: str
    timestamp: datetime
    action: AttendanceAction
    zone_name: str
    annotation: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.record_id,
            "timestamp": self.timestamp.isoformat(timespec="seconds"),
            "action": self.action.value,
            "zoneName": self.zone_name,
            "annotation": self.annotation,
        }
