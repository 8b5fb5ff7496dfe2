from __future__ import annotations

from typing import Optional

from ..core.enums import AttendanceAction
from .model import AttendanceRecord


class AttendanceLedger:
    """Append-only, in-memory list of the session's attendance records.

    Insertion order is chronological order. Queries scan the list on every call;
    a single session never holds more than a handful of records.
    """

    def __init__(self):
        self._records: list[AttendanceRecord] = []

    def append(self, record: AttendanceRecord) -> None:
        if not isinstance(record, AttendanceRecord):
            raise TypeError("Only AttendanceRecord instances can be appended")
        self._records.append(record)

    def all(self) -> tuple[AttendanceRecord, ...]:
        return tuple(self._records)

    def last_of_action(self, action: AttendanceAction) -> Optional[AttendanceRecord]:
        for record in reversed(self._records):
            if record.action == action:
                return record
        return None

    def count_of_action(self, action: AttendanceAction) -> int:
        return sum(1 for r in self._records if r.action == action)

    def __len__(self) -> int:
        return len(self._records)
