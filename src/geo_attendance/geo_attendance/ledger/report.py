from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import AttendanceAction
from .ledger import AttendanceLedger
from .model import AttendanceRecord


REPORT_FIELDS = ["time", "action", "zone_name", "annotation"]


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: dict


class SessionReportService:
    """Dashboard figures and export rows for one session's ledger."""

    def build(self, ledger: AttendanceLedger, *, early_checkouts: int = 0) -> ReportData:
        rows = [
            {
                "time": r.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
                "action": r.action.value,
                "zone_name": r.zone_name,
                "annotation": r.annotation or "",
            }
            for r in ledger.all()
        ]

        summary = {
            "total_check_ins": ledger.count_of_action(AttendanceAction.CHECK_IN),
            "total_check_outs": ledger.count_of_action(AttendanceAction.CHECK_OUT),
            "early_checkouts": int(early_checkouts),
            "last_check_in": _fmt(ledger.last_of_action(AttendanceAction.CHECK_IN)),
            "last_check_out": _fmt(ledger.last_of_action(AttendanceAction.CHECK_OUT)),
        }
        return ReportData(rows=rows, summary=summary)


def _fmt(record: Optional[AttendanceRecord]) -> Optional[str]:
    if record is None:
        return None
    return f"{record.timestamp.strftime('%H:%M:%S')} @ {record.zone_name}"
