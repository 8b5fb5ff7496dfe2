from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Office:
    """A company branch and its geofence."""

    office_id: int
    branch_name: str
    company_name: str
    latitude: float
    longitude: float
    radius_meters: float
    created_at: Optional[datetime] = None

    def to_dict(self, *, employee_count: Optional[int] = None) -> dict:
        out = {
            "id": self.office_id,
            "branchName": self.branch_name,
            "companyName": self.company_name,
            "coordinates": {"lat": self.latitude, "lng": self.longitude},
            "radius": self.radius_meters,
            "createdAt": self.created_at.isoformat(timespec="seconds") if self.created_at else None,
        }
        if employee_count is not None:
            out["employeeCount"] = employee_count
        return out
