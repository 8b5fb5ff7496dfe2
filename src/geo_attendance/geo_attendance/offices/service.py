from __future__ import annotations

from typing import Sequence

from ..common.validators import require_latitude, require_longitude, require_non_empty, require_positive
from ..core.constants import DEFAULT_ZONE_RADIUS_METERS
from ..core.exceptions import ConflictError, NotFoundError
from ..employees.repository import EmployeeRepository
from .repository import OfficeRepository


class OfficeService:
    """Use case: manage offices (geofence definitions)."""

    def __init__(self, offices: OfficeRepository, employees: EmployeeRepository):
        self._offices = offices
        self._employees = employees

    def create_office(
        self,
        *,
        branch_name: str,
        company_name: str,
        latitude,
        longitude,
        radius=None,
    ) -> dict:
        branch_name = require_non_empty(branch_name, "Branch name")
        company_name = require_non_empty(company_name, "Company name")
        lat = require_latitude(latitude)
        lng = require_longitude(longitude)
        radius_meters = require_positive(DEFAULT_ZONE_RADIUS_METERS if radius in (None, "") else radius, "Radius")

        if self._offices.exists(company_name=company_name, branch_name=branch_name):
            raise ConflictError("An office with this company and branch already exists")

        office_id = self._offices.create(
            branch_name=branch_name,
            company_name=company_name,
            latitude=lat,
            longitude=lng,
            radius_meters=radius_meters,
        )
        office = self._offices.get_by_id(office_id)
        return office.to_dict()

    def list_offices(self) -> list[dict]:
        return self._with_counts(self._offices.list_all())

    def list_by_company(self, company_name: str) -> list[dict]:
        offices = self._offices.list_by_company(company_name)
        if not offices:
            raise NotFoundError("No offices found for this company name")
        return self._with_counts(offices)

    def delete_office(self, office_id: int) -> None:
        if not self._offices.delete_by_id(int(office_id)):
            raise NotFoundError("Office not found")

    def _with_counts(self, offices: Sequence) -> list[dict]:
        return [
            o.to_dict(
                employee_count=self._employees.count_by_branch(
                    company_name=o.company_name,
                    branch_name=o.branch_name,
                )
            )
            for o in offices
        ]
