from __future__ import annotations

from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from ..offices.repository import OfficeRepository
from .repository import EmployeeRepository


@dataclass(frozen=True)
class SessionEmployee:
    """What we store into the Flask session after login."""

    employee_id: int
    full_name: str
    email: str
    role: Role
    company_name: str
    branch_name: str


class AuthService:
    """Use case: authenticate employee (login)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def authenticate(self, email: str, password: str) -> SessionEmployee:
        employee = self._employees.get_by_email((email or "").strip().lower())
        if not employee:
            raise AuthenticationError("Invalid credentials")

        try:
            ok = check_password_hash(employee.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid credentials")

        return SessionEmployee(
            employee_id=employee.employee_id,
            full_name=employee.full_name,
            email=employee.email,
            role=employee.role,
            company_name=employee.company_name,
            branch_name=employee.branch_name,
        )


class EmployeeService:
    """Use case: register and look up employees."""

    def __init__(self, employees: EmployeeRepository, offices: OfficeRepository):
        self._employees = employees
        self._offices = offices

    def register(
        self,
        *,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        company_name: str,
        branch_name: str,
        profile_pic: str,
    ) -> dict:
        first_name = require_non_empty(first_name, "First name")
        last_name = require_non_empty(last_name, "Last name")
        email = require_email(email)
        require_min_length(password, "Password", 6)
        company_name = require_non_empty(company_name, "Company name")
        branch_name = require_non_empty(branch_name, "Branch name")
        profile_pic = require_non_empty(profile_pic, "Profile picture")

        if self._employees.get_by_email(email):
            raise ConflictError("Email already in use.")

        if not self._offices.exists(company_name=company_name, branch_name=branch_name):
            raise ValidationError("Company and branch name must exist in the office directory.")

        employee_id = self._employees.create(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=generate_password_hash(password),
            company_name=company_name,
            branch_name=branch_name,
            profile_pic=profile_pic,
        )
        return self.get(employee_id)

    def get(self, employee_id: int) -> dict:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("User not found")
        return employee.to_public_dict()

    def list_all(self) -> list[dict]:
        return [e.to_public_dict() for e in self._employees.list_all()]

    def lookup_by_branch(self, *, company_name: str, branch_name: str) -> list[dict]:
        company_name = require_non_empty(company_name, "Company name")
        branch_name = require_non_empty(branch_name, "Branch name")

        employees = self._employees.list_by_branch(company_name=company_name, branch_name=branch_name)
        if not employees:
            raise NotFoundError("No employees found for this branch")

        count = self._employees.count_by_branch(company_name=company_name, branch_name=branch_name)
        return [{**e.to_public_dict(), "employeeCount": count} for e in employees]

    def delete(self, employee_id: int) -> None:
        if not self._employees.delete_by_id(int(employee_id)):
            raise NotFoundError("User not found")
