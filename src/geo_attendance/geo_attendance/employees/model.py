from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Registered employee of a company branch.

    Note: Plain data object; the password hash never leaves the service layer.
    """

    employee_id: int
    first_name: str
    last_name: str
    email: str
    password_hash: str
    company_name: str
    branch_name: str
    profile_pic: str
    role: Role = Role.EMPLOYEE
    created_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_public_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "name": self.full_name,
            "email": self.email,
            "companyName": self.company_name,
            "branchName": self.branch_name,
            "profilePic": self.profile_pic,
            "role": self.role.value,
        }
