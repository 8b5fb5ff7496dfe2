from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_all_as, fetch_one_as
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = (
    "employee_id, first_name, last_name, email, password_hash, "
    "company_name, branch_name, profile_pic, role, created_at"
)


def _to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        first_name=r["first_name"],
        last_name=r["last_name"],
        email=r["email"],
        password_hash=r["password_hash"],
        company_name=r["company_name"],
        branch_name=r["branch_name"],
        profile_pic=r.get("profile_pic") or "",
        role=Role(r.get("role") or Role.EMPLOYEE.value),
        created_at=r.get("created_at"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            return fetch_one_as(cur, _to_employee)

    def get_by_email(self, email: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE email=%s", (email,))
            return fetch_one_as(cur, _to_employee)

    def create(
        self,
        *,
        first_name: str,
        last_name: str,
        email: str,
        password_hash: str,
        company_name: str,
        branch_name: str,
        profile_pic: str,
        role: Role = Role.EMPLOYEE,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees
                    (first_name, last_name, email, password_hash, company_name, branch_name, profile_pic, role)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (first_name, last_name, email, password_hash, company_name, branch_name, profile_pic, role.value),
            )
            return int(cur.lastrowid)

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY employee_id")
            return fetch_all_as(cur, _to_employee)

    def list_by_branch(self, *, company_name: str, branch_name: str) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM employees
                WHERE company_name=%s AND branch_name=%s
                ORDER BY employee_id
                """,
                (company_name, branch_name),
            )
            return fetch_all_as(cur, _to_employee)

    def count_by_branch(self, *, company_name: str, branch_name: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS n FROM employees WHERE company_name=%s AND branch_name=%s",
                (company_name, branch_name),
            )
            r = cur.fetchone()
            return int(r["n"]) if r else 0

    def delete_by_id(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (int(employee_id),))
            return cur.rowcount > 0
