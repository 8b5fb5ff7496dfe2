from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_all_as, fetch_one_as
from .model import Office
from .repository import OfficeRepository

_COLUMNS = "office_id, branch_name, company_name, latitude, longitude, radius_meters, created_at"


def _to_office(r: dict) -> Office:
    return Office(
        office_id=int(r["office_id"]),
        branch_name=r["branch_name"],
        company_name=r["company_name"],
        latitude=float(r["latitude"]),
        longitude=float(r["longitude"]),
        radius_meters=float(r["radius_meters"]),
        created_at=r.get("created_at"),
    )


class MySQLOfficeRepository(OfficeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        branch_name: str,
        company_name: str,
        latitude: float,
        longitude: float,
        radius_meters: float,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO offices(branch_name, company_name, latitude, longitude, radius_meters)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (branch_name, company_name, latitude, longitude, radius_meters),
            )
            return int(cur.lastrowid)

    def get_by_id(self, office_id: int) -> Optional[Office]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM offices WHERE office_id=%s", (int(office_id),))
            return fetch_one_as(cur, _to_office)

    def list_all(self) -> Sequence[Office]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM offices ORDER BY office_id")
            return fetch_all_as(cur, _to_office)

    def list_by_company(self, company_name: str) -> Sequence[Office]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM offices WHERE company_name=%s ORDER BY office_id",
                (company_name,),
            )
            return fetch_all_as(cur, _to_office)

    def exists(self, *, company_name: str, branch_name: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS found FROM offices WHERE company_name=%s AND branch_name=%s LIMIT 1",
                (company_name, branch_name),
            )
            return cur.fetchone() is not None

    def delete_by_id(self, office_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM offices WHERE office_id=%s", (int(office_id),))
            return cur.rowcount > 0
