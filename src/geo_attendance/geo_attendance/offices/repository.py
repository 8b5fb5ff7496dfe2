from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Office


class OfficeRepository(Protocol):
    def create(
        self,
        *,
        branch_name: str,
        company_name: str,
        latitude: float,
        longitude: float,
        radius_meters: float,
    ) -> int:
        raise NotImplementedError

    def get_by_id(self, office_id: int) -> Optional[Office]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Office]:
        raise NotImplementedError

    def list_by_company(self, company_name: str) -> Sequence[Office]:
        raise NotImplementedError

    def exists(self, *, company_name: str, branch_name: str) -> bool:
        raise NotImplementedError

    def delete_by_id(self, office_id: int) -> bool:
        raise NotImplementedError
