from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import StaffStatus
from .model import Staff


class StaffRepository(Protocol):
    """Repository interface for Staff.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def get_by_id(self, staff_id: int) -> Optional[Staff]:
        raise NotImplementedError

    def list_all(self, *, status: Optional[StaffStatus] = None) -> Sequence[Staff]:
        raise NotImplementedError

    def create(
        self,
        *,
        full_name: str,
        job_title: str,
        status: StaffStatus,
        email: Optional[str],
        now: datetime,
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        staff_id: int,
        full_name: str,
        job_title: str,
        status: StaffStatus,
        email: Optional[str],
        now: datetime,
    ) -> bool:
        raise NotImplementedError

    def delete_by_id(self, staff_id: int) -> bool:
        raise NotImplementedError
