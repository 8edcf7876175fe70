from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import StaffStatus


@dataclass(frozen=True)
class Staff:
    """Domain entity: an employee who can receive payments.

    Note: Plain data object (no DB access code here).
    """

    staff_id: int
    full_name: str
    job_title: str
    status: StaffStatus
    email: Optional[str]
    created_at: datetime
    updated_at: datetime

    @property
    def is_active(self) -> bool:
        return self.status == StaffStatus.ACTIVE
