from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import StaffStatus
from ..database.memory import InMemoryStore
from .model import Staff
from .repository import StaffRepository


class InMemoryStaffRepository(StaffRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    def get_by_id(self, staff_id: int) -> Optional[Staff]:
        with self._store.lock():
            return self._store.tables["staff"].get(int(staff_id))

    def list_all(self, *, status: Optional[StaffStatus] = None) -> Sequence[Staff]:
        with self._store.lock():
            items = list(self._store.tables["staff"].values())
        if status is not None:
            items = [s for s in items if s.status == status]
        items.sort(key=lambda s: (s.full_name, s.staff_id))
        return items

    def create(
        self,
        *,
        full_name: str,
        job_title: str,
        status: StaffStatus,
        email: Optional[str],
        now: datetime,
    ) -> int:
        with self._store.lock():
            staff_id = self._store.next_id("staff")
            self._store.tables["staff"][staff_id] = Staff(
                staff_id=staff_id,
                full_name=full_name,
                job_title=job_title,
                status=status,
                email=email,
                created_at=now,
                updated_at=now,
            )
            return staff_id

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
        with self._store.lock():
            rows = self._store.tables["staff"]
            current = rows.get(int(staff_id))
            if not current:
                return False
            rows[int(staff_id)] = replace(
                current,
                full_name=full_name,
                job_title=job_title,
                status=status,
                email=email,
                updated_at=now,
            )
            return True

    def delete_by_id(self, staff_id: int) -> bool:
        with self._store.lock():
            return self._store.tables["staff"].pop(int(staff_id), None) is not None
