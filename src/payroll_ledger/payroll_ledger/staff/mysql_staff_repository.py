from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import StaffStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Staff
from .repository import StaffRepository

_COLUMNS = "staff_id, full_name, job_title, status, email, created_at, updated_at"


def _row_to_staff(r: dict) -> Staff:
    return Staff(
        staff_id=int(r["staff_id"]),
        full_name=r["full_name"],
        job_title=r["job_title"],
        status=StaffStatus(r["status"]),
        email=r.get("email"),
        created_at=r["created_at"],
        updated_at=r["updated_at"],
    )


class MySQLStaffRepository(StaffRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, staff_id: int) -> Optional[Staff]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM staff WHERE staff_id=%s", (int(staff_id),))
            row = fetchone(cur)
            return _row_to_staff(row) if row else None

    def list_all(self, *, status: Optional[StaffStatus] = None) -> Sequence[Staff]:
        with db_cursor(self._conn_factory) as (_, cur):
            if status is None:
                cur.execute(f"SELECT {_COLUMNS} FROM staff ORDER BY full_name, staff_id")
            else:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM staff WHERE status=%s ORDER BY full_name, staff_id",
                    (status.value,),
                )
            return [_row_to_staff(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        full_name: str,
        job_title: str,
        status: StaffStatus,
        email: Optional[str],
        now: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO staff(full_name, job_title, status, email, created_at, updated_at)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (full_name, job_title, status.value, email, now, now),
            )
            return int(cur.lastrowid)

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE staff
                SET full_name=%s, job_title=%s, status=%s, email=%s, updated_at=%s
                WHERE staff_id=%s
                """,
                (full_name, job_title, status.value, email, now, int(staff_id)),
            )
            return cur.rowcount > 0

    def delete_by_id(self, staff_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM staff WHERE staff_id=%s", (int(staff_id),))
            return cur.rowcount > 0
