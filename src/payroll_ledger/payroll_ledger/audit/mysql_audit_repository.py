from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import AuditAction, EntityType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AuditEntry
from .repository import AuditRepository

_COLUMNS = "audit_id, `timestamp`, actor, action, entity_type, entity_id, summary"


def _row_to_entry(r: dict) -> AuditEntry:
    return AuditEntry(
        audit_id=int(r["audit_id"]),
        timestamp=r["timestamp"],
        actor=r["actor"],
        action=AuditAction(r["action"]),
        entity_type=EntityType(r["entity_type"]),
        entity_id=int(r["entity_id"]),
        summary=r["summary"],
    )


class MySQLAuditRepository(AuditRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(
        self,
        *,
        timestamp: datetime,
        actor: str,
        action: AuditAction,
        entity_type: EntityType,
        entity_id: int,
        summary: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO audit_logs(`timestamp`, actor, action, entity_type, entity_id, summary)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (timestamp, actor, action.value, entity_type.value, int(entity_id), summary),
            )
            return int(cur.lastrowid)

    def get_by_id(self, audit_id: int) -> Optional[AuditEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM audit_logs WHERE audit_id=%s", (int(audit_id),))
            row = fetchone(cur)
            return _row_to_entry(row) if row else None

    def list_entries(
        self,
        *,
        entity_type: Optional[EntityType] = None,
        entity_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[AuditEntry]:
        where = []
        params: list = []
        if entity_type is not None:
            where.append("entity_type=%s")
            params.append(entity_type.value)
        if entity_id is not None:
            where.append("entity_id=%s")
            params.append(int(entity_id))

        sql = f"SELECT {_COLUMNS} FROM audit_logs"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY audit_id DESC LIMIT %s"
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_entry(r) for r in fetchall(cur)]
