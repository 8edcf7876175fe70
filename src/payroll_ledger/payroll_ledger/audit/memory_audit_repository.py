from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import AuditAction, EntityType
from ..database.memory import InMemoryStore
from .model import AuditEntry
from .repository import AuditRepository


class InMemoryAuditRepository(AuditRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

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
        with self._store.lock():
            audit_id = self._store.next_id("audit_logs")
            self._store.tables["audit_logs"][audit_id] = AuditEntry(
                audit_id=audit_id,
                timestamp=timestamp,
                actor=actor,
                action=action,
                entity_type=entity_type,
                entity_id=int(entity_id),
                summary=summary,
            )
            return audit_id

    def get_by_id(self, audit_id: int) -> Optional[AuditEntry]:
        with self._store.lock():
            return self._store.tables["audit_logs"].get(int(audit_id))

    def list_entries(
        self,
        *,
        entity_type: Optional[EntityType] = None,
        entity_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[AuditEntry]:
        with self._store.lock():
            entries = list(self._store.tables["audit_logs"].values())

        if entity_type is not None:
            entries = [e for e in entries if e.entity_type == entity_type]
        if entity_id is not None:
            entries = [e for e in entries if e.entity_id == int(entity_id)]
        entries.sort(key=lambda e: e.audit_id, reverse=True)
        return entries[: int(limit)]
