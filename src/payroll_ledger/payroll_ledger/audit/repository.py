from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AuditAction, EntityType
from .model import AuditEntry


class AuditRepository(Protocol):
    """Append-only store: there is deliberately no update or delete."""

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
        raise NotImplementedError

    def get_by_id(self, audit_id: int) -> Optional[AuditEntry]:
        raise NotImplementedError

    def list_entries(
        self,
        *,
        entity_type: Optional[EntityType] = None,
        entity_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[AuditEntry]:
        """Newest first."""

        raise NotImplementedError
