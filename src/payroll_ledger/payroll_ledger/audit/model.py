from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import AuditAction, EntityType


@dataclass(frozen=True)
class AuditEntry:
    """Immutable record of one create/update/delete on a ledger entity."""

    audit_id: int
    timestamp: datetime
    actor: str
    action: AuditAction
    entity_type: EntityType
    entity_id: int
    summary: str
