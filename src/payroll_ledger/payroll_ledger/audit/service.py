from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_utc
from ..core.constants import DEFAULT_AUDIT_LIMIT, MAX_AUDIT_LIMIT
from ..core.enums import AuditAction, EntityType, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import AuditEntry
from .repository import AuditRepository

logger = logging.getLogger(__name__)


class AuditTrail:
    """Appends and reads audit entries.

    Services call ``record`` inside the same transaction as the mutation it
    describes, so an entry exists if and only if the mutation was committed.
    """

    def __init__(self, audit: AuditRepository, *, clock: Callable = now_utc):
        self._audit = audit
        self._clock = clock

    def record(
        self,
        *,
        actor: str,
        action: AuditAction,
        entity_type: EntityType,
        entity_id: int,
        summary: str,
    ) -> int:
        audit_id = self._audit.append(
            timestamp=self._clock(),
            actor=actor,
            action=action,
            entity_type=entity_type,
            entity_id=int(entity_id),
            summary=summary,
        )
        logger.info("audit %s %s/%s: %s", action.value, entity_type.value, entity_id, summary)
        return audit_id

    def list_entries(
        self,
        *,
        current_role: Role,
        entity_type: Optional[EntityType] = None,
        entity_id: Optional[int] = None,
        limit: int = DEFAULT_AUDIT_LIMIT,
    ) -> Sequence[AuditEntry]:
        if current_role != Role.OWNER:
            raise AuthorizationError("You do not have permission")
        if int(limit) <= 0:
            raise ValidationError("Limit must be greater than 0")

        return self._audit.list_entries(
            entity_type=entity_type,
            entity_id=entity_id,
            limit=min(int(limit), MAX_AUDIT_LIMIT),
        )

    def get_entry(self, *, current_role: Role, audit_id: int) -> AuditEntry:
        if current_role != Role.OWNER:
            raise AuthorizationError("You do not have permission")
        entry = self._audit.get_by_id(int(audit_id))
        if not entry:
            raise NotFoundError("Audit entry not found")
        return entry
