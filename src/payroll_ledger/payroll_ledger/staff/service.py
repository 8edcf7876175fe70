from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from ..audit.service import AuditTrail
from ..common.datetime_utils import now_utc
from ..common.validators import optional_email, require_choice, require_text
from ..core.constants import MAX_NAME_LENGTH
from ..core.actor import Actor
from ..core.enums import AuditAction, EntityType, StaffStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..database.unit_of_work import TransactionManager
from .model import Staff
from .repository import StaffRepository

logger = logging.getLogger(__name__)

_UNSET = object()


@dataclass(frozen=True)
class StaffPatch:
    full_name: object = _UNSET
    job_title: object = _UNSET
    email: object = _UNSET

    @classmethod
    def from_dict(cls, data: dict) -> "StaffPatch":
        unknown = set(data) - {"full_name", "job_title", "email"}
        if unknown:
            raise ValidationError(f"Unknown staff fields: {', '.join(sorted(unknown))}")
        return cls(**data)


class StaffService:
    """Use cases: manage staff records (owner only)."""

    def __init__(
        self,
        staff: StaffRepository,
        audit: AuditTrail,
        tx: TransactionManager,
        *,
        references: Optional[Callable[[int], int]] = None,
        clock: Callable = now_utc,
    ):
        self._staff = staff
        self._audit = audit
        self._tx = tx
        # Counts payments/accounts pointing at a staff id; wired by the container.
        self._references = references or (lambda staff_id: 0)
        self._clock = clock

    @staticmethod
    def _require_owner(actor: Actor) -> None:
        if not actor.is_owner:
            raise AuthorizationError("You do not have permission")

    def list_staff(self, *, actor: Actor, status: Optional[str] = None) -> Sequence[Staff]:
        self._require_owner(actor)
        wanted = require_choice(status, StaffStatus, "Status") if status else None
        return self._staff.list_all(status=wanted)

    def get_staff(self, staff_id: int) -> Staff:
        staff = self._staff.get_by_id(int(staff_id))
        if not staff:
            raise NotFoundError("Staff member not found")
        return staff

    def create_staff(
        self,
        *,
        actor: Actor,
        full_name: str,
        job_title: str,
        email: Optional[str] = None,
        status: str | StaffStatus = StaffStatus.ACTIVE,
    ) -> Staff:
        self._require_owner(actor)
        full_name = require_text(full_name, "Full name", MAX_NAME_LENGTH)
        job_title = require_text(job_title, "Job title", MAX_NAME_LENGTH)
        email = optional_email(email)
        status = require_choice(status, StaffStatus, "Status")

        with self._tx.transaction():
            staff_id = self._staff.create(
                full_name=full_name,
                job_title=job_title,
                status=status,
                email=email,
                now=self._clock(),
            )
            self._audit.record(
                actor=actor.name,
                action=AuditAction.CREATE,
                entity_type=EntityType.STAFF,
                entity_id=staff_id,
                summary=f"Created staff {full_name} ({job_title})",
            )

        return self.get_staff(staff_id)

    def toggle_status(self, *, actor: Actor, staff_id: int) -> Staff:
        self._require_owner(actor)

        with self._tx.transaction():
            staff = self.get_staff(staff_id)
            next_status = staff.status.toggled()
            ok = self._staff.update(
                staff_id=staff.staff_id,
                full_name=staff.full_name,
                job_title=staff.job_title,
                status=next_status,
                email=staff.email,
                now=self._clock(),
            )
            if not ok:
                raise NotFoundError("Staff member not found")
            self._audit.record(
                actor=actor.name,
                action=AuditAction.UPDATE,
                entity_type=EntityType.STAFF,
                entity_id=staff.staff_id,
                summary=f"Updated staff {staff.full_name} status to {next_status.value}",
            )

        return self.get_staff(staff_id)

    def update_staff(self, *, actor: Actor, staff_id: int, patch: StaffPatch) -> Staff:
        self._require_owner(actor)

        with self._tx.transaction():
            staff = self.get_staff(staff_id)
            full_name, job_title, email = staff.full_name, staff.job_title, staff.email
            if patch.full_name is not _UNSET:
                full_name = require_text(patch.full_name, "Full name", MAX_NAME_LENGTH)
            if patch.job_title is not _UNSET:
                job_title = require_text(patch.job_title, "Job title", MAX_NAME_LENGTH)
            if patch.email is not _UNSET:
                email = optional_email(patch.email)

            changed = [
                name
                for name, old, new in (
                    ("full_name", staff.full_name, full_name),
                    ("job_title", staff.job_title, job_title),
                    ("email", staff.email, email),
                )
                if old != new
            ]
            if not changed:
                raise ValidationError("Nothing to update")

            self._staff.update(
                staff_id=staff.staff_id,
                full_name=full_name,
                job_title=job_title,
                status=staff.status,
                email=email,
                now=self._clock(),
            )
            self._audit.record(
                actor=actor.name,
                action=AuditAction.UPDATE,
                entity_type=EntityType.STAFF,
                entity_id=staff.staff_id,
                summary=f"Updated staff {full_name}: {', '.join(changed)}",
            )

        return self.get_staff(staff_id)

    def delete_staff(self, *, actor: Actor, staff_id: int) -> None:
        self._require_owner(actor)

        with self._tx.transaction():
            staff = self.get_staff(staff_id)
            if self._references(staff.staff_id) > 0:
                raise ValidationError("Staff member has payments or a login account; deactivate instead")
            if not self._staff.delete_by_id(staff.staff_id):
                raise NotFoundError("Staff member not found")
            self._audit.record(
                actor=actor.name,
                action=AuditAction.DELETE,
                entity_type=EntityType.STAFF,
                entity_id=staff.staff_id,
                summary=f"Deleted staff {staff.full_name}",
            )

        logger.info("Deleted staff %s", staff_id)
