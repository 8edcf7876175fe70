from __future__ import annotations

import logging
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..audit.service import AuditTrail
from ..common.validators import require_choice, require_email, require_min_length, require_positive_id, require_text
from ..core.actor import Actor
from ..core.constants import MAX_NAME_LENGTH, MIN_PASSWORD_LENGTH
from ..core.enums import AuditAction, EntityType, Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from ..database.unit_of_work import TransactionManager
from ..staff.repository import StaffRepository
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate an account (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> Actor:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user or not user.is_active:
            logger.info("Rejected login for %r", email)
            raise AuthenticationError("Wrong email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except (ValueError, TypeError):
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.info("Rejected login for %r", email)
            raise AuthenticationError("Wrong email or password")

        return Actor(
            user_id=user.user_id,
            name=user.display_name,
            role=user.role,
            staff_id=user.staff_id,
        )


class UserService:
    """Use case: manage login accounts (owner)."""

    def __init__(self, users: UserRepository, staff: StaffRepository, audit: AuditTrail, tx: TransactionManager):
        self._users = users
        self._staff = staff
        self._audit = audit
        self._tx = tx

    @staticmethod
    def _require_owner(actor: Actor) -> None:
        if not actor.is_owner:
            raise AuthorizationError("You do not have permission")

    def list_accounts(self, *, actor: Actor) -> Sequence[User]:
        self._require_owner(actor)
        return self._users.list_all()

    def create_account(
        self,
        *,
        actor: Actor,
        email: str,
        display_name: str,
        password: str,
        role: str | Role,
        staff_id: Optional[int] = None,
    ) -> User:
        self._require_owner(actor)
        email = require_email(email)
        display_name = require_text(display_name, "Display name", MAX_NAME_LENGTH)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        role = require_choice(role, Role, "Role")

        if role == Role.EMPLOYEE:
            if staff_id in (None, ""):
                raise ValidationError("Employee accounts must be linked to a staff member")
            staff_id = require_positive_id(staff_id, "Staff")
        else:
            staff_id = None

        with self._tx.transaction():
            if self._users.get_by_email(email):
                raise ValidationError("Email is already in use")

            summary = f"Created {role.value} account {email}"
            if staff_id is not None:
                staff = self._staff.get_by_id(staff_id)
                if not staff:
                    raise ValidationError(f"Staff {staff_id} does not exist")
                summary += f" for {staff.full_name}"

            user_id = self._users.create_user(
                email=email,
                display_name=display_name,
                password_hash=generate_password_hash(password),
                role=role,
                staff_id=staff_id,
            )
            self._audit.record(
                actor=actor.name,
                action=AuditAction.CREATE,
                entity_type=EntityType.USER,
                entity_id=user_id,
                summary=summary,
            )
            user = self._users.get_by_id(user_id)

        return user

    def set_active(self, *, actor: Actor, user_id: int, is_active: bool) -> User:
        self._require_owner(actor)
        if actor.user_id is not None and int(user_id) == actor.user_id and not is_active:
            raise ValidationError("You cannot deactivate your own account")

        with self._tx.transaction():
            user = self._users.get_by_id(int(user_id))
            if not user:
                raise NotFoundError("Account not found")
            if user.is_active == bool(is_active):
                raise ValidationError("Nothing to update")
            self._users.set_active(user.user_id, is_active=bool(is_active))
            self._audit.record(
                actor=actor.name,
                action=AuditAction.UPDATE,
                entity_type=EntityType.USER,
                entity_id=user.user_id,
                summary=f"{'Activated' if is_active else 'Deactivated'} account {user.email}",
            )
            return self._users.get_by_id(user.user_id)
