from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a login account.

    Employees are linked to the Staff record whose payments they may see.
    """

    user_id: int
    email: str
    display_name: str
    password_hash: str
    role: Role
    staff_id: Optional[int]
    is_active: bool = True

    def public_view(self) -> dict:
        return {
            "user_id": self.user_id,
            "email": self.email,
            "display_name": self.display_name,
            "role": self.role.value,
            "staff_id": self.staff_id,
            "is_active": self.is_active,
        }
