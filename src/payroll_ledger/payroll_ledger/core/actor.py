from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .constants import SYSTEM_ACTOR
from .enums import Role


@dataclass(frozen=True)
class Actor:
    """Who is performing an operation (what we keep in the Flask session)."""

    user_id: Optional[int]
    name: str
    role: Role
    staff_id: Optional[int] = None

    @property
    def is_owner(self) -> bool:
        return self.role == Role.OWNER

    @classmethod
    def system(cls) -> "Actor":
        """Actor for scripts and seeding; has owner rights."""
        return cls(user_id=None, name=SYSTEM_ACTOR, role=Role.OWNER)
