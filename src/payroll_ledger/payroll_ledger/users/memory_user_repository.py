from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

from ..core.enums import Role
from ..database.memory import InMemoryStore
from .model import User
from .repository import UserRepository


class InMemoryUserRepository(UserRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    def _all(self) -> list[User]:
        with self._store.lock():
            return list(self._store.tables["users"].values())

    def get_by_id(self, user_id: int) -> Optional[User]:
        with self._store.lock():
            return self._store.tables["users"].get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._all() if u.email == email), None)

    def list_all(self) -> Sequence[User]:
        return sorted(self._all(), key=lambda u: u.user_id)

    def create_user(
        self,
        *,
        email: str,
        display_name: str,
        password_hash: str,
        role: Role,
        staff_id: Optional[int],
    ) -> int:
        with self._store.lock():
            if self.get_by_email(email):
                raise ValueError(f"Duplicate email: {email}")
            user_id = self._store.next_id("users")
            self._store.tables["users"][user_id] = User(
                user_id=user_id,
                email=email,
                display_name=display_name,
                password_hash=password_hash,
                role=role,
                staff_id=staff_id,
                is_active=True,
            )
            return user_id

    def set_active(self, user_id: int, *, is_active: bool) -> bool:
        with self._store.lock():
            rows = self._store.tables["users"]
            current = rows.get(int(user_id))
            if not current:
                return False
            rows[int(user_id)] = replace(current, is_active=is_active)
            return True

    def count_for_staff(self, staff_id: int) -> int:
        return sum(1 for u in self._all() if u.staff_id == int(staff_id))
