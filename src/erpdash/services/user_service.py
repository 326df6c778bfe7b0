from __future__ import annotations

import logging
from typing import Optional

from erpdash.application.store import DomainStore
from erpdash.domain.errors import NotFoundError, ValidationError
from erpdash.domain.ids import new_id
from erpdash.domain.models import User, USER_ROLES
from erpdash.services.drafts import UserDraft

log = logging.getLogger(__name__)


class UserService:
    def __init__(self, store: DomainStore):
        self.store = store

    def list_users(self) -> list[User]:
        return list(self.store.users)

    def get_user(self, user_id: str) -> User:
        u = self.store.find_user(user_id)
        if not u:
            raise NotFoundError("User not found.")
        return u

    def new_draft(self) -> UserDraft:
        return UserDraft()

    def add_user(self, name: str, email: str, role: str = "employee", avatar: Optional[str] = None) -> User:
        if not name.strip() or not email.strip():
            raise ValidationError("Name and email are required")
        if role not in USER_ROLES:
            raise ValidationError(f"Unknown role '{role}'")
        user = User(id=new_id(), name=name.strip(), email=email.strip(), role=role, avatar=avatar or None)
        self.store.replace_users([*self.store.users, user])
        log.info("user_added user_id=%s role=%s", user.id, user.role)
        return user

    def update_user(self, user: User) -> User:
        if self.store.find_user(user.id) is None:
            raise NotFoundError("User not found.")
        self.store.replace_users(user if u.id == user.id else u for u in self.store.users)

        current = self.store.current_user
        if current is not None and current.id == user.id:
            self.store.set_current_user(user)
        return user
