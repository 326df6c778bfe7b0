from __future__ import annotations

import logging
from typing import Optional

from erpdash.application.store import DomainStore
from erpdash.domain.errors import AuthorizationError
from erpdash.domain.models import User

log = logging.getLogger(__name__)

# Actions missing from the matrix are open to every role.
PERMISSIONS: dict[str, set[str]] = {
    "manage_users": {"admin"},
}


def can(user: Optional[User], action: str) -> bool:
    if user is None:
        return False
    allowed_roles = PERMISSIONS.get(action)
    if allowed_roles is None:
        return True
    return user.role in allowed_roles


def require_action(user: Optional[User], action: str) -> None:
    if not can(user, action):
        role = user.role if user else "anonymous"
        raise AuthorizationError(f"Role '{role}' is not allowed to perform '{action}'.")


class AuthService:
    """Session handling against the local user list.

    There is no credential store: a user is identified by email only and
    the password is not checked.
    """

    def __init__(self, store: DomainStore):
        self.store = store

    def current_user(self) -> Optional[User]:
        return self.store.current_user

    def login(self, email: str, password: str) -> User:
        email_clean = (email or "").strip().lower()
        if not email_clean:
            raise AuthorizationError("Email is required.")

        user = next((u for u in self.store.users if u.email.strip().lower() == email_clean), None)
        if not user:
            log.warning("login_failed email=%s", email_clean)
            raise AuthorizationError("Invalid email or password.")

        self.store.set_current_user(user)
        log.info("login user_id=%s role=%s", user.id, user.role)
        return user

    def logout(self) -> None:
        self.store.set_current_user(None)

    def can(self, user: Optional[User], action: str) -> bool:
        return can(user, action)

    def require_action(self, user: Optional[User], action: str) -> None:
        require_action(user, action)
