# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: user account directory managed by admins.
Credentials live with the identity provider; only profile and role are kept here.
"""

from datetime import datetime
from typing import Any, Callable, Optional

from membership_service.core.errors import (
    DuplicateAccount,
    MalformedIdentifier,
    NotFound,
    ValidationFailed,
)
from membership_service.core.logging import get_logger
from membership_service.models.domain import normalise_email, utcnow
from membership_service.repositories.base import parse_identifier
from membership_service.repositories.user_repository import UserRepository

logger = get_logger(__name__)


def _canonical_actor(actor_id: str) -> Optional[str]:
    # Gateway ids that are not UUIDs cannot name an account here.
    try:
        return parse_identifier(actor_id, kind="user")
    except MalformedIdentifier:
        return None


class UserService:
    def __init__(self, user_repo: UserRepository, clock: Callable[[], datetime] = utcnow) -> None:
        self._users = user_repo
        self._clock = clock

    # ── Commands ──

    def create_user(self, name: str, email: str, role: str = "staff") -> dict[str, Any]:
        email = normalise_email(email)
        if self._users.find_by_email(email) is not None:
            raise DuplicateAccount("User already exists with this email")
        account = self._users.insert({"name": name.strip(), "email": email, "role": role})
        logger.info("User created id=%s role=%s", account["id"], role)
        return account

    def update_user(self, user_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        changes = dict(changes)
        if changes.get("email"):
            changes["email"] = normalise_email(changes["email"])
            if self._users.find_by_email(changes["email"], exclude_id=user_id) is not None:
                raise DuplicateAccount("User already exists with this email")
        if changes.get("name"):
            changes["name"] = changes["name"].strip()
        updated = self._users.update_by_id(user_id, changes)
        if updated is None:
            raise NotFound("User not found")
        logger.info("User updated id=%s fields=%s", user_id, sorted(changes))
        return updated

    def delete_user(self, user_id: str, actor_id: str) -> dict[str, str]:
        user_id = parse_identifier(user_id, kind="user")
        if user_id == _canonical_actor(actor_id):
            raise ValidationFailed("Cannot delete your own account")
        if not self._users.delete_by_id(user_id):
            raise NotFound("User not found")
        logger.info("User deleted id=%s by=%s", user_id, actor_id)
        return {"id": user_id}

    def record_login(self, user_id: str) -> dict[str, Any]:
        updated = self._users.update_by_id(user_id, {"last_login": self._clock()})
        if updated is None:
            raise NotFound("User not found")
        return updated

    # ── Queries ──

    def get_user(self, user_id: str) -> dict[str, Any]:
        account = self._users.get_by_id(user_id)
        if account is None:
            raise NotFound("User not found")
        return account

    def list_users(self) -> list[dict[str, Any]]:
        return self._users.list_all()
