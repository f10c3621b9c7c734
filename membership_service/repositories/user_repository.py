# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: user account directory.
Accounts are referenced by members (``created_by``) but never owned by them.
"""

from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.engine import Engine

from membership_service.core.errors import DuplicateAccount
from membership_service.models.domain import as_utc, utcnow
from membership_service.models.tables import users
from membership_service.repositories.base import (
    new_identifier,
    parse_identifier,
    storage_errors,
)


def _duplicate() -> DuplicateAccount:
    return DuplicateAccount("User already exists with this email")


def _row_to_dict(row) -> Dict[str, Any]:
    account = dict(row._mapping)
    for field in ("last_login", "created_at", "updated_at"):
        if account.get(field) is not None:
            account[field] = as_utc(account[field])
    return account


class UserRepository:
    def __init__(self, engine: Engine, clock: Callable[[], datetime] = utcnow):
        self._engine = engine
        self._clock = clock

    # ── Write ──────────────────────────────────────────────────────────

    def insert(self, account: Dict[str, Any]) -> Dict[str, Any]:
        now = self._clock()
        values = {**account, "id": new_identifier(), "created_at": now, "updated_at": now}
        with storage_errors("user insert", _duplicate):
            with self._engine.begin() as conn:
                conn.execute(insert(users).values(**values))
                row = conn.execute(select(users).where(users.c.id == values["id"])).fetchone()
        return _row_to_dict(row)

    def update_by_id(self, user_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        user_id = parse_identifier(user_id, kind="user")
        values = {**changes, "updated_at": self._clock()}
        with storage_errors("user update", _duplicate):
            with self._engine.begin() as conn:
                result = conn.execute(update(users).where(users.c.id == user_id).values(**values))
                if result.rowcount == 0:
                    return None
                row = conn.execute(select(users).where(users.c.id == user_id)).fetchone()
        return _row_to_dict(row)

    def delete_by_id(self, user_id: str) -> bool:
        user_id = parse_identifier(user_id, kind="user")
        with storage_errors("user delete", _duplicate):
            with self._engine.begin() as conn:
                result = conn.execute(delete(users).where(users.c.id == user_id))
        return result.rowcount > 0

    # ── Read ───────────────────────────────────────────────────────────

    def get_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        user_id = parse_identifier(user_id, kind="user")
        with storage_errors("user lookup", _duplicate):
            with self._engine.connect() as conn:
                row = conn.execute(select(users).where(users.c.id == user_id)).fetchone()
        return _row_to_dict(row) if row else None

    def find_by_email(self, email: str, exclude_id: Optional[str] = None) -> Optional[Dict[str, Any]]:
        query = select(users).where(func.lower(users.c.email) == email.lower())
        if exclude_id:
            query = query.where(users.c.id != parse_identifier(exclude_id, kind="user"))
        with storage_errors("user lookup", _duplicate):
            with self._engine.connect() as conn:
                row = conn.execute(query.limit(1)).fetchone()
        return _row_to_dict(row) if row else None

    def list_all(self) -> List[Dict[str, Any]]:
        query = select(users).order_by(users.c.created_at.desc(), users.c.id.desc())
        with storage_errors("user list", _duplicate):
            with self._engine.connect() as conn:
                return [_row_to_dict(r) for r in conn.execute(query)]
