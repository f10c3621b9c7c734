# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: member data access.
Encapsulates all reads and writes on the ``members`` table.
NO business rules here.
"""

from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from sqlalchemy import and_, delete, func, insert, or_, select, text, update
from sqlalchemy.engine import Engine

from membership_service.core.errors import DuplicateMember
from membership_service.models.domain import as_utc, utcnow
from membership_service.models.tables import members
from membership_service.repositories.base import (
    new_identifier,
    parse_identifier,
    storage_errors,
)

_DATETIME_FIELDS = ("join_date", "expiry_date", "created_at", "updated_at")


def _duplicate() -> DuplicateMember:
    return DuplicateMember("Member with this email or phone already exists")


def _dump_payments(history: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [
        {**entry, "date": as_utc(entry["date"]).isoformat()}
        for entry in history
    ]


def _load_payments(history: Optional[List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    return [
        {**entry, "date": as_utc(datetime.fromisoformat(entry["date"]))}
        for entry in history or []
    ]


def _to_storage(values: Dict[str, Any]) -> Dict[str, Any]:
    stored = dict(values)
    for field in _DATETIME_FIELDS:
        if stored.get(field) is not None:
            stored[field] = as_utc(stored[field])
    if "payment_history" in stored:
        stored["payment_history"] = _dump_payments(stored["payment_history"])
    return stored


def _row_to_dict(row) -> Dict[str, Any]:
    record = dict(row._mapping)
    for field in _DATETIME_FIELDS:
        if record.get(field) is not None:
            record[field] = as_utc(record[field])
    record["payment_history"] = _load_payments(record.get("payment_history"))
    return record


class MemberRepository:
    """SQLAlchemy-backed member storage."""

    def __init__(self, engine: Engine, clock: Callable[[], datetime] = utcnow):
        self._engine = engine
        self._clock = clock

    # ── Write ──────────────────────────────────────────────────────────

    def insert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Store a new record; the id and storage timestamps are assigned here."""
        now = self._clock()
        values = _to_storage({
            **record,
            "id": new_identifier(),
            "created_at": now,
            "updated_at": now,
        })
        with storage_errors("insert", _duplicate):
            with self._engine.begin() as conn:
                conn.execute(insert(members).values(**values))
                row = conn.execute(
                    select(members).where(members.c.id == values["id"])
                ).fetchone()
        return _row_to_dict(row)

    def update_by_id(self, member_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Apply ``changes`` and return the stored record, or None if absent."""
        member_id = parse_identifier(member_id)
        values = _to_storage({**changes, "updated_at": self._clock()})
        with storage_errors("update", _duplicate):
            with self._engine.begin() as conn:
                result = conn.execute(
                    update(members).where(members.c.id == member_id).values(**values)
                )
                if result.rowcount == 0:
                    return None
                row = conn.execute(
                    select(members).where(members.c.id == member_id)
                ).fetchone()
        return _row_to_dict(row)

    def delete_by_id(self, member_id: str) -> bool:
        member_id = parse_identifier(member_id)
        with storage_errors("delete", _duplicate):
            with self._engine.begin() as conn:
                result = conn.execute(delete(members).where(members.c.id == member_id))
        return result.rowcount > 0

    # ── Read ───────────────────────────────────────────────────────────

    def get_by_id(self, member_id: str) -> Optional[Dict[str, Any]]:
        member_id = parse_identifier(member_id)
        with storage_errors("lookup", _duplicate):
            with self._engine.connect() as conn:
                row = conn.execute(
                    select(members).where(members.c.id == member_id)
                ).fetchone()
        return _row_to_dict(row) if row else None

    def find_by_email_or_phone(
        self,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        exclude_id: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """First record whose email OR phone matches, skipping ``exclude_id``."""
        alternatives = []
        if email:
            alternatives.append(func.lower(members.c.email) == email.lower())
        if phone:
            alternatives.append(members.c.phone == phone)
        if not alternatives:
            return None
        query = select(members).where(or_(*alternatives))
        if exclude_id:
            query = query.where(members.c.id != parse_identifier(exclude_id))
        with storage_errors("conflict lookup", _duplicate):
            with self._engine.connect() as conn:
                row = conn.execute(query.limit(1)).fetchone()
        return _row_to_dict(row) if row else None

    def find_many(
        self,
        search: Optional[str] = None,
        status: Optional[str] = None,
        package_type: Optional[str] = None,
        skip: int = 0,
        limit: int = 10,
    ) -> Tuple[int, List[Dict[str, Any]]]:
        """Filtered page ordered newest first, plus the unpaged total."""
        where = self._filter_clause(search, status, package_type)
        count_query = select(func.count()).select_from(members)
        page_query = (
            select(members)
            .order_by(members.c.created_at.desc(), members.c.id.desc())
            .offset(skip)
            .limit(limit)
        )
        if where is not None:
            count_query = count_query.where(where)
            page_query = page_query.where(where)
        with storage_errors("list", _duplicate):
            with self._engine.connect() as conn:
                total = conn.execute(count_query).scalar() or 0
                rows = conn.execute(page_query).fetchall()
        return total, [_row_to_dict(r) for r in rows]

    def count(self) -> int:
        with storage_errors("count", _duplicate):
            with self._engine.connect() as conn:
                return conn.execute(select(func.count()).select_from(members)).scalar() or 0

    def count_by(self, field: str) -> List[Tuple[str, int]]:
        """Group all records by ``field``; only groups that exist are returned."""
        column = members.c[field]
        query = select(column, func.count()).group_by(column).order_by(column)
        with storage_errors("aggregate", _duplicate):
            with self._engine.connect() as conn:
                return [(row[0], row[1]) for row in conn.execute(query)]

    def count_expiring_between(self, start: datetime, end: datetime) -> int:
        query = select(func.count()).select_from(members).where(
            and_(members.c.expiry_date >= as_utc(start), members.c.expiry_date <= as_utc(end))
        )
        with storage_errors("aggregate", _duplicate):
            with self._engine.connect() as conn:
                return conn.execute(query).scalar() or 0

    def verify_connection(self) -> None:
        with self._engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def dispose(self) -> None:
        self._engine.dispose()

    # ── Private ────────────────────────────────────────────────────────

    @staticmethod
    def _filter_clause(search: Optional[str], status: Optional[str], package_type: Optional[str]):
        conditions = []
        if search:
            term = search.strip().lower()
            conditions.append(or_(
                func.lower(members.c.full_name).contains(term, autoescape=True),
                func.lower(members.c.email).contains(term, autoescape=True),
                members.c.phone.contains(term, autoescape=True),
            ))
        if status:
            conditions.append(members.c.membership_status == status)
        if package_type:
            conditions.append(members.c.package_type == package_type)
        return and_(*conditions) if conditions else None
