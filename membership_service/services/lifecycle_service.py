# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: member lifecycle — create, update, delete, renew, and the reads.

Status correction is lazy: an active record whose expiry has passed is
flipped to ``expired`` whenever it is written, never by a background sweep.
Reads may therefore show a stale persisted status; ``is_expired`` and
``days_remaining`` are always computed at read time.
"""

import math
from datetime import datetime
from typing import Any, Callable, Optional

from membership_service.core.errors import MalformedIdentifier, NotFound, ValidationFailed
from membership_service.core.logging import get_logger
from membership_service.metrics.prometheus import (
    MEMBERS_CREATED,
    MEMBERS_DELETED,
    MEMBERS_TOTAL,
    RENEWAL_REVENUE,
    RENEWALS_TOTAL,
)
from membership_service.models.domain import (
    DEFAULT_PACKAGE,
    DEFAULT_STATUS,
    PackagePolicy,
    as_utc,
    compute_expiry,
    correct_status,
    normalise_email,
    utcnow,
    with_derived_fields,
)
from membership_service.repositories.member_repository import MemberRepository
from membership_service.repositories.user_repository import UserRepository
from membership_service.services.conflict_checker import ConflictChecker

logger = get_logger(__name__)

# Fields a caller may patch through update(); identity, join date, expiry
# and payment history only change through create/renew.
PATCHABLE_FIELDS: frozenset[str] = frozenset({
    "full_name", "email", "phone", "address", "package_type",
    "membership_status", "emergency_contact", "medical_info",
})


class LifecycleService:
    """Business logic for the membership lifecycle."""

    def __init__(
        self,
        member_repo: MemberRepository,
        conflict_checker: ConflictChecker,
        policy: PackagePolicy,
        user_repo: Optional[UserRepository] = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._members = member_repo
        self._conflicts = conflict_checker
        self._policy = policy
        self._users = user_repo
        self._clock = clock

    # ── Commands ──

    def create_member(self, data: dict[str, Any], actor_id: Optional[str] = None) -> dict[str, Any]:
        """Create a member; expiry is derived from the package. Raises DuplicateMember."""
        email = normalise_email(data["email"])
        phone = data["phone"].strip()
        self._conflicts.ensure_unique(email=email, phone=phone)

        now = self._clock()
        package_type = data.get("package_type") or DEFAULT_PACKAGE
        record: dict[str, Any] = {
            "full_name": data["full_name"].strip(),
            "email": email,
            "phone": phone,
            "address": data["address"].strip(),
            "package_type": package_type,
            "membership_status": data.get("membership_status") or DEFAULT_STATUS,
            "join_date": now,
            "expiry_date": compute_expiry(now, package_type, self._policy),
            "emergency_contact": data.get("emergency_contact"),
            "medical_info": data.get("medical_info"),
            "payment_history": [],
            "created_by": actor_id,
        }
        created = self._members.insert(correct_status(record, now))

        MEMBERS_CREATED.labels(package=package_type).inc()
        MEMBERS_TOTAL.inc()
        logger.info("Member created id=%s package=%s expiry=%s",
                    created["id"], package_type, created["expiry_date"].isoformat())
        return with_derived_fields(created, now)

    def update_member(self, member_id: str, patch: dict[str, Any]) -> dict[str, Any]:
        """Merge ``patch`` into the record. Raises NotFound / DuplicateMember / ValidationFailed."""
        unknown = set(patch) - PATCHABLE_FIELDS
        if unknown:
            raise ValidationFailed(f"Fields cannot be updated: {sorted(unknown)}")

        current = self._members.get_by_id(member_id)
        if current is None:
            raise NotFound("Member not found")

        changes = dict(patch)
        if "email" in changes:
            changes["email"] = normalise_email(changes["email"])
        if changes.get("phone"):
            changes["phone"] = changes["phone"].strip()
        if changes.get("email") or changes.get("phone"):
            self._conflicts.ensure_unique(
                email=changes.get("email"),
                phone=changes.get("phone"),
                exclude_id=current["id"],
            )

        now = self._clock()
        merged = correct_status({**current, **changes}, now)
        if merged["membership_status"] != current["membership_status"]:
            changes["membership_status"] = merged["membership_status"]

        updated = self._members.update_by_id(current["id"], changes)
        if updated is None:
            raise NotFound("Member not found")
        logger.info("Member updated id=%s fields=%s", updated["id"], sorted(changes))
        return with_derived_fields(updated, now)

    def delete_member(self, member_id: str) -> dict[str, str]:
        """Hard delete. Raises NotFound."""
        if not self._members.delete_by_id(member_id):
            raise NotFound("Member not found")
        MEMBERS_DELETED.inc()
        MEMBERS_TOTAL.dec()
        logger.info("Member deleted id=%s", member_id)
        return {"id": member_id}

    def renew_membership(
        self,
        member_id: str,
        package_type: str,
        payment_amount: Optional[float] = None,
        payment_method: Optional[str] = None,
        transaction_id: Optional[str] = None,
    ) -> dict[str, Any]:
        """Extend from max(current expiry, now), reactivate, and log one payment."""
        member = self._members.get_by_id(member_id)
        if member is None:
            raise NotFound("Member not found")

        if payment_amount is None:
            payment_amount = self._policy.price(package_type)
            if payment_amount is None:
                raise ValidationFailed(
                    f"payment_amount is required for package '{package_type}'"
                )

        now = as_utc(self._clock())
        base = max(member["expiry_date"], now)
        payment = {
            "amount": payment_amount,
            "date": now,
            "payment_method": payment_method,
            "transaction_id": transaction_id,
        }
        renewed = correct_status({
            **member,
            "package_type": package_type,
            "expiry_date": compute_expiry(base, package_type, self._policy),
            "membership_status": "active",
            "payment_history": [*member["payment_history"], payment],
        }, now)

        changes = {
            field: renewed[field]
            for field in ("package_type", "expiry_date", "membership_status", "payment_history")
        }
        updated = self._members.update_by_id(member["id"], changes)
        if updated is None:
            raise NotFound("Member not found")

        RENEWALS_TOTAL.labels(package=package_type).inc()
        RENEWAL_REVENUE.inc(payment_amount)
        logger.info("Membership renewed id=%s package=%s new_expiry=%s",
                    updated["id"], package_type, updated["expiry_date"].isoformat())
        return with_derived_fields(updated, now)

    # ── Queries ──

    def get_member(self, member_id: str) -> dict[str, Any]:
        """Fetch one member with ``created_by_user`` resolved when known. Raises NotFound."""
        member = self._members.get_by_id(member_id)
        if member is None:
            raise NotFound("Member not found")
        result = with_derived_fields(member, self._clock())
        result["created_by_user"] = self._resolve_creator(member.get("created_by"))
        return result

    def list_members(
        self,
        search: Optional[str] = None,
        status: Optional[str] = None,
        package_type: Optional[str] = None,
        page: int = 1,
        page_size: int = 10,
    ) -> dict[str, Any]:
        if page < 1 or page_size < 1:
            raise ValidationFailed("page and page size must be positive")
        total, rows = self._members.find_many(
            search=search,
            status=status,
            package_type=package_type,
            skip=(page - 1) * page_size,
            limit=page_size,
        )
        now = self._clock()
        return {
            "data": [with_derived_fields(r, now) for r in rows],
            "pagination": {
                "current_page": page,
                "total_pages": math.ceil(total / page_size),
                "total_items": total,
                "items_per_page": page_size,
            },
        }

    def count_members(self) -> int:
        return self._members.count()

    # ── Private ──

    def _resolve_creator(self, user_id: Optional[str]) -> Optional[dict[str, Any]]:
        # created_by is a weak reference: the account may be gone or foreign.
        if not user_id or self._users is None:
            return None
        try:
            account = self._users.get_by_id(user_id)
        except MalformedIdentifier:
            return None
        if account is None:
            return None
        return {"id": account["id"], "name": account["name"], "email": account["email"]}
