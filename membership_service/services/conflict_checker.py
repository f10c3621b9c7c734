# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: email/phone uniqueness check run before every member write.

This is an optimistic pre-check. Two concurrent writers can both pass it;
the unique constraints in storage settle that race and the repository maps
the violation to DuplicateMember.
"""

from typing import Any, Optional

from membership_service.core.errors import DuplicateMember
from membership_service.core.logging import get_logger
from membership_service.metrics.prometheus import DUPLICATE_REJECTIONS
from membership_service.models.domain import normalise_email
from membership_service.repositories.member_repository import MemberRepository

logger = get_logger(__name__)


class ConflictChecker:
    def __init__(self, member_repo: MemberRepository) -> None:
        self._members = member_repo

    def find_conflict(
        self,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        exclude_id: Optional[str] = None,
    ) -> Optional[dict[str, Any]]:
        """Return the first other record holding ``email`` or ``phone``."""
        email = normalise_email(email)
        phone = phone.strip() if phone else None
        if not email and not phone:
            return None
        return self._members.find_by_email_or_phone(email, phone, exclude_id)

    def ensure_unique(
        self,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        exclude_id: Optional[str] = None,
    ) -> None:
        """Raise DuplicateMember when another record already holds either value."""
        conflict = self.find_conflict(email, phone, exclude_id)
        if conflict is None:
            return
        DUPLICATE_REJECTIONS.inc()
        logger.warning("Duplicate member rejected: conflicting_id=%s", conflict["id"])
        if exclude_id:
            raise DuplicateMember("Email or phone already in use by another member")
        raise DuplicateMember("Member with this email or phone already exists")
