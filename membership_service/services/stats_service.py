# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: aggregate statistics over the full member set.

``by_status`` reports the persisted status, so records that expired without
being written since still count as active. ``expiring_soon`` is evaluated
on the raw expiry date and ignores status entirely.
"""

from datetime import datetime, timedelta
from typing import Any, Callable, Optional

from membership_service.models.domain import as_utc, utcnow
from membership_service.repositories.member_repository import MemberRepository


class StatsService:
    def __init__(
        self,
        member_repo: MemberRepository,
        expiring_soon_days: int = 7,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._members = member_repo
        self._window = timedelta(days=expiring_soon_days)
        self._clock = clock

    def compute_stats(self, now: Optional[datetime] = None) -> dict[str, Any]:
        now = as_utc(now or self._clock())
        return {
            "total": self._members.count(),
            "by_status": [
                {"status": status, "count": count}
                for status, count in self._members.count_by("membership_status")
            ],
            "by_package": [
                {"package": package, "count": count}
                for package, count in self._members.count_by("package_type")
            ],
            "expiring_soon": self._members.count_expiring_between(now, now + self._window),
        }
