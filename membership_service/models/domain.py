# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain rules — pure functions over member records, NO FastAPI or storage dependency.

A member record is a plain dict as produced by ``MemberRepository``. The
functions here never touch storage; callers decide when to persist.
"""

import math
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional

PACKAGE_TYPES: tuple[str, ...] = ("trial", "basic", "premium", "elite")
MEMBERSHIP_STATUSES: tuple[str, ...] = ("active", "inactive", "suspended", "expired")
USER_ROLES: tuple[str, ...] = ("admin", "staff")

DEFAULT_PACKAGE = "basic"
DEFAULT_STATUS = "active"

SECONDS_PER_DAY = 24 * 60 * 60


def as_utc(value: datetime) -> datetime:
    """Normalise a datetime to aware UTC; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PackagePolicy:
    """Maps a package tier to its duration in days and its price tier."""

    def __init__(
        self,
        durations: Mapping[str, int],
        prices: Optional[Mapping[str, float]] = None,
        default_days: int = 30,
    ) -> None:
        self._durations = dict(durations)
        self._prices = dict(prices or {})
        self._default_days = default_days

    @property
    def packages(self) -> tuple[str, ...]:
        return tuple(self._durations)

    def duration_days(self, package_type: Optional[str]) -> int:
        # Unknown or missing tiers fall back to the basic duration.
        return self._durations.get(package_type, self._default_days)

    def price(self, package_type: Optional[str]) -> Optional[float]:
        return self._prices.get(package_type)


def compute_expiry(base: datetime, package_type: Optional[str], policy: PackagePolicy) -> datetime:
    """Return ``base`` advanced by the package duration."""
    return as_utc(base) + timedelta(days=policy.duration_days(package_type))


def is_expired(record: Mapping[str, Any], now: datetime) -> bool:
    return as_utc(record["expiry_date"]) < as_utc(now)


def days_remaining(record: Mapping[str, Any], now: datetime) -> int:
    """Whole days until expiry, rounded up; negative once expired."""
    delta = as_utc(record["expiry_date"]) - as_utc(now)
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def correct_status(record: Mapping[str, Any], now: datetime) -> dict[str, Any]:
    """Flip an active record whose expiry has passed to ``expired``.

    Returns a copy; every other status is left untouched.
    """
    corrected = dict(record)
    if corrected.get("membership_status") == "active" and is_expired(corrected, now):
        corrected["membership_status"] = "expired"
    return corrected


def with_derived_fields(record: Mapping[str, Any], now: datetime) -> dict[str, Any]:
    """Attach the read-time ``is_expired`` / ``days_remaining`` values."""
    enriched = dict(record)
    enriched["is_expired"] = is_expired(record, now)
    enriched["days_remaining"] = days_remaining(record, now)
    return enriched


def normalise_email(email: Optional[str]) -> Optional[str]:
    if email is None:
        return None
    return email.strip().lower()
