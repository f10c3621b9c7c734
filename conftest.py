# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Shared pytest fixtures: in-memory storage and a controllable clock."""
import os

# Must be set before membership_service.core.config is first imported.
os.environ["DATABASE_URL"] = "sqlite://"

from datetime import datetime, timedelta, timezone

import pytest

from membership_service.core.database import build_engine
from membership_service.models.domain import PackagePolicy
from membership_service.models.tables import metadata
from membership_service.repositories.member_repository import MemberRepository
from membership_service.repositories.user_repository import UserRepository
from membership_service.services.conflict_checker import ConflictChecker
from membership_service.services.lifecycle_service import LifecycleService
from membership_service.services.stats_service import StatsService
from membership_service.services.user_service import UserService

START = datetime(2024, 1, 1, tzinfo=timezone.utc)


class FakeClock:
    """Returns a fixed instant until moved explicitly."""

    def __init__(self, now: datetime = START):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def set(self, now: datetime) -> None:
        self.now = now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class TickingClock:
    """Moves one second forward on every call, so insert order is observable."""

    def __init__(self, start: datetime = START):
        self._next = start

    def __call__(self) -> datetime:
        current = self._next
        self._next = current + timedelta(seconds=1)
        return current


@pytest.fixture
def engine():
    eng = build_engine("sqlite://")
    metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def policy():
    return PackagePolicy(
        durations={"trial": 7, "basic": 30, "premium": 90, "elite": 365},
        prices={"trial": 500, "basic": 2000, "premium": 5000, "elite": 15000},
        default_days=30,
    )


@pytest.fixture
def member_repo(engine):
    return MemberRepository(engine, clock=TickingClock())


@pytest.fixture
def user_repo(engine):
    return UserRepository(engine, clock=TickingClock())


@pytest.fixture
def lifecycle(member_repo, user_repo, policy, clock):
    return LifecycleService(
        member_repo=member_repo,
        conflict_checker=ConflictChecker(member_repo),
        policy=policy,
        user_repo=user_repo,
        clock=clock,
    )


@pytest.fixture
def stats(member_repo, clock):
    return StatsService(member_repo, expiring_soon_days=7, clock=clock)


@pytest.fixture
def users(user_repo, clock):
    return UserService(user_repo, clock=clock)


@pytest.fixture
def member_data():
    """Factory for valid create payloads with distinct email/phone per index."""
    def _build(i: int = 0, **overrides):
        data = {
            "full_name": f"Member {i}",
            "email": f"member{i}@gym.com",
            "phone": f"98765{i:05d}",
            "address": f"{i} Main Street, Springfield",
            "package_type": "basic",
        }
        data.update(overrides)
        return data
    return _build
