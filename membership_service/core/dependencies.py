# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
FastAPI dependency injection — wire repositories and services.
"""

from membership_service.core.config import settings
from membership_service.core.database import engine
from membership_service.models.domain import PackagePolicy
from membership_service.repositories.member_repository import MemberRepository
from membership_service.repositories.user_repository import UserRepository
from membership_service.services.conflict_checker import ConflictChecker
from membership_service.services.lifecycle_service import LifecycleService
from membership_service.services.seed_service import SeedService
from membership_service.services.stats_service import StatsService
from membership_service.services.user_service import UserService

# ── Singleton instances ──
_package_policy = PackagePolicy(
    durations=settings.PACKAGE_DURATIONS,
    prices=settings.PACKAGE_PRICES,
    default_days=settings.DEFAULT_PACKAGE_DAYS,
)
_member_repo = MemberRepository(engine)
_user_repo = UserRepository(engine)
_conflict_checker = ConflictChecker(_member_repo)

_lifecycle_service = LifecycleService(
    member_repo=_member_repo,
    conflict_checker=_conflict_checker,
    policy=_package_policy,
    user_repo=_user_repo,
)
_stats_service = StatsService(
    member_repo=_member_repo,
    expiring_soon_days=settings.EXPIRING_SOON_DAYS,
)
_user_service = UserService(_user_repo)
_seed_service = SeedService(_user_service, _lifecycle_service)


# ── FastAPI dependency functions ──
def get_lifecycle_service() -> LifecycleService:
    return _lifecycle_service


def get_stats_service() -> StatsService:
    return _stats_service


def get_user_service() -> UserService:
    return _user_service


def get_member_repo() -> MemberRepository:
    return _member_repo


def get_seed_service() -> SeedService:
    return _seed_service
