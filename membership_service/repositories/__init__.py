# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Repository package — re-exports the storage collaborators."""
from membership_service.repositories.member_repository import MemberRepository
from membership_service.repositories.user_repository import UserRepository

__all__ = ["MemberRepository", "UserRepository"]
