# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: member CRUD, renewal, and statistics endpoints.
Thin HTTP layer — delegates ALL logic to LifecycleService / StatsService.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from membership_service.core.config import settings
from membership_service.core.dependencies import get_lifecycle_service, get_stats_service
from membership_service.core.errors import MembershipServiceError
from membership_service.core.security import Actor, get_current_actor
from membership_service.schemas.member import (
    DeletedMember,
    MemberCreate,
    MemberDetail,
    MemberOut,
    MemberStats,
    MemberUpdate,
    PaginatedMembers,
    RenewRequest,
)
from membership_service.services.lifecycle_service import LifecycleService
from membership_service.services.stats_service import StatsService

router = APIRouter(
    prefix="/api/v1/members",
    tags=["Members"],
    dependencies=[Depends(get_current_actor)],
)


def _http_error(exc: MembershipServiceError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=exc.message)


@router.get("", response_model=PaginatedMembers)
def list_members(
    search: Optional[str] = None,
    status: Optional[str] = None,
    package_type: Optional[str] = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    service: LifecycleService = Depends(get_lifecycle_service),
):
    """List members with search, status/package filters, and pagination."""
    try:
        return service.list_members(
            search=search or None,
            status=status.lower() if status else None,
            package_type=package_type.lower() if package_type else None,
            page=page,
            page_size=limit,
        )
    except MembershipServiceError as exc:
        raise _http_error(exc)


@router.get("/stats", response_model=MemberStats)
def get_member_stats(service: StatsService = Depends(get_stats_service)):
    """Counts by status and package, plus memberships expiring soon."""
    try:
        return service.compute_stats()
    except MembershipServiceError as exc:
        raise _http_error(exc)


@router.post("", status_code=201, response_model=MemberOut)
def create_member(
    payload: MemberCreate,
    actor: Actor = Depends(get_current_actor),
    service: LifecycleService = Depends(get_lifecycle_service),
):
    try:
        return service.create_member(payload.model_dump(), actor_id=actor.id)
    except MembershipServiceError as exc:
        raise _http_error(exc)


@router.get("/{member_id}", response_model=MemberDetail)
def get_member(
    member_id: str,
    service: LifecycleService = Depends(get_lifecycle_service),
):
    try:
        return service.get_member(member_id)
    except MembershipServiceError as exc:
        raise _http_error(exc)


@router.put("/{member_id}", response_model=MemberOut)
def update_member(
    member_id: str,
    payload: MemberUpdate,
    service: LifecycleService = Depends(get_lifecycle_service),
):
    """Partially update a member; omitted fields keep their stored values."""
    try:
        return service.update_member(member_id, payload.to_changes())
    except MembershipServiceError as exc:
        raise _http_error(exc)


@router.delete("/{member_id}", response_model=DeletedMember)
def delete_member(
    member_id: str,
    service: LifecycleService = Depends(get_lifecycle_service),
):
    try:
        return service.delete_member(member_id)
    except MembershipServiceError as exc:
        raise _http_error(exc)


@router.post("/{member_id}/renew", response_model=MemberOut)
def renew_membership(
    member_id: str,
    payload: RenewRequest,
    service: LifecycleService = Depends(get_lifecycle_service),
):
    try:
        return service.renew_membership(
            member_id,
            package_type=payload.package_type,
            payment_amount=payload.payment_amount,
            payment_method=payload.payment_method,
            transaction_id=payload.transaction_id,
        )
    except MembershipServiceError as exc:
        raise _http_error(exc)
