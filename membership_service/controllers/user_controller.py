# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: user account endpoints.
Everything except the caller's own profile requires the admin role.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from membership_service.core.dependencies import get_user_service
from membership_service.core.errors import MembershipServiceError
from membership_service.core.security import Actor, get_current_actor, require_admin
from membership_service.schemas.user import UserCreate, UserOut, UserUpdate
from membership_service.services.user_service import UserService

router = APIRouter(prefix="/api/v1/users", tags=["Users"])


def _http_error(exc: MembershipServiceError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=exc.message)


@router.get("/me", response_model=UserOut)
def get_profile(
    actor: Actor = Depends(get_current_actor),
    service: UserService = Depends(get_user_service),
):
    try:
        return service.get_user(actor.id)
    except MembershipServiceError as exc:
        raise _http_error(exc)


@router.post("/me/login", response_model=UserOut)
def record_login(
    actor: Actor = Depends(get_current_actor),
    service: UserService = Depends(get_user_service),
):
    """Stamp ``last_login`` after the identity provider signed the caller in."""
    try:
        return service.record_login(actor.id)
    except MembershipServiceError as exc:
        raise _http_error(exc)


@router.get("", response_model=List[UserOut])
def list_users(
    _: Actor = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    return service.list_users()


@router.post("", status_code=201, response_model=UserOut)
def create_user(
    payload: UserCreate,
    _: Actor = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    try:
        return service.create_user(payload.name, payload.email, payload.role)
    except MembershipServiceError as exc:
        raise _http_error(exc)


@router.get("/{user_id}", response_model=UserOut)
def get_user(
    user_id: str,
    _: Actor = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    try:
        return service.get_user(user_id)
    except MembershipServiceError as exc:
        raise _http_error(exc)


@router.put("/{user_id}", response_model=UserOut)
def update_user(
    user_id: str,
    payload: UserUpdate,
    _: Actor = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    try:
        return service.update_user(user_id, payload.model_dump(exclude_unset=True, exclude_none=True))
    except MembershipServiceError as exc:
        raise _http_error(exc)


@router.delete("/{user_id}")
def delete_user(
    user_id: str,
    actor: Actor = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    try:
        return service.delete_user(user_id, actor_id=actor.id)
    except MembershipServiceError as exc:
        raise _http_error(exc)
