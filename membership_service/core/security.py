# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Caller identity supplied by the upstream gateway.

The gateway authenticates the request and forwards the actor's id and role
as headers; nothing here re-validates credentials.
"""

from fastapi import Depends, HTTPException, Request
from pydantic import BaseModel

from membership_service.core.config import settings
from membership_service.models.domain import USER_ROLES


class Actor(BaseModel):
    """The authenticated caller of a request."""
    id: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def get_current_actor(request: Request) -> Actor:
    actor_id = request.headers.get(settings.ACTOR_ID_HEADER, "").strip()
    if not actor_id:
        raise HTTPException(status_code=401, detail="Authentication required. Please login.")
    role = request.headers.get(settings.ACTOR_ROLE_HEADER, "").strip().lower()
    if role not in USER_ROLES:
        raise HTTPException(status_code=403, detail="Access denied. Unknown role.")
    return Actor(id=actor_id, role=role)


def require_admin(actor: Actor = Depends(get_current_actor)) -> Actor:
    if not actor.is_admin:
        raise HTTPException(status_code=403, detail="Access denied. Admin privileges required.")
    return actor
