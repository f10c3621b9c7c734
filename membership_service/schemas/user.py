# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Pydantic schemas for user accounts."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from membership_service.models.domain import USER_ROLES
from membership_service.schemas.member import EMAIL_PATTERN


def _check_role(v: Optional[str]) -> Optional[str]:
    if v is not None:
        v = v.lower().strip()
        if v not in USER_ROLES:
            raise ValueError(f"role must be one of {USER_ROLES}")
    return v


class UserCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=2, max_length=100)
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=255)
    role: str = "staff"

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: str) -> str:
        return _check_role(v)


class UserUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(None, min_length=2, max_length=100)
    email: Optional[str] = Field(None, pattern=EMAIL_PATTERN, max_length=255)
    role: Optional[str] = None

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: Optional[str]) -> Optional[str]:
        return _check_role(v)


class UserOut(BaseModel):
    id: str
    name: str
    email: str
    role: str
    last_login: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
