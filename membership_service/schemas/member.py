# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Pydantic request/response schemas for members and their statistics."""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from membership_service.models.domain import MEMBERSHIP_STATUSES, PACKAGE_TYPES

EMAIL_PATTERN = r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$"
PHONE_PATTERN = r"^[0-9]{10}$"

# Optional documents an update may clear by sending null.
CLEARABLE_FIELDS: frozenset[str] = frozenset({"emergency_contact", "medical_info"})


def _check_package(v: Optional[str]) -> Optional[str]:
    if v is not None:
        v = v.lower().strip()
        if v not in PACKAGE_TYPES:
            raise ValueError(f"package_type must be one of {PACKAGE_TYPES}")
    return v


def _check_status(v: Optional[str]) -> Optional[str]:
    if v is not None:
        v = v.lower().strip()
        if v not in MEMBERSHIP_STATUSES:
            raise ValueError(f"membership_status must be one of {MEMBERSHIP_STATUSES}")
    return v


class EmergencyContact(BaseModel):
    name: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    relation: Optional[str] = Field(None, max_length=50)


class MedicalInfo(BaseModel):
    blood_group: Optional[str] = Field(None, max_length=5)
    allergies: List[str] = []
    medical_conditions: List[str] = []


class MemberCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    full_name: str = Field(..., min_length=2, max_length=100)
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=255)
    phone: str = Field(..., pattern=PHONE_PATTERN)
    address: str = Field(..., min_length=5, max_length=200)
    package_type: str = "basic"
    membership_status: str = "active"
    emergency_contact: Optional[EmergencyContact] = None
    medical_info: Optional[MedicalInfo] = None

    @field_validator("email")
    @classmethod
    def normalise_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("package_type")
    @classmethod
    def validate_package(cls, v: str) -> str:
        return _check_package(v)

    @field_validator("membership_status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        return _check_status(v)


class MemberUpdate(BaseModel):
    """Partial update: only the fields present in the request are applied."""

    model_config = ConfigDict(str_strip_whitespace=True)

    full_name: Optional[str] = Field(None, min_length=2, max_length=100)
    email: Optional[str] = Field(None, pattern=EMAIL_PATTERN, max_length=255)
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    address: Optional[str] = Field(None, min_length=5, max_length=200)
    package_type: Optional[str] = None
    membership_status: Optional[str] = None
    emergency_contact: Optional[EmergencyContact] = None
    medical_info: Optional[MedicalInfo] = None

    @field_validator("email")
    @classmethod
    def normalise_email(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v is not None else v

    @field_validator("package_type")
    @classmethod
    def validate_package(cls, v: Optional[str]) -> Optional[str]:
        return _check_package(v)

    @field_validator("membership_status")
    @classmethod
    def validate_status(cls, v: Optional[str]) -> Optional[str]:
        return _check_status(v)

    def to_changes(self) -> dict:
        """Fields sent in the request. A null is kept only for clearable fields."""
        sent = self.model_dump(exclude_unset=True)
        return {k: v for k, v in sent.items() if v is not None or k in CLEARABLE_FIELDS}


class RenewRequest(BaseModel):
    package_type: str
    payment_amount: Optional[float] = Field(None, ge=0)
    payment_method: Optional[str] = Field(None, max_length=50)
    transaction_id: Optional[str] = Field(None, max_length=100)

    @field_validator("package_type")
    @classmethod
    def validate_package(cls, v: str) -> str:
        return _check_package(v)


class Payment(BaseModel):
    amount: float
    date: datetime
    payment_method: Optional[str] = None
    transaction_id: Optional[str] = None


class CreatorSummary(BaseModel):
    id: str
    name: str
    email: str


class MemberOut(BaseModel):
    id: str
    full_name: str
    email: str
    phone: str
    address: str
    package_type: str
    membership_status: str
    join_date: datetime
    expiry_date: datetime
    emergency_contact: Optional[EmergencyContact] = None
    medical_info: Optional[MedicalInfo] = None
    payment_history: List[Payment] = []
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    is_expired: bool
    days_remaining: int


class MemberDetail(MemberOut):
    created_by_user: Optional[CreatorSummary] = None


class Pagination(BaseModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int


class PaginatedMembers(BaseModel):
    data: List[MemberOut]
    pagination: Pagination


class StatusCount(BaseModel):
    status: str
    count: int


class PackageCount(BaseModel):
    package: str
    count: int


class MemberStats(BaseModel):
    total: int
    by_status: List[StatusCount]
    by_package: List[PackageCount]
    expiring_soon: int


class DeletedMember(BaseModel):
    id: str
