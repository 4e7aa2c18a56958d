# --- File: app/schemas/tenant/tenant.py ---
"""
Tenant schemas.

``tenantId`` on the wire is the human readable tenant code (``tenant_code``);
the record's own identifier is ``id``.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from app.models.base.enums import BedStatus, TenantStatus
from app.schemas.common.base import (
    BaseCreateSchema,
    BaseResponseSchema,
    BaseSchema,
    BaseUpdateSchema,
)

__all__ = [
    "TenantCreate",
    "TenantUpdate",
    "TenantResponse",
    "TenantBedBrief",
    "TenantAssignBedRequest",
    "TenantVacateRequest",
]


def _validate_phone(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    digits = v.replace(" ", "").replace("-", "")
    if digits.startswith("+"):
        digits = digits[1:]
    if not digits.isdigit() or not 10 <= len(digits) <= 13:
        raise ValueError("Phone number must contain 10 to 13 digits")
    return v


class TenantCreate(BaseCreateSchema):
    """Schema for registering a tenant, optionally straight onto a bed."""

    property_id: str
    tenant_code: str = Field(..., alias="tenantId", min_length=1, max_length=50)
    full_name: str = Field(..., min_length=1, max_length=255)
    phone: str
    email: Optional[EmailStr] = None
    alternate_phone: Optional[str] = None
    emergency_contact: Optional[str] = Field(default=None, max_length=255)
    address: Optional[str] = None
    city: Optional[str] = Field(default=None, max_length=100)
    state: Optional[str] = Field(default=None, max_length=100)
    pincode: Optional[str] = Field(default=None, max_length=10)
    occupation: Optional[str] = Field(default=None, max_length=100)
    id_proof_type: Optional[str] = Field(default=None, max_length=50)
    id_proof_number: Optional[str] = Field(default=None, max_length=50)
    joining_date: date
    bed_id: Optional[str] = Field(default=None, description="Bed to assign on creation")

    @field_validator("phone", "alternate_phone")
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> Optional[str]:
        return _validate_phone(v)


class TenantUpdate(BaseUpdateSchema):
    """
    Partial tenant update.

    Status, bed and leaving date change through the occupancy operations.
    """

    non_nullable_fields = ("full_name", "phone", "joining_date")

    full_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    alternate_phone: Optional[str] = None
    emergency_contact: Optional[str] = Field(default=None, max_length=255)
    address: Optional[str] = None
    city: Optional[str] = Field(default=None, max_length=100)
    state: Optional[str] = Field(default=None, max_length=100)
    pincode: Optional[str] = Field(default=None, max_length=10)
    occupation: Optional[str] = Field(default=None, max_length=100)
    id_proof_type: Optional[str] = Field(default=None, max_length=50)
    id_proof_number: Optional[str] = Field(default=None, max_length=50)
    joining_date: Optional[date] = None

    @field_validator("phone", "alternate_phone")
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> Optional[str]:
        return _validate_phone(v)


class TenantBedBrief(BaseSchema):
    """The bed a tenant currently holds."""

    id: str
    bed_number: str
    room_id: str
    status: BedStatus


class TenantResponse(BaseResponseSchema):
    """Tenant as returned by the API."""

    property_id: str
    tenant_code: str = Field(..., alias="tenantId")
    full_name: str
    phone: str
    email: Optional[str] = None
    alternate_phone: Optional[str] = None
    emergency_contact: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    occupation: Optional[str] = None
    id_proof_type: Optional[str] = None
    id_proof_number: Optional[str] = None
    status: TenantStatus
    joining_date: date
    leaving_date: Optional[date] = None
    vacate_reason: Optional[str] = None
    bed: Optional[TenantBedBrief] = None


class TenantAssignBedRequest(BaseSchema):
    """Move a tenant onto a bed, freeing any bed they hold."""

    bed_id: str


class TenantVacateRequest(BaseSchema):
    """Vacate request; the leaving date may not be in the future."""

    leaving_date: date
    reason: Optional[str] = Field(default=None, max_length=1000)
