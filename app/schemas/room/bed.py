# --- File: app/schemas/room/bed.py ---
"""
Bed schemas: CRUD payloads and occupancy requests.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from pydantic import Field, field_validator

from app.models.base.enums import BedStatus, BedType
from app.schemas.common.base import (
    BaseCreateSchema,
    BaseResponseSchema,
    BaseSchema,
    BaseUpdateSchema,
)

__all__ = [
    "BedCreate",
    "BedUpdate",
    "BedResponse",
    "BedAssignRequest",
    "BedStatusUpdate",
]


def _normalize_bed_number(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = " ".join(v.split()).upper()
    if not v:
        raise ValueError("Bed number cannot be empty")
    return v


def _normalize_bed_type(v: Any) -> Any:
    if isinstance(v, str):
        return v.strip().upper()
    return v


class BedCreate(BaseCreateSchema):
    """
    Schema for adding a bed to a room.

    The minimum rent is a business rule checked by the capacity validator.
    """

    room_id: str = Field(..., description="Room the bed belongs to")
    bed_number: str = Field(..., min_length=1, max_length=10, examples=["A", "B1"])
    bed_type: BedType = Field(default=BedType.SINGLE)
    rent: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    deposit: Decimal = Field(default=Decimal("0"), ge=0, max_digits=10, decimal_places=2)
    description: Optional[str] = None

    @field_validator("bed_number")
    @classmethod
    def validate_bed_number(cls, v: str) -> str:
        return _normalize_bed_number(v)

    @field_validator("bed_type", mode="before")
    @classmethod
    def normalize_bed_type(cls, v: Any) -> Any:
        return _normalize_bed_type(v)


class BedUpdate(BaseUpdateSchema):
    """
    Partial bed update.

    Occupancy is changed through assign, unassign and status requests only.
    """

    non_nullable_fields = ("bed_number", "bed_type", "rent", "deposit")

    bed_number: Optional[str] = Field(default=None, min_length=1, max_length=10)
    bed_type: Optional[BedType] = None
    rent: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    deposit: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    description: Optional[str] = None

    @field_validator("bed_number")
    @classmethod
    def validate_bed_number(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_bed_number(v)

    @field_validator("bed_type", mode="before")
    @classmethod
    def normalize_bed_type(cls, v: Any) -> Any:
        return _normalize_bed_type(v)


class BedResponse(BaseResponseSchema):
    """Bed as returned by the API."""

    room_id: str
    bed_number: str
    bed_type: BedType
    rent: float
    deposit: float
    status: BedStatus
    tenant_id: Optional[str] = None
    description: Optional[str] = None


class BedAssignRequest(BaseSchema):
    """Assign a tenant (by id) to a bed."""

    tenant_id: str = Field(..., description="Tenant id")


class BedStatusUpdate(BaseSchema):
    """Operator status change between AVAILABLE, MAINTENANCE and RESERVED."""

    status: BedStatus

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper()
        return v
