# --- File: app/schemas/property/property.py ---
"""
Property schemas.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator

from app.schemas.common.base import (
    BaseCreateSchema,
    BaseResponseSchema,
    BaseUpdateSchema,
)

__all__ = [
    "PropertyCreate",
    "PropertyUpdate",
    "PropertyResponse",
]


def _validate_pincode(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    if not v.isdigit() or len(v) != 6:
        raise ValueError("Pincode must be 6 digits")
    return v


class PropertyCreate(BaseCreateSchema):
    """Schema for registering a property."""

    name: str = Field(..., min_length=1, max_length=255)
    address: Optional[str] = Field(default=None, max_length=1000)
    city: Optional[str] = Field(default=None, max_length=100)
    state: Optional[str] = Field(default=None, max_length=100)
    pincode: Optional[str] = Field(default=None, description="6-digit postal code")
    description: Optional[str] = None

    @field_validator("pincode")
    @classmethod
    def validate_pincode(cls, v: Optional[str]) -> Optional[str]:
        return _validate_pincode(v)


class PropertyUpdate(BaseUpdateSchema):
    """Partial property update."""

    non_nullable_fields = ("name",)

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    address: Optional[str] = Field(default=None, max_length=1000)
    city: Optional[str] = Field(default=None, max_length=100)
    state: Optional[str] = Field(default=None, max_length=100)
    pincode: Optional[str] = None
    description: Optional[str] = None

    @field_validator("pincode")
    @classmethod
    def validate_pincode(cls, v: Optional[str]) -> Optional[str]:
        return _validate_pincode(v)


class PropertyResponse(BaseResponseSchema):
    """Property with its denormalized totals."""

    owner_id: str
    name: str
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    description: Optional[str] = None
    total_floors: int = 0
    total_rooms: int = 0
    total_beds: int = 0
