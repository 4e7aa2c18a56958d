# --- File: app/schemas/property/floor.py ---
"""
Floor schemas.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from app.schemas.common.base import (
    BaseCreateSchema,
    BaseResponseSchema,
    BaseUpdateSchema,
)

__all__ = [
    "FloorCreate",
    "FloorUpdate",
    "FloorResponse",
]


class FloorCreate(BaseCreateSchema):
    """Schema for adding a floor to a property."""

    property_id: str = Field(..., description="Property the floor belongs to")
    floor_number: int = Field(..., ge=0, le=200, description="0 for the ground floor")
    name: Optional[str] = Field(default=None, max_length=100, examples=["Ground Floor"])
    description: Optional[str] = None


class FloorUpdate(BaseUpdateSchema):
    """Partial floor update."""

    non_nullable_fields = ("floor_number",)

    floor_number: Optional[int] = Field(default=None, ge=0, le=200)
    name: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = None


class FloorResponse(BaseResponseSchema):
    """Floor with its denormalized totals."""

    property_id: str
    floor_number: int
    name: Optional[str] = None
    description: Optional[str] = None
    total_rooms: int = 0
    total_beds: int = 0
