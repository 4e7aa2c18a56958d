# --- File: app/schemas/room/room.py ---
"""
Room schemas.

Capacity limits are business rules enforced by the capacity validator, so
the schema only checks the value is an integer.
"""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import Field, field_validator

from app.models.base.enums import RoomStatus, RoomType
from app.schemas.common.base import (
    BaseCreateSchema,
    BaseResponseSchema,
    BaseUpdateSchema,
)

__all__ = [
    "RoomCreate",
    "RoomUpdate",
    "RoomResponse",
]


def _normalize_room_type(v: Any) -> Any:
    # Accept "Single", "shared", ...
    if isinstance(v, str):
        return v.strip().upper()
    return v


def _clean_amenities(v: Optional[List[str]]) -> Optional[List[str]]:
    if v is None:
        return v
    seen = []
    for item in v:
        item = item.strip()
        if item and item not in seen:
            seen.append(item)
    return seen


class RoomCreate(BaseCreateSchema):
    """Schema for adding a room to a floor."""

    floor_id: str = Field(..., description="Floor the room belongs to")
    room_number: str = Field(..., min_length=1, max_length=20, examples=["101", "G-2"])
    name: Optional[str] = Field(default=None, max_length=100)
    room_type: RoomType = Field(default=RoomType.SHARED)
    capacity: int = Field(..., description="Maximum number of beds")
    amenities: List[str] = Field(default_factory=list, examples=[["AC", "Attached Bathroom"]])
    description: Optional[str] = None

    @field_validator("room_type", mode="before")
    @classmethod
    def normalize_room_type(cls, v: Any) -> Any:
        return _normalize_room_type(v)

    @field_validator("amenities")
    @classmethod
    def clean_amenities(cls, v: List[str]) -> List[str]:
        return _clean_amenities(v)


class RoomUpdate(BaseUpdateSchema):
    """Partial room update."""

    non_nullable_fields = ("room_number", "room_type", "capacity", "amenities", "status")

    room_number: Optional[str] = Field(default=None, min_length=1, max_length=20)
    name: Optional[str] = Field(default=None, max_length=100)
    room_type: Optional[RoomType] = None
    capacity: Optional[int] = None
    amenities: Optional[List[str]] = None
    description: Optional[str] = None
    status: Optional[RoomStatus] = Field(
        default=None,
        description="Only MAINTENANCE can be set or cleared by hand",
    )

    @field_validator("room_type", mode="before")
    @classmethod
    def normalize_room_type(cls, v: Any) -> Any:
        return _normalize_room_type(v)

    @field_validator("amenities")
    @classmethod
    def clean_amenities(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _clean_amenities(v)


class RoomResponse(BaseResponseSchema):
    """Room with its bed counter."""

    floor_id: str
    room_number: str
    name: Optional[str] = None
    room_type: RoomType
    capacity: int
    current_beds: int
    amenities: List[str] = Field(default_factory=list)
    status: RoomStatus
    description: Optional[str] = None
