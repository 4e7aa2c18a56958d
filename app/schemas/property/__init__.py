"""Property and floor schemas."""

from app.schemas.property.property import PropertyCreate, PropertyUpdate, PropertyResponse
from app.schemas.property.floor import FloorCreate, FloorUpdate, FloorResponse

__all__ = [
    "PropertyCreate",
    "PropertyUpdate",
    "PropertyResponse",
    "FloorCreate",
    "FloorUpdate",
    "FloorResponse",
]
