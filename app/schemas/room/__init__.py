"""Room and bed schemas."""

from app.schemas.room.room import RoomCreate, RoomUpdate, RoomResponse
from app.schemas.room.bed import (
    BedCreate,
    BedUpdate,
    BedResponse,
    BedAssignRequest,
    BedStatusUpdate,
)

__all__ = [
    "RoomCreate",
    "RoomUpdate",
    "RoomResponse",
    "BedCreate",
    "BedUpdate",
    "BedResponse",
    "BedAssignRequest",
    "BedStatusUpdate",
]
