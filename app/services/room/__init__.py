"""Room and bed services."""

from app.services.room.room_service import RoomService
from app.services.room.bed_service import BedService

__all__ = ["RoomService", "BedService"]
