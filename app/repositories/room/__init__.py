"""Room and bed repositories."""

from app.repositories.room.room_repository import RoomRepository
from app.repositories.room.bed_repository import BedRepository

__all__ = ["RoomRepository", "BedRepository"]
