# app/repositories/room/room_repository.py
"""
Room repository.
"""

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.base.enums import RoomStatus
from app.models.property import Floor
from app.models.room import Room
from ..base.base_repository import BaseRepository


class RoomRepository(BaseRepository[Room]):
    """Repository for Room entities."""

    def __init__(self, session: Session):
        super().__init__(Room, session)

    def find_rooms(
        self,
        floor_id: Optional[str] = None,
        property_id: Optional[str] = None,
        status: Optional[RoomStatus] = None,
    ) -> List[Room]:
        """Rooms filtered by floor, property and status, in floor/room order."""
        query = select(Room).join(Floor, Room.floor_id == Floor.id)
        if floor_id is not None:
            query = query.where(Room.floor_id == floor_id)
        if property_id is not None:
            query = query.where(Floor.property_id == property_id)
        if status is not None:
            query = query.where(Room.status == status)
        query = query.order_by(Floor.floor_number, Room.room_number)
        return list(self.session.execute(query).scalars().all())

    def room_number_taken(
        self,
        floor_id: str,
        room_number: str,
        exclude_id: Optional[str] = None,
    ) -> bool:
        return self.exists(
            {"floor_id": floor_id, "room_number": room_number},
            exclude_id=exclude_id,
        )

    def count_for_property(self, property_id: str) -> int:
        return self.session.execute(
            select(func.count(Room.id))
            .join(Floor, Room.floor_id == Floor.id)
            .where(Floor.property_id == property_id)
        ).scalar()

    def adjust_beds(self, room: Room, delta: int) -> None:
        room.current_beds = (room.current_beds or 0) + delta
