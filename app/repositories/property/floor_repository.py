# app/repositories/property/floor_repository.py
"""
Floor repository.
"""

from typing import Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.property import Floor
from app.models.room import Bed, Room
from ..base.base_repository import BaseRepository


class FloorRepository(BaseRepository[Floor]):
    """Repository for Floor entities."""

    def __init__(self, session: Session):
        super().__init__(Floor, session)

    def find_by_property(self, property_id: str) -> List[Floor]:
        return self.find_by_criteria({"property_id": property_id}, order_by="floor_number")

    def floor_number_taken(
        self,
        property_id: str,
        floor_number: int,
        exclude_id: Optional[str] = None,
    ) -> bool:
        return self.exists(
            {"property_id": property_id, "floor_number": floor_number},
            exclude_id=exclude_id,
        )

    def count_for_property(self, property_id: str) -> int:
        return self.count({"property_id": property_id})

    def adjust_counters(self, floor: Floor, rooms: int = 0, beds: int = 0) -> None:
        """Shift the denormalized totals by the given deltas."""
        floor.total_rooms = (floor.total_rooms or 0) + rooms
        floor.total_beds = (floor.total_beds or 0) + beds

    def actual_counts(self, floor_id: str) -> Dict[str, int]:
        """Count rooms and beds on the floor straight from the tables."""
        rooms = self.session.execute(
            select(func.count(Room.id)).where(Room.floor_id == floor_id)
        ).scalar()
        beds = self.session.execute(
            select(func.count(Bed.id))
            .join(Room, Bed.room_id == Room.id)
            .where(Room.floor_id == floor_id)
        ).scalar()
        return {"rooms": rooms, "beds": beds}
