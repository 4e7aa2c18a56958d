# app/repositories/property/property_repository.py
"""
Property repository: ownership queries, counters and ground-truth counts.
"""

from typing import Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.property import Floor, Property
from app.models.room import Bed, Room
from ..base.base_repository import BaseRepository


class PropertyRepository(BaseRepository[Property]):
    """Repository for Property entities."""

    def __init__(self, session: Session):
        super().__init__(Property, session)

    def find_for_owner(self, owner_id: Optional[str]) -> List[Property]:
        """Properties owned by ``owner_id``; all properties when None."""
        query = select(Property).order_by(Property.created_at, Property.name)
        if owner_id is not None:
            query = query.where(Property.owner_id == owner_id)
        return list(self.session.execute(query).scalars().all())

    def adjust_counters(
        self,
        prop: Property,
        floors: int = 0,
        rooms: int = 0,
        beds: int = 0,
    ) -> None:
        """Shift the denormalized totals by the given deltas."""
        prop.total_floors = (prop.total_floors or 0) + floors
        prop.total_rooms = (prop.total_rooms or 0) + rooms
        prop.total_beds = (prop.total_beds or 0) + beds

    def actual_counts(self, property_id: str) -> Dict[str, int]:
        """Count floors, rooms and beds straight from the tables."""
        floors = self.session.execute(
            select(func.count(Floor.id)).where(Floor.property_id == property_id)
        ).scalar()
        rooms = self.session.execute(
            select(func.count(Room.id))
            .join(Floor, Room.floor_id == Floor.id)
            .where(Floor.property_id == property_id)
        ).scalar()
        beds = self.session.execute(
            select(func.count(Bed.id))
            .join(Room, Bed.room_id == Room.id)
            .join(Floor, Room.floor_id == Floor.id)
            .where(Floor.property_id == property_id)
        ).scalar()
        return {"floors": floors, "rooms": rooms, "beds": beds}
