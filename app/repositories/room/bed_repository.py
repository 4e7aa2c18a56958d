# app/repositories/room/bed_repository.py
"""
Bed repository with occupancy queries.

Listings that span rooms are ordered by floor number, room number and bed
number, ascending.
"""

from typing import Dict, Iterable, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session, contains_eager

from app.models.base.enums import BedStatus
from app.models.property import Floor
from app.models.room import Bed, Room
from ..base.base_repository import BaseRepository


class BedRepository(BaseRepository[Bed]):
    """
    Repository for Bed entities.

    Handles:
    - Bed CRUD operations
    - Property-wide listings in building order
    - Availability and occupancy lookups
    """

    def __init__(self, session: Session):
        super().__init__(Bed, session)

    def _ordered_query(self):
        return (
            select(Bed)
            .join(Bed.room)
            .join(Room.floor)
            .options(contains_eager(Bed.room).contains_eager(Room.floor))
            .order_by(Floor.floor_number, Room.room_number, Bed.bed_number)
        )

    # ============================================================================
    # LISTINGS
    # ============================================================================

    def find_beds(
        self,
        property_id: Optional[str] = None,
        room_id: Optional[str] = None,
        floor_id: Optional[str] = None,
        status: Optional[BedStatus] = None,
    ) -> List[Bed]:
        """Beds filtered by property, floor, room and status."""
        query = self._ordered_query()
        if property_id is not None:
            query = query.where(Floor.property_id == property_id)
        if floor_id is not None:
            query = query.where(Room.floor_id == floor_id)
        if room_id is not None:
            query = query.where(Bed.room_id == room_id)
        if status is not None:
            query = query.where(Bed.status == status)
        return list(self.session.execute(query).scalars().unique().all())

    def find_available(
        self,
        property_id: str,
        exclude_bed_ids: Iterable[str] = (),
        exclude_room_id: Optional[str] = None,
        exclude_floor_id: Optional[str] = None,
    ) -> List[Bed]:
        """
        AVAILABLE beds without a tenant in the property.

        Args:
            property_id: Property to search
            exclude_bed_ids: Beds to leave out
            exclude_room_id: Room whose beds are left out
            exclude_floor_id: Floor whose beds are left out
        """
        query = (
            self._ordered_query()
            .where(Floor.property_id == property_id)
            .where(Bed.status == BedStatus.AVAILABLE)
            .where(Bed.tenant_id.is_(None))
        )
        excluded = list(exclude_bed_ids)
        if excluded:
            query = query.where(Bed.id.not_in(excluded))
        if exclude_room_id is not None:
            query = query.where(Bed.room_id != exclude_room_id)
        if exclude_floor_id is not None:
            query = query.where(Room.floor_id != exclude_floor_id)
        return list(self.session.execute(query).scalars().unique().all())

    def find_by_tenant(self, tenant_id: str) -> Optional[Bed]:
        return self.find_one({"tenant_id": tenant_id})

    # ============================================================================
    # COUNTS AND CHECKS
    # ============================================================================

    def bed_number_taken(
        self,
        room_id: str,
        bed_number: str,
        exclude_id: Optional[str] = None,
    ) -> bool:
        return self.exists({"room_id": room_id, "bed_number": bed_number}, exclude_id=exclude_id)

    def count_in_room(self, room_id: str) -> int:
        return self.count({"room_id": room_id})

    def count_occupied_in_room(self, room_id: str) -> int:
        return self.count({"room_id": room_id, "status": BedStatus.OCCUPIED})

    def count_by_status(self, property_id: str) -> Dict[str, int]:
        """Bed counts per status for a property, zero-filled."""
        query = (
            select(Bed.status, func.count(Bed.id))
            .join(Room, Bed.room_id == Room.id)
            .join(Floor, Room.floor_id == Floor.id)
            .where(Floor.property_id == property_id)
            .group_by(Bed.status)
        )
        counts = {status.value: 0 for status in BedStatus}
        for status, total in self.session.execute(query).all():
            key = status.value if isinstance(status, BedStatus) else str(status)
            counts[key] = total
        return counts

    def count_inconsistent(self, property_id: str) -> int:
        """Beds whose status disagrees with their tenant link."""
        query = (
            select(Bed)
            .join(Room, Bed.room_id == Room.id)
            .join(Floor, Room.floor_id == Floor.id)
            .where(Floor.property_id == property_id)
        )
        beds = self.session.execute(query).scalars().all()
        return sum(
            1 for bed in beds
            if (bed.status == BedStatus.OCCUPIED) != (bed.tenant_id is not None)
        )

    def property_id_of(self, bed: Bed) -> str:
        return bed.room.floor.property_id
