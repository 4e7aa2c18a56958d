# --- File: app/services/room/room_service.py ---
"""
Room service.

Rooms are created under the capacity rules and bump the floor and property
room counters. ``status`` follows bed occupancy; operators can only put a
room into MAINTENANCE or take it out again.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.events.broadcaster import Broadcaster
from app.core.security import Actor
from app.models.base.enums import RoomStatus
from app.models.room.room import Room
from app.repositories.property import FloorRepository, PropertyRepository
from app.repositories.room import BedRepository, RoomRepository
from app.schemas.room import BedResponse, RoomCreate, RoomResponse, RoomUpdate
from app.services.base import BaseService, ErrorCode, ServiceResult, TransactionAborted
from app.services.base.service_result import failure
from app.services.occupancy.capacity_validator import CapacityValidator
from app.services.occupancy.constants import ERROR_DUPLICATE_ROOM
from app.services.room.constants import (
    ERROR_FLOOR_NOT_FOUND,
    ERROR_ROOM_NOT_FOUND,
    SUCCESS_ROOM_CREATED,
    SUCCESS_ROOM_UPDATED,
)


class RoomService(BaseService[Room, RoomRepository]):
    """
    Room operations service.

    Provides:
    - Room creation with capacity validation and counter updates
    - Listing by floor, property and status
    - Capacity, number and maintenance updates
    """

    def __init__(
        self,
        repository: RoomRepository,
        db_session: Session,
        broadcaster: Optional[Broadcaster] = None,
        validator: Optional[CapacityValidator] = None,
    ):
        super().__init__(repository, db_session, broadcaster)
        self.floors = FloorRepository(db_session)
        self.properties = PropertyRepository(db_session)
        self.beds = BedRepository(db_session)
        self.validator = validator or CapacityValidator()

    def _load_room(self, room_id: str, actor: Actor, for_update: bool = False) -> ServiceResult[Room]:
        room = self.repository.find_by_id(room_id, for_update=for_update)
        if room is None:
            return ServiceResult.not_found("Room", room_id, message=ERROR_ROOM_NOT_FOUND)
        denied = self._check_access(room.floor.property, actor, "Room", room_id)
        if denied is not None:
            return denied
        return ServiceResult.success(room)

    # =========================================================================
    # Create
    # =========================================================================

    def create_room(self, request: RoomCreate, actor: Actor) -> ServiceResult[Dict[str, Any]]:
        """
        Add a room to a floor.

        Args:
            request: Room details; capacity must lie within the room ceiling
            actor: Acting user

        Returns:
            ServiceResult containing the created room or a capacity failure
        """
        try:
            with self.transaction():
                floor = self.floors.find_by_id(request.floor_id, for_update=True)
                if floor is None:
                    raise TransactionAborted(
                        ServiceResult.not_found("Floor", request.floor_id, message=ERROR_FLOOR_NOT_FOUND)
                    )
                prop = floor.property
                denied = self._check_access(prop, actor, "Floor", request.floor_id)
                if denied is not None:
                    raise TransactionAborted(denied)

                checked = self.validator.validate_room_create(
                    floor,
                    prop,
                    request.room_number,
                    request.capacity,
                    self.repository.room_number_taken(floor.id, request.room_number),
                )
                if not checked:
                    raise TransactionAborted(checked)

                data = request.model_dump()
                data.update(current_beds=0, status=RoomStatus.AVAILABLE)
                room = self.repository.create(data)
                self.floors.adjust_counters(floor, rooms=1)
                self.properties.adjust_counters(prop, rooms=1)
                self.db.flush()

            payload = RoomResponse.model_validate(room).to_wire()
            self.broadcaster.broadcast_activity(
                prop.id,
                {"type": "room_created", "id": room.id, "roomNumber": room.room_number},
            )
            self._business_event("room_created", room_id=room.id, floor_id=floor.id, actor_id=actor.id)
            return ServiceResult.success(payload, message=SUCCESS_ROOM_CREATED)

        except TransactionAborted as aborted:
            return aborted.result
        except Exception as e:
            return self._handle_exception(e, "create room")

    # =========================================================================
    # Read
    # =========================================================================

    def get_room(self, room_id: str, actor: Actor) -> ServiceResult[Dict[str, Any]]:
        loaded = self._load_room(room_id, actor)
        if not loaded:
            return loaded
        return ServiceResult.success(RoomResponse.model_validate(loaded.data).to_wire())

    def list_rooms(
        self,
        actor: Actor,
        floor_id: Optional[str] = None,
        property_id: Optional[str] = None,
        status: Optional[RoomStatus] = None,
    ) -> ServiceResult[List[Dict[str, Any]]]:
        """Rooms visible to ``actor``, narrowed by floor, property and status."""
        if floor_id is not None:
            floor = self.floors.find_by_id(floor_id)
            denied = self._check_access(floor.property if floor else None, actor, "Floor", floor_id)
            if denied is not None:
                return denied
        if property_id is not None:
            loaded = self._load_property(property_id, actor)
            if not loaded:
                return loaded
            property_ids = [property_id]
        else:
            owner_id = None if actor.is_admin else actor.id
            property_ids = [p.id for p in self.properties.find_for_owner(owner_id)]

        rooms: List[Room] = []
        for pid in property_ids:
            rooms.extend(self.repository.find_rooms(floor_id=floor_id, property_id=pid, status=status))
        return ServiceResult.success(
            [RoomResponse.model_validate(r).to_wire() for r in rooms],
            metadata={"count": len(rooms)},
        )

    def list_room_beds(self, room_id: str, actor: Actor) -> ServiceResult[List[Dict[str, Any]]]:
        loaded = self._load_room(room_id, actor)
        if not loaded:
            return loaded
        beds = self.beds.find_beds(room_id=room_id)
        return ServiceResult.success(
            [BedResponse.model_validate(b).to_wire() for b in beds],
            metadata={"count": len(beds)},
        )

    # =========================================================================
    # Update
    # =========================================================================

    def update_room(
        self,
        room_id: str,
        request: RoomUpdate,
        actor: Actor,
    ) -> ServiceResult[Dict[str, Any]]:
        try:
            with self.transaction():
                loaded = self._load_room(room_id, actor, for_update=True)
                if not loaded:
                    raise TransactionAborted(loaded)
                room = loaded.data
                changes = request.model_dump(exclude_unset=True)

                capacity = changes.get("capacity")
                if capacity is not None:
                    checked = self.validator.validate_room_capacity_update(room, capacity)
                    if not checked:
                        raise TransactionAborted(checked)

                number = changes.get("room_number")
                if number is not None and self.repository.room_number_taken(
                    room.floor_id, number, exclude_id=room.id
                ):
                    raise TransactionAborted(
                        failure(
                            ErrorCode.DUPLICATE_ROOM_NUMBER,
                            ERROR_DUPLICATE_ROOM.format(number=number),
                            field="room_number",
                            details={"constraint": "unique_room_number", "roomNumber": number},
                        )
                    )

                status = changes.pop("status", None)
                room = self.repository.update(room, changes)
                if status == RoomStatus.MAINTENANCE:
                    room.status = RoomStatus.MAINTENANCE
                elif status is not None:
                    # Leaving maintenance; occupancy decides the rest
                    occupied = self.beds.count_occupied_in_room(room.id)
                    room.status = RoomStatus.OCCUPIED if occupied else RoomStatus.AVAILABLE
                self.db.flush()

            return ServiceResult.success(
                RoomResponse.model_validate(room).to_wire(),
                message=SUCCESS_ROOM_UPDATED,
            )

        except TransactionAborted as aborted:
            return aborted.result
        except Exception as e:
            return self._handle_exception(e, "update room", room_id)
