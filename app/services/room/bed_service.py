# --- File: app/services/room/bed_service.py ---
"""
Bed service: creation under the room ceiling, lookup, listing and edits.

Occupancy changes go through the occupancy service and deletes through the
deletion service.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.events.broadcaster import Broadcaster
from app.core.logging import get_logger
from app.core.security import Actor
from app.models.base.enums import BedStatus
from app.models.room.bed import Bed
from app.repositories.property import FloorRepository, PropertyRepository
from app.repositories.room import BedRepository, RoomRepository
from app.schemas.room import BedCreate, BedResponse, BedUpdate
from app.services.base import BaseService, ServiceResult, TransactionAborted
from app.services.occupancy.capacity_validator import CapacityValidator
from app.services.occupancy.relocation_planner import bed_location
from app.services.room.constants import (
    ERROR_BED_NOT_FOUND,
    ERROR_ROOM_NOT_FOUND,
    SUCCESS_BED_CREATED,
    SUCCESS_BED_UPDATED,
)

logger = get_logger(__name__)


class BedService(BaseService[Bed, BedRepository]):
    """Beds of a room."""

    def __init__(
        self,
        repository: BedRepository,
        db_session: Session,
        broadcaster: Optional[Broadcaster] = None,
        validator: Optional[CapacityValidator] = None,
    ):
        super().__init__(repository, db_session, broadcaster)
        self.rooms = RoomRepository(db_session)
        self.floors = FloorRepository(db_session)
        self.properties = PropertyRepository(db_session)
        self.validator = validator or CapacityValidator()

    def _load_bed(self, bed_id: str, actor: Actor) -> ServiceResult[Bed]:
        bed = self.repository.find_by_id(bed_id)
        if bed is None:
            return ServiceResult.not_found("Bed", bed_id, message=ERROR_BED_NOT_FOUND)
        denied = self._check_access(bed.room.floor.property, actor, "Bed", bed_id)
        if denied is not None:
            return denied
        return ServiceResult.success(bed)

    def _payload(self, bed: Bed) -> Dict[str, Any]:
        payload = BedResponse.model_validate(bed).to_wire()
        payload["location"] = bed_location(bed)
        return payload

    def create_bed(self, request: BedCreate, actor: Actor) -> ServiceResult[Dict[str, Any]]:
        """
        Add a bed to a room.

        The room row is locked so two concurrent creates cannot both take
        the last slot. Room, floor and property bed counters move together
        with the insert.
        """
        try:
            with self.transaction():
                room = self.rooms.find_by_id(request.room_id, for_update=True)
                if room is None:
                    raise TransactionAborted(
                        ServiceResult.not_found("Room", request.room_id, message=ERROR_ROOM_NOT_FOUND)
                    )
                floor = room.floor
                prop = floor.property
                denied = self._check_access(prop, actor, "Room", request.room_id)
                if denied is not None:
                    raise TransactionAborted(denied)

                checked = self.validator.validate_bed_create(
                    room,
                    request.bed_number,
                    self.repository.bed_number_taken(room.id, request.bed_number),
                    request.rent,
                )
                if not checked:
                    logger.info(
                        f"Bed create rejected for room {room.id}: {checked.message}",
                        extra={"error_code": checked.error_code.value},
                    )
                    raise TransactionAborted(checked)

                data = request.model_dump()
                data["status"] = BedStatus.AVAILABLE
                bed = self.repository.create(data)
                self.rooms.adjust_beds(room, 1)
                self.floors.adjust_counters(floor, beds=1)
                self.properties.adjust_counters(prop, beds=1)
                self.db.flush()

            payload = self._payload(bed)
            self.broadcaster.broadcast_bed_update(prop.id, payload)
            self._business_event(
                "bed_created",
                bed_id=bed.id,
                room_id=room.id,
                rent=str(bed.rent),
                actor_id=actor.id,
            )
            return ServiceResult.success(payload, message=SUCCESS_BED_CREATED)

        except TransactionAborted as aborted:
            return aborted.result
        except Exception as e:
            return self._handle_exception(e, "create bed")

    def get_bed(self, bed_id: str, actor: Actor) -> ServiceResult[Dict[str, Any]]:
        loaded = self._load_bed(bed_id, actor)
        if not loaded:
            return loaded
        return ServiceResult.success(self._payload(loaded.data))

    def list_beds(
        self,
        actor: Actor,
        room_id: Optional[str] = None,
        property_id: Optional[str] = None,
        status: Optional[BedStatus] = None,
    ) -> ServiceResult[List[Dict[str, Any]]]:
        """Beds in building order: floor, then room, then bed number."""
        if room_id is not None:
            room = self.rooms.find_by_id(room_id)
            denied = self._check_access(room.floor.property if room else None, actor, "Room", room_id)
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

        beds: List[Bed] = []
        for pid in property_ids:
            beds.extend(self.repository.find_beds(property_id=pid, room_id=room_id, status=status))
        return ServiceResult.success(
            [self._payload(b) for b in beds],
            metadata={"count": len(beds)},
        )

    def update_bed(
        self,
        bed_id: str,
        request: BedUpdate,
        actor: Actor,
    ) -> ServiceResult[Dict[str, Any]]:
        try:
            with self.transaction():
                loaded = self._load_bed(bed_id, actor)
                if not loaded:
                    raise TransactionAborted(loaded)
                bed = loaded.data
                changes = request.model_dump(exclude_unset=True)

                number = changes.get("bed_number")
                checked = self.validator.validate_bed_update(
                    bed,
                    new_number=number,
                    new_number_taken=(
                        number is not None
                        and self.repository.bed_number_taken(bed.room_id, number, exclude_id=bed.id)
                    ),
                    rent=changes.get("rent"),
                )
                if not checked:
                    raise TransactionAborted(checked)

                bed = self.repository.update(bed, changes)

            payload = self._payload(bed)
            self.broadcaster.broadcast_bed_update(self.repository.property_id_of(bed), payload)
            return ServiceResult.success(payload, message=SUCCESS_BED_UPDATED)

        except TransactionAborted as aborted:
            return aborted.result
        except Exception as e:
            return self._handle_exception(e, "update bed", bed_id)
