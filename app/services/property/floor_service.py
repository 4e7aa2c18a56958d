# --- File: app/services/property/floor_service.py ---
"""
Floor service: creation under the capacity rules, lookup, listing and
updates. Floor deletion is handled by the deletion service.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.events.broadcaster import Broadcaster
from app.core.security import Actor
from app.models.property.floor import Floor
from app.repositories.property import FloorRepository, PropertyRepository
from app.schemas.property import FloorCreate, FloorResponse, FloorUpdate
from app.services.base import BaseService, ErrorCode, ServiceResult, TransactionAborted
from app.services.base.service_result import failure
from app.services.occupancy.capacity_validator import CapacityValidator
from app.services.occupancy.constants import ERROR_DUPLICATE_FLOOR
from app.services.property.constants import (
    ERROR_FLOOR_NOT_FOUND,
    SUCCESS_FLOOR_CREATED,
    SUCCESS_FLOOR_UPDATED,
)


class FloorService(BaseService[Floor, FloorRepository]):
    """Floors of a property."""

    def __init__(
        self,
        repository: FloorRepository,
        db_session: Session,
        broadcaster: Optional[Broadcaster] = None,
        validator: Optional[CapacityValidator] = None,
    ):
        super().__init__(repository, db_session, broadcaster)
        self.properties = PropertyRepository(db_session)
        self.validator = validator or CapacityValidator()

    def _load_floor(self, floor_id: str, actor: Actor) -> ServiceResult[Floor]:
        floor = self.repository.find_by_id(floor_id)
        if floor is None:
            return ServiceResult.not_found("Floor", floor_id, message=ERROR_FLOOR_NOT_FOUND)
        denied = self._check_access(floor.property, actor, "Floor", floor_id)
        if denied is not None:
            return denied
        return ServiceResult.success(floor)

    def create_floor(self, request: FloorCreate, actor: Actor) -> ServiceResult[Dict[str, Any]]:
        """
        Add a floor and bump the property's floor counter.

        Returns:
            ServiceResult containing the created floor, or a capacity failure
        """
        try:
            with self.transaction():
                loaded = self._load_property(request.property_id, actor)
                if not loaded:
                    raise TransactionAborted(loaded)
                prop = self.properties.find_by_id(request.property_id, for_update=True)

                checked = self.validator.validate_floor_create(
                    prop,
                    request.floor_number,
                    self.repository.floor_number_taken(prop.id, request.floor_number),
                )
                if not checked:
                    raise TransactionAborted(checked)

                floor = self.repository.create(request.model_dump())
                self.properties.adjust_counters(prop, floors=1)
                self.db.flush()

            payload = FloorResponse.model_validate(floor).to_wire()
            self.broadcaster.broadcast_activity(
                floor.property_id,
                {"type": "floor_created", "id": floor.id, "floorNumber": floor.floor_number},
            )
            self._business_event(
                "floor_created",
                floor_id=floor.id,
                property_id=floor.property_id,
                actor_id=actor.id,
            )
            return ServiceResult.success(payload, message=SUCCESS_FLOOR_CREATED)

        except TransactionAborted as aborted:
            return aborted.result
        except Exception as e:
            return self._handle_exception(e, "create floor")

    def get_floor(self, floor_id: str, actor: Actor) -> ServiceResult[Dict[str, Any]]:
        loaded = self._load_floor(floor_id, actor)
        if not loaded:
            return loaded
        return ServiceResult.success(FloorResponse.model_validate(loaded.data).to_wire())

    def list_floors(self, property_id: str, actor: Actor) -> ServiceResult[List[Dict[str, Any]]]:
        loaded = self._load_property(property_id, actor)
        if not loaded:
            return loaded
        floors = self.repository.find_by_property(property_id)
        return ServiceResult.success(
            [FloorResponse.model_validate(f).to_wire() for f in floors],
            metadata={"count": len(floors)},
        )

    def update_floor(
        self,
        floor_id: str,
        request: FloorUpdate,
        actor: Actor,
    ) -> ServiceResult[Dict[str, Any]]:
        try:
            with self.transaction():
                loaded = self._load_floor(floor_id, actor)
                if not loaded:
                    raise TransactionAborted(loaded)
                floor = loaded.data

                changes = request.model_dump(exclude_unset=True)
                number = changes.get("floor_number")
                if number is not None and self.repository.floor_number_taken(
                    floor.property_id, number, exclude_id=floor.id
                ):
                    raise TransactionAborted(
                        failure(
                            ErrorCode.DUPLICATE_FLOOR_NUMBER,
                            ERROR_DUPLICATE_FLOOR.format(number=number),
                            field="floor_number",
                            details={"constraint": "unique_floor_number", "floorNumber": number},
                        )
                    )
                floor = self.repository.update(floor, changes)

            return ServiceResult.success(
                FloorResponse.model_validate(floor).to_wire(),
                message=SUCCESS_FLOOR_UPDATED,
            )

        except TransactionAborted as aborted:
            return aborted.result
        except Exception as e:
            return self._handle_exception(e, "update floor", floor_id)
