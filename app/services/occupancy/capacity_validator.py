# --- File: app/services/occupancy/capacity_validator.py ---
"""
Capacity checks run before any create or update that grows a count.

The validator is pure: callers pass the loaded parents and the result of
their uniqueness lookups, and get back a ``ServiceResult``. Failures carry
the violated rule in ``details.constraint`` and a message meant to be shown
to the operator as is.
"""

from decimal import Decimal
from typing import Any, Dict, Optional

from app.config.settings import Settings, settings as default_settings
from app.models.property.floor import Floor
from app.models.property.property import Property
from app.models.room.bed import Bed
from app.models.room.room import Room
from app.services.base.service_result import ErrorCode, ServiceResult, failure
from app.services.occupancy.constants import (
    ERROR_CAPACITY_BELOW_BEDS,
    ERROR_DUPLICATE_BED,
    ERROR_DUPLICATE_FLOOR,
    ERROR_DUPLICATE_ROOM,
    ERROR_INVALID_CAPACITY,
    ERROR_MAX_FLOORS,
    ERROR_MAX_ROOMS,
    ERROR_MIN_RENT,
    ERROR_ROOM_FULL,
)

__all__ = ["CapacityValidator"]


def _violation(
    code: ErrorCode,
    message: str,
    constraint: str,
    field: Optional[str] = None,
    **details: Any,
) -> ServiceResult:
    payload: Dict[str, Any] = {"constraint": constraint}
    payload.update(details)
    return failure(code, message, field=field, details=payload)


class CapacityValidator:
    """
    Floor, room and bed ceilings.

    Limits come from settings so deployments can tighten them; the defaults
    are a 12 bed room ceiling, a minimum rent of 1000 and no floor or room
    quota per property.
    """

    def __init__(self, config: Optional[Settings] = None):
        self.config = config or default_settings

    # -------------------------------------------------------------------------
    # Floors
    # -------------------------------------------------------------------------

    def validate_floor_create(
        self,
        prop: Property,
        floor_number: int,
        floor_number_taken: bool,
    ) -> ServiceResult:
        limit = self.config.MAX_FLOORS_PER_PROPERTY
        if limit is not None and (prop.total_floors or 0) >= limit:
            return _violation(
                ErrorCode.CAPACITY_EXCEEDED,
                ERROR_MAX_FLOORS.format(limit=limit),
                "max_floors_per_property",
                limit=limit,
                current=prop.total_floors,
            )
        if floor_number_taken:
            return _violation(
                ErrorCode.DUPLICATE_FLOOR_NUMBER,
                ERROR_DUPLICATE_FLOOR.format(number=floor_number),
                "unique_floor_number",
                field="floor_number",
                floorNumber=floor_number,
            )
        return ServiceResult.success()

    # -------------------------------------------------------------------------
    # Rooms
    # -------------------------------------------------------------------------

    def _check_capacity_range(self, capacity: int) -> Optional[ServiceResult]:
        limit = self.config.ROOM_MAX_CAPACITY
        if capacity < 1 or capacity > limit:
            return _violation(
                ErrorCode.INVALID_CAPACITY,
                ERROR_INVALID_CAPACITY.format(limit=limit),
                "room_capacity_range",
                field="capacity",
                min=1,
                max=limit,
                requested=capacity,
            )
        return None

    def validate_room_create(
        self,
        floor: Floor,
        prop: Property,
        room_number: str,
        capacity: int,
        room_number_taken: bool,
    ) -> ServiceResult:
        out_of_range = self._check_capacity_range(capacity)
        if out_of_range is not None:
            return out_of_range

        limit = self.config.MAX_ROOMS_PER_PROPERTY
        if limit is not None and (prop.total_rooms or 0) >= limit:
            return _violation(
                ErrorCode.CAPACITY_EXCEEDED,
                ERROR_MAX_ROOMS.format(limit=limit),
                "max_rooms_per_property",
                limit=limit,
                current=prop.total_rooms,
            )
        if room_number_taken:
            return _violation(
                ErrorCode.DUPLICATE_ROOM_NUMBER,
                ERROR_DUPLICATE_ROOM.format(number=room_number),
                "unique_room_number",
                field="room_number",
                roomNumber=room_number,
                floorId=floor.id,
            )
        return ServiceResult.success()

    def validate_room_capacity_update(self, room: Room, new_capacity: int) -> ServiceResult:
        out_of_range = self._check_capacity_range(new_capacity)
        if out_of_range is not None:
            return out_of_range
        if new_capacity < (room.current_beds or 0):
            return _violation(
                ErrorCode.INVALID_CAPACITY,
                ERROR_CAPACITY_BELOW_BEDS.format(count=room.current_beds),
                "capacity_not_below_current_beds",
                field="capacity",
                currentBeds=room.current_beds,
                requested=new_capacity,
            )
        return ServiceResult.success()

    # -------------------------------------------------------------------------
    # Beds
    # -------------------------------------------------------------------------

    def _check_rent(self, rent: Decimal) -> Optional[ServiceResult]:
        minimum = self.config.MIN_BED_RENT
        if Decimal(str(rent)) < Decimal(str(minimum)):
            return _violation(
                ErrorCode.INVALID_RENT,
                ERROR_MIN_RENT.format(symbol=self.config.CURRENCY_SYMBOL, amount=minimum),
                "min_bed_rent",
                field="rent",
                minimum=minimum,
            )
        return None

    def validate_bed_create(
        self,
        room: Room,
        bed_number: str,
        bed_number_taken: bool,
        rent: Decimal,
    ) -> ServiceResult:
        if (room.current_beds or 0) >= room.capacity:
            return _violation(
                ErrorCode.ROOM_FULL,
                ERROR_ROOM_FULL.format(capacity=room.capacity),
                "room_capacity",
                capacity=room.capacity,
                currentBeds=room.current_beds,
            )
        if bed_number_taken:
            return _violation(
                ErrorCode.DUPLICATE_BED_NUMBER,
                ERROR_DUPLICATE_BED.format(number=bed_number),
                "unique_bed_number",
                field="bed_number",
                bedNumber=bed_number,
                roomId=room.id,
            )
        bad_rent = self._check_rent(rent)
        if bad_rent is not None:
            return bad_rent
        return ServiceResult.success()

    def validate_bed_update(
        self,
        bed: Bed,
        new_number: Optional[str] = None,
        new_number_taken: bool = False,
        rent: Optional[Decimal] = None,
    ) -> ServiceResult:
        """Checks for a bed edit; ``None`` means the field is unchanged."""
        if new_number is not None and new_number != bed.bed_number and new_number_taken:
            return _violation(
                ErrorCode.DUPLICATE_BED_NUMBER,
                ERROR_DUPLICATE_BED.format(number=new_number),
                "unique_bed_number",
                field="bed_number",
                bedNumber=new_number,
                roomId=bed.room_id,
            )
        if rent is not None:
            bad_rent = self._check_rent(rent)
            if bad_rent is not None:
                return bad_rent
        return ServiceResult.success()
