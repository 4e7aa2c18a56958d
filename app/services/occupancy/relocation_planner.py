# --- File: app/services/occupancy/relocation_planner.py ---
"""
Relocation planning: free beds for displaced tenants.

Candidates are listed lowest floor first, then room number, then bed
number, so suggestions fill a building from the bottom up. Feasibility is a
plain count comparison; picking a bed per tenant is left to the operator.
"""

from typing import Any, List, Optional, Sequence

from app.models.property.floor import Floor
from app.models.room.bed import Bed
from app.repositories.room.bed_repository import BedRepository
from app.schemas.occupancy import CandidateBed, Recommendation, RelocationPlan
from app.services.occupancy.constants import (
    ACTION_ADD_BEDS,
    ACTION_FORCE_DELETE,
    ACTION_MANUAL_RELOCATE,
    DeletionScope,
)

__all__ = [
    "RelocationPlanner",
    "floor_label",
    "bed_location",
]


def floor_label(floor: Floor) -> str:
    """Display name of a floor, e.g. ``"Ground Floor"`` or ``"Floor 2"``."""
    return floor.name or f"Floor {floor.floor_number}"


def bed_location(bed: Bed) -> str:
    """``"{floor} - Room {room} - Bed {bed}"`` for a bed with its room loaded."""
    room = bed.room
    return f"{floor_label(room.floor)} - Room {room.room_number} - Bed {bed.bed_number}"


class RelocationPlanner:
    """Finds relocation targets inside a property."""

    def __init__(self, bed_repository: BedRepository):
        self.beds = bed_repository

    def find_available_beds(
        self,
        property_id: str,
        exclude_scope: Optional[DeletionScope] = None,
        exclude_id: Optional[str] = None,
    ) -> List[Bed]:
        """
        AVAILABLE beds of the property outside the excluded subtree.

        Args:
            property_id: Property to search
            exclude_scope: Kind of node whose beds are left out
            exclude_id: Id of that bed, room or floor
        """
        exclude_bed_ids: Sequence[str] = ()
        exclude_room_id = exclude_floor_id = None
        if exclude_id is not None:
            if exclude_scope == DeletionScope.BED:
                exclude_bed_ids = (exclude_id,)
            elif exclude_scope == DeletionScope.ROOM:
                exclude_room_id = exclude_id
            elif exclude_scope == DeletionScope.FLOOR:
                exclude_floor_id = exclude_id
        return self.beds.find_available(
            property_id,
            exclude_bed_ids=exclude_bed_ids,
            exclude_room_id=exclude_room_id,
            exclude_floor_id=exclude_floor_id,
        )

    @staticmethod
    def describe(bed: Bed) -> CandidateBed:
        room = bed.room
        floor = room.floor
        return CandidateBed(
            id=bed.id,
            bed_number=bed.bed_number,
            rent=float(bed.rent),
            room_id=room.id,
            room_number=room.room_number,
            floor_id=floor.id,
            floor_number=floor.floor_number,
            floor_name=floor_label(floor),
            location=bed_location(bed),
        )

    @staticmethod
    def plan_bulk_relocation(
        occupied_beds: Sequence[Any],
        available_beds: Sequence[Any],
    ) -> RelocationPlan:
        shortfall = max(len(occupied_beds) - len(available_beds), 0)
        return RelocationPlan(
            can_relocate_all=len(available_beds) >= len(occupied_beds),
            shortfall=shortfall,
            tenants_to_relocate=len(occupied_beds),
        )

    @staticmethod
    def recommendations(plan: RelocationPlan, scope: DeletionScope) -> List[Recommendation]:
        """
        Next steps for a blocked delete, most preferred first.

        Force delete is always offered last.
        """
        noun = scope.value.lower()
        steps: List[Recommendation] = []
        if plan.tenants_to_relocate - plan.shortfall > 0:
            movable = plan.tenants_to_relocate - plan.shortfall
            steps.append(
                Recommendation(
                    action=ACTION_MANUAL_RELOCATE,
                    priority=len(steps) + 1,
                    message=(
                        f"Relocate {movable} of {plan.tenants_to_relocate} tenant(s) "
                        f"to available beds before deleting this {noun}"
                    ),
                )
            )
        if plan.shortfall > 0:
            steps.append(
                Recommendation(
                    action=ACTION_ADD_BEDS,
                    priority=len(steps) + 1,
                    message=f"Add {plan.shortfall} more bed(s) elsewhere in the property",
                )
            )
        steps.append(
            Recommendation(
                action=ACTION_FORCE_DELETE,
                priority=len(steps) + 1,
                message=(
                    f"Force delete the {noun}; its tenants are unassigned "
                    "and marked as pending"
                ),
            )
        )
        return steps
