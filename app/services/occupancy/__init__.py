"""
Occupancy services: capacity checks, the bed state machine, relocation
planning and occupancy-aware deletes.
"""

from app.services.occupancy.capacity_validator import CapacityValidator
from app.services.occupancy.constants import DeletionScope
from app.services.occupancy.deletion_service import DeletionService
from app.services.occupancy.occupancy_service import OccupancyService
from app.services.occupancy.relocation_planner import (
    RelocationPlanner,
    bed_location,
    floor_label,
)

__all__ = [
    "CapacityValidator",
    "DeletionScope",
    "DeletionService",
    "OccupancyService",
    "RelocationPlanner",
    "bed_location",
    "floor_label",
]
