# --- File: app/schemas/dashboard/dashboard.py ---
"""
Dashboard schemas: occupancy summary and counter verification.
"""

from __future__ import annotations

from typing import Dict, List

from pydantic import Field

from app.schemas.common.base import BaseSchema

__all__ = [
    "OccupancySummary",
    "CounterDrift",
    "CounterReport",
]


class OccupancySummary(BaseSchema):
    """Point-in-time occupancy figures for one property."""

    property_id: str
    property_name: str
    total_floors: int
    total_rooms: int
    total_beds: int
    beds_by_status: Dict[str, int]
    occupied_beds: int
    available_beds: int
    occupancy_rate: float = Field(..., description="Occupied beds as a percentage of all beds")
    tenants_by_status: Dict[str, int]
    outstanding_payments: float


class CounterDrift(BaseSchema):
    """A stored counter that disagrees with the counted rows."""

    entity_type: str
    entity_id: str
    label: str
    counter: str
    stored: int
    actual: int


class CounterReport(BaseSchema):
    """
    Stored aggregates compared with query counts.

    ``drifts`` lists each disagreeing counter; after a reconcile it lists the
    counters that were rewritten.
    """

    property_id: str
    consistent: bool
    checked: int
    drifts: List[CounterDrift] = Field(default_factory=list)
    inconsistent_beds: int = 0
    reconciled: bool = False
