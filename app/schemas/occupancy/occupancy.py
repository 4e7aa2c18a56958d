# --- File: app/schemas/occupancy/occupancy.py ---
"""
Occupancy schemas: delete requests, relocation reports and vacate results.

Services build report payloads from these models and hand them out in
camelCase via ``to_wire()``.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import Field, model_validator

from app.models.base.enums import TenantStatus
from app.schemas.common.base import BaseSchema
from app.schemas.payment.payment import PaymentResponse

__all__ = [
    "DeleteRequest",
    "TenantSummary",
    "CurrentBed",
    "CandidateBed",
    "RemediationAction",
    "Recommendation",
    "RelocationPlan",
    "RelocationRecord",
    "DeletionOutcome",
    "PendingPaymentsSummary",
    "VacationSummary",
]


class DeleteRequest(BaseSchema):
    """
    Options for deleting a bed, room or floor that may hold tenants.

    ``relocateTenantToBedId`` is the single-bed form of ``relocations``
    (tenant id -> target bed id).
    """

    force_delete: bool = False
    relocate_tenant_to_bed_id: Optional[str] = None
    relocations: Dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def none_to_defaults(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = {k: v for k, v in data.items() if v is not None}
        return data


class TenantSummary(BaseSchema):
    """Tenant as listed in relocation reports."""

    id: str
    tenant_code: str = Field(..., alias="tenantId")
    name: str
    phone: Optional[str] = None
    status: Optional[TenantStatus] = None


class CurrentBed(BaseSchema):
    """Where a tenant sleeps now."""

    id: str
    bed_number: str
    room: str
    floor: str
    location: str


class CandidateBed(BaseSchema):
    """An AVAILABLE bed offered as a relocation target."""

    id: str
    bed_number: str
    rent: float
    room_id: str
    room_number: str
    floor_id: str
    floor_number: int
    floor_name: str
    location: str


class RemediationAction(BaseSchema):
    """A next call the client can make to resolve a blocked delete."""

    action: str
    description: str
    payload: Dict[str, Any] = Field(default_factory=dict)


class Recommendation(BaseSchema):
    action: str
    priority: int
    message: str


class RelocationPlan(BaseSchema):
    """Cardinality check of occupants against free beds."""

    can_relocate_all: bool
    shortfall: int
    available_beds: List[CandidateBed] = Field(default_factory=list)
    tenants_to_relocate: int = 0


class RelocationRecord(BaseSchema):
    tenant_id: str
    from_bed_id: str
    to_bed_id: str
    to_location: str


class DeletionOutcome(BaseSchema):
    """What a completed delete removed and who moved."""

    scope: str
    deleted_id: str
    deleted_rooms: int = 0
    deleted_beds: int = 0
    relocated: List[RelocationRecord] = Field(default_factory=list)
    displaced_tenants: List[TenantSummary] = Field(default_factory=list)


class PendingPaymentsSummary(BaseSchema):
    count: int
    total_amount: float
    payments: List[PaymentResponse] = Field(default_factory=list)


class VacationSummary(BaseSchema):
    tenant_name: str
    joining_date: date
    leaving_date: date
    days_stayed: int
    reason: Optional[str] = None
    last_location: Optional[str] = None
