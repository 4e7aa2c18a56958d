# app/api/v1/endpoints/beds.py
"""
Bed endpoints: CRUD, occupancy and operator status changes.

A blocked ``DELETE /beds/{id}`` answers 400 with the occupant, their current
bed and the candidate beds, plus ``requiresAction`` and ``actions`` at the
top level of the body.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, status

from app.api import deps
from app.api.v1.common import respond
from app.core.security import Actor
from app.models.base.enums import BedStatus
from app.schemas.occupancy import DeleteRequest
from app.schemas.room import BedAssignRequest, BedCreate, BedStatusUpdate, BedUpdate
from app.services.occupancy import DeletionScope, DeletionService, OccupancyService
from app.services.room import BedService

router = APIRouter(prefix="/beds", tags=["Beds"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_bed(
    payload: BedCreate,
    actor: Actor = Depends(deps.get_current_actor),
    service: BedService = Depends(deps.get_bed_service),
):
    return respond(service.create_bed(payload, actor))


@router.get("")
def list_beds(
    room_id: Optional[str] = Query(default=None, alias="roomId"),
    property_id: Optional[str] = Query(default=None, alias="propertyId"),
    bed_status: Optional[BedStatus] = Query(default=None, alias="status"),
    actor: Actor = Depends(deps.get_current_actor),
    service: BedService = Depends(deps.get_bed_service),
):
    result = service.list_beds(actor, room_id=room_id, property_id=property_id, status=bed_status)
    return respond(result, "Beds retrieved")


@router.get("/{bed_id}")
def get_bed(
    bed_id: str,
    actor: Actor = Depends(deps.get_current_actor),
    service: BedService = Depends(deps.get_bed_service),
):
    return respond(service.get_bed(bed_id, actor), "Bed retrieved")


@router.put("/{bed_id}")
def update_bed(
    bed_id: str,
    payload: BedUpdate,
    actor: Actor = Depends(deps.get_current_actor),
    service: BedService = Depends(deps.get_bed_service),
):
    return respond(service.update_bed(bed_id, payload, actor))


@router.delete("/{bed_id}")
def delete_bed(
    bed_id: str,
    options: Optional[DeleteRequest] = Body(default=None),
    actor: Actor = Depends(deps.get_current_actor),
    service: DeletionService = Depends(deps.get_deletion_service),
):
    return respond(service.delete(DeletionScope.BED, bed_id, options, actor))


# --- Occupancy -----------------------------------------------------------------

@router.put("/{bed_id}/assign")
def assign_bed(
    bed_id: str,
    payload: BedAssignRequest,
    actor: Actor = Depends(deps.get_current_actor),
    service: OccupancyService = Depends(deps.get_occupancy_service),
):
    return respond(service.assign(bed_id, payload.tenant_id, actor))


@router.put("/{bed_id}/unassign")
def unassign_bed(
    bed_id: str,
    actor: Actor = Depends(deps.get_current_actor),
    service: OccupancyService = Depends(deps.get_occupancy_service),
):
    return respond(service.unassign(bed_id, actor))


@router.put("/{bed_id}/status")
def update_bed_status(
    bed_id: str,
    payload: BedStatusUpdate,
    actor: Actor = Depends(deps.get_current_actor),
    service: OccupancyService = Depends(deps.get_occupancy_service),
):
    return respond(service.set_bed_status(bed_id, payload.status, actor))
