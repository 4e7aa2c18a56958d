# app/api/v1/endpoints/floors.py
"""
Floor endpoints.

``DELETE /floors/{id}`` takes an optional body with ``forceDelete`` and a
``relocations`` mapping of tenant id to target bed id.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, status

from app.api import deps
from app.api.v1.common import respond
from app.core.security import Actor
from app.schemas.occupancy import DeleteRequest
from app.schemas.property import FloorCreate, FloorUpdate
from app.services.occupancy import DeletionScope, DeletionService
from app.services.property import FloorService

router = APIRouter(prefix="/floors", tags=["Floors"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_floor(
    payload: FloorCreate,
    actor: Actor = Depends(deps.get_current_actor),
    service: FloorService = Depends(deps.get_floor_service),
):
    return respond(service.create_floor(payload, actor))


@router.get("")
def list_floors(
    property_id: str = Query(..., alias="propertyId"),
    actor: Actor = Depends(deps.get_current_actor),
    service: FloorService = Depends(deps.get_floor_service),
):
    return respond(service.list_floors(property_id, actor), "Floors retrieved")


@router.get("/{floor_id}")
def get_floor(
    floor_id: str,
    actor: Actor = Depends(deps.get_current_actor),
    service: FloorService = Depends(deps.get_floor_service),
):
    return respond(service.get_floor(floor_id, actor), "Floor retrieved")


@router.put("/{floor_id}")
def update_floor(
    floor_id: str,
    payload: FloorUpdate,
    actor: Actor = Depends(deps.get_current_actor),
    service: FloorService = Depends(deps.get_floor_service),
):
    return respond(service.update_floor(floor_id, payload, actor))


@router.delete("/{floor_id}")
def delete_floor(
    floor_id: str,
    options: Optional[DeleteRequest] = Body(default=None),
    actor: Actor = Depends(deps.get_current_actor),
    service: DeletionService = Depends(deps.get_deletion_service),
):
    return respond(service.delete(DeletionScope.FLOOR, floor_id, options, actor))
