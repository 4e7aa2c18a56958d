# app/api/v1/endpoints/rooms.py
"""
Room endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, status

from app.api import deps
from app.api.v1.common import respond
from app.core.security import Actor
from app.models.base.enums import RoomStatus
from app.schemas.occupancy import DeleteRequest
from app.schemas.room import RoomCreate, RoomUpdate
from app.services.occupancy import DeletionScope, DeletionService
from app.services.room import RoomService

router = APIRouter(prefix="/rooms", tags=["Rooms"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_room(
    payload: RoomCreate,
    actor: Actor = Depends(deps.get_current_actor),
    service: RoomService = Depends(deps.get_room_service),
):
    return respond(service.create_room(payload, actor))


@router.get("")
def list_rooms(
    floor_id: Optional[str] = Query(default=None, alias="floorId"),
    property_id: Optional[str] = Query(default=None, alias="propertyId"),
    room_status: Optional[RoomStatus] = Query(default=None, alias="status"),
    actor: Actor = Depends(deps.get_current_actor),
    service: RoomService = Depends(deps.get_room_service),
):
    result = service.list_rooms(actor, floor_id=floor_id, property_id=property_id, status=room_status)
    return respond(result, "Rooms retrieved")


@router.get("/{room_id}")
def get_room(
    room_id: str,
    actor: Actor = Depends(deps.get_current_actor),
    service: RoomService = Depends(deps.get_room_service),
):
    return respond(service.get_room(room_id, actor), "Room retrieved")


@router.get("/{room_id}/beds")
def list_room_beds(
    room_id: str,
    actor: Actor = Depends(deps.get_current_actor),
    service: RoomService = Depends(deps.get_room_service),
):
    return respond(service.list_room_beds(room_id, actor), "Beds retrieved")


@router.put("/{room_id}")
def update_room(
    room_id: str,
    payload: RoomUpdate,
    actor: Actor = Depends(deps.get_current_actor),
    service: RoomService = Depends(deps.get_room_service),
):
    return respond(service.update_room(room_id, payload, actor))


@router.delete("/{room_id}")
def delete_room(
    room_id: str,
    options: Optional[DeleteRequest] = Body(default=None),
    actor: Actor = Depends(deps.get_current_actor),
    service: DeletionService = Depends(deps.get_deletion_service),
):
    return respond(service.delete(DeletionScope.ROOM, room_id, options, actor))
