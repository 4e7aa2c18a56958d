# app/api/v1/endpoints/properties.py
"""
Property endpoints.
"""

from fastapi import APIRouter, Depends, status

from app.api import deps
from app.api.v1.common import respond
from app.core.security import Actor
from app.schemas.property import PropertyCreate, PropertyUpdate
from app.services.occupancy import DeletionService
from app.services.property import PropertyService

router = APIRouter(prefix="/properties", tags=["Properties"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_property(
    payload: PropertyCreate,
    actor: Actor = Depends(deps.get_current_actor),
    service: PropertyService = Depends(deps.get_property_service),
):
    return respond(service.create_property(payload, actor))


@router.get("")
def list_properties(
    actor: Actor = Depends(deps.get_current_actor),
    service: PropertyService = Depends(deps.get_property_service),
):
    return respond(service.list_properties(actor), "Properties retrieved")


@router.get("/{property_id}")
def get_property(
    property_id: str,
    actor: Actor = Depends(deps.get_current_actor),
    service: PropertyService = Depends(deps.get_property_service),
):
    return respond(service.get_property(property_id, actor), "Property retrieved")


@router.put("/{property_id}")
def update_property(
    property_id: str,
    payload: PropertyUpdate,
    actor: Actor = Depends(deps.get_current_actor),
    service: PropertyService = Depends(deps.get_property_service),
):
    return respond(service.update_property(property_id, payload, actor))


@router.delete("/{property_id}")
def delete_property(
    property_id: str,
    actor: Actor = Depends(deps.get_current_actor),
    service: DeletionService = Depends(deps.get_deletion_service),
):
    """Delete a property with everything in it; refused while tenants are ACTIVE."""
    return respond(service.delete_property(property_id, actor))
