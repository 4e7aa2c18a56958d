# app/api/v1/endpoints/tenants.py
"""
Tenant endpoints, including bed moves and vacating.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.api import deps
from app.api.v1.common import respond
from app.core.security import Actor
from app.models.base.enums import TenantStatus
from app.schemas.tenant import (
    TenantAssignBedRequest,
    TenantCreate,
    TenantUpdate,
    TenantVacateRequest,
)
from app.services.occupancy import OccupancyService
from app.services.tenant import TenantService

router = APIRouter(prefix="/tenants", tags=["Tenants"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_tenant(
    payload: TenantCreate,
    actor: Actor = Depends(deps.get_current_actor),
    service: TenantService = Depends(deps.get_tenant_service),
):
    return respond(service.create_tenant(payload, actor))


@router.get("")
def list_tenants(
    property_id: Optional[str] = Query(default=None, alias="propertyId"),
    tenant_status: Optional[TenantStatus] = Query(default=None, alias="status"),
    actor: Actor = Depends(deps.get_current_actor),
    service: TenantService = Depends(deps.get_tenant_service),
):
    result = service.list_tenants(actor, property_id=property_id, status=tenant_status)
    return respond(result, "Tenants retrieved")


@router.get("/{tenant_id}")
def get_tenant(
    tenant_id: str,
    actor: Actor = Depends(deps.get_current_actor),
    service: TenantService = Depends(deps.get_tenant_service),
):
    return respond(service.get_tenant(tenant_id, actor), "Tenant retrieved")


@router.put("/{tenant_id}")
def update_tenant(
    tenant_id: str,
    payload: TenantUpdate,
    actor: Actor = Depends(deps.get_current_actor),
    service: TenantService = Depends(deps.get_tenant_service),
):
    return respond(service.update_tenant(tenant_id, payload, actor))


@router.delete("/{tenant_id}")
def delete_tenant(
    tenant_id: str,
    actor: Actor = Depends(deps.get_current_actor),
    service: TenantService = Depends(deps.get_tenant_service),
):
    return respond(service.delete_tenant(tenant_id, actor))


@router.put("/{tenant_id}/assign-bed")
def assign_tenant_bed(
    tenant_id: str,
    payload: TenantAssignBedRequest,
    actor: Actor = Depends(deps.get_current_actor),
    service: OccupancyService = Depends(deps.get_occupancy_service),
):
    """Place the tenant on a bed, releasing the one they hold."""
    return respond(service.transfer(tenant_id, payload.bed_id, actor))


@router.put("/{tenant_id}/vacate")
def vacate_tenant(
    tenant_id: str,
    payload: TenantVacateRequest,
    actor: Actor = Depends(deps.get_current_actor),
    service: OccupancyService = Depends(deps.get_occupancy_service),
):
    return respond(service.vacate(tenant_id, payload.leaving_date, actor, reason=payload.reason))
