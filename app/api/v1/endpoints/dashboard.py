# app/api/v1/endpoints/dashboard.py
"""
Dashboard endpoints: occupancy summary and counter verification.
"""

from fastapi import APIRouter, Depends

from app.api import deps
from app.api.v1.common import respond
from app.core.security import Actor
from app.services.dashboard import DashboardService

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/properties/{property_id}/occupancy")
def property_occupancy(
    property_id: str,
    actor: Actor = Depends(deps.get_current_actor),
    service: DashboardService = Depends(deps.get_dashboard_service),
):
    return respond(service.occupancy_summary(property_id, actor), "Occupancy summary")


@router.get("/properties/{property_id}/counters")
def verify_counters(
    property_id: str,
    actor: Actor = Depends(deps.get_current_actor),
    service: DashboardService = Depends(deps.get_dashboard_service),
):
    return respond(service.verify_counters(property_id, actor))


@router.post("/properties/{property_id}/counters/reconcile")
def reconcile_counters(
    property_id: str,
    actor: Actor = Depends(deps.get_current_actor),
    service: DashboardService = Depends(deps.get_dashboard_service),
):
    return respond(service.reconcile_counters(property_id, actor))
