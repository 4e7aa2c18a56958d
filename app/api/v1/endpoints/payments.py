# app/api/v1/endpoints/payments.py
"""
Payment endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, status

from app.api import deps
from app.api.v1.common import respond
from app.core.security import Actor
from app.models.base.enums import PaymentStatus
from app.schemas.payment import PaymentCreate, PaymentMarkPaid, PaymentUpdate
from app.services.payment import PaymentService

router = APIRouter(prefix="/payments", tags=["Payments"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_payment(
    payload: PaymentCreate,
    actor: Actor = Depends(deps.get_current_actor),
    service: PaymentService = Depends(deps.get_payment_service),
):
    return respond(service.create_payment(payload, actor))


@router.get("")
def list_payments(
    tenant_id: Optional[str] = Query(default=None, alias="tenantId"),
    property_id: Optional[str] = Query(default=None, alias="propertyId"),
    payment_status: Optional[PaymentStatus] = Query(default=None, alias="status"),
    actor: Actor = Depends(deps.get_current_actor),
    service: PaymentService = Depends(deps.get_payment_service),
):
    result = service.list_payments(
        actor,
        tenant_id=tenant_id,
        property_id=property_id,
        status=payment_status,
    )
    return respond(result, "Payments retrieved")


@router.get("/{payment_id}")
def get_payment(
    payment_id: str,
    actor: Actor = Depends(deps.get_current_actor),
    service: PaymentService = Depends(deps.get_payment_service),
):
    return respond(service.get_payment(payment_id, actor), "Payment retrieved")


@router.put("/{payment_id}")
def update_payment(
    payment_id: str,
    payload: PaymentUpdate,
    actor: Actor = Depends(deps.get_current_actor),
    service: PaymentService = Depends(deps.get_payment_service),
):
    return respond(service.update_payment(payment_id, payload, actor))


@router.put("/{payment_id}/mark-paid")
def mark_payment_paid(
    payment_id: str,
    payload: Optional[PaymentMarkPaid] = Body(default=None),
    actor: Actor = Depends(deps.get_current_actor),
    service: PaymentService = Depends(deps.get_payment_service),
):
    paid_date = payload.paid_date if payload is not None else None
    return respond(service.mark_paid(payment_id, actor, paid_date=paid_date))


@router.delete("/{payment_id}")
def delete_payment(
    payment_id: str,
    actor: Actor = Depends(deps.get_current_actor),
    service: PaymentService = Depends(deps.get_payment_service),
):
    return respond(service.delete_payment(payment_id, actor))
