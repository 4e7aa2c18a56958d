# --- File: app/schemas/payment/payment.py ---
"""
Payment schemas.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import Field

from app.models.base.enums import PaymentStatus, PaymentType
from app.schemas.common.base import (
    BaseCreateSchema,
    BaseResponseSchema,
    BaseSchema,
    BaseUpdateSchema,
)

__all__ = [
    "PaymentCreate",
    "PaymentUpdate",
    "PaymentResponse",
    "PaymentMarkPaid",
]


class PaymentCreate(BaseCreateSchema):
    """Record a payment due from (or made by) a tenant."""

    tenant_id: str = Field(..., description="Tenant id")
    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    payment_type: PaymentType = Field(default=PaymentType.RENT)
    status: PaymentStatus = Field(default=PaymentStatus.PENDING)
    due_date: date
    paid_date: Optional[date] = None
    bed_id: Optional[str] = Field(
        default=None,
        description="Defaults to the tenant's current bed",
    )
    description: Optional[str] = None


class PaymentUpdate(BaseUpdateSchema):
    """Partial update of an unpaid payment."""

    non_nullable_fields = ("amount", "payment_type", "status", "due_date")

    amount: Optional[Decimal] = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    payment_type: Optional[PaymentType] = None
    status: Optional[PaymentStatus] = Field(
        default=None,
        description="PENDING or OVERDUE; use mark-paid to settle",
    )
    due_date: Optional[date] = None
    description: Optional[str] = None


class PaymentMarkPaid(BaseSchema):
    """Settle a payment."""

    paid_date: Optional[date] = Field(default=None, description="Defaults to today")


class PaymentResponse(BaseResponseSchema):
    """Payment as returned by the API."""

    tenant_id: str
    property_id: str
    bed_id: Optional[str] = None
    amount: float
    payment_type: PaymentType
    status: PaymentStatus
    due_date: date
    paid_date: Optional[date] = None
    description: Optional[str] = None
