# app/repositories/payment/payment_repository.py
"""
Payment repository.
"""

from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.base.enums import OUTSTANDING_PAYMENT_STATUSES, PaymentStatus
from app.models.payment import Payment
from ..base.base_repository import BaseRepository


class PaymentRepository(BaseRepository[Payment]):
    """Repository for Payment entities."""

    def __init__(self, session: Session):
        super().__init__(Payment, session)

    def find_payments(
        self,
        property_ids: Optional[List[str]] = None,
        tenant_id: Optional[str] = None,
        status: Optional[PaymentStatus] = None,
    ) -> List[Payment]:
        query = select(Payment)
        if property_ids is not None:
            query = query.where(Payment.property_id.in_(property_ids))
        if tenant_id is not None:
            query = query.where(Payment.tenant_id == tenant_id)
        if status is not None:
            query = query.where(Payment.status == status)
        query = query.order_by(Payment.due_date.desc(), Payment.created_at.desc())
        return list(self.session.execute(query).scalars().all())

    def find_outstanding_for_tenant(self, tenant_id: str) -> List[Payment]:
        """PENDING and OVERDUE payments of a tenant, oldest due first."""
        query = (
            select(Payment)
            .where(Payment.tenant_id == tenant_id)
            .where(Payment.status.in_(OUTSTANDING_PAYMENT_STATUSES))
            .order_by(Payment.due_date)
        )
        return list(self.session.execute(query).scalars().all())

    def outstanding_total_for_property(self, property_id: str) -> Decimal:
        query = (
            select(func.coalesce(func.sum(Payment.amount), 0))
            .where(Payment.property_id == property_id)
            .where(Payment.status.in_(OUTSTANDING_PAYMENT_STATUSES))
        )
        return Decimal(str(self.session.execute(query).scalar()))
