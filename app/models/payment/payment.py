# app/models/payment/payment.py
"""
Payment model.

Payments are recorded by the operator; gateway integration is out of scope.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import Date, Enum, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import TimestampModel
from app.models.base.enums import PaymentStatus, PaymentType
from app.models.base.mixins import DescriptionMixin

__all__ = ["Payment"]


class Payment(TimestampModel, DescriptionMixin):
    """Money owed or received for a tenant."""

    __tablename__ = "payments"

    tenant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    property_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    bed_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("beds.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    amount: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
    )
    payment_type: Mapped[PaymentType] = mapped_column(
        Enum(PaymentType, name="payment_type_enum", native_enum=False, length=20),
        nullable=False,
        default=PaymentType.RENT,
    )
    status: Mapped[PaymentStatus] = mapped_column(
        Enum(PaymentStatus, name="payment_status_enum", native_enum=False, length=20),
        nullable=False,
        default=PaymentStatus.PENDING,
        index=True,
    )
    due_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
    )
    paid_date: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
    )

    # Relationships
    tenant: Mapped["Tenant"] = relationship(
        "Tenant",
        back_populates="payments",
    )
    bed: Mapped[Optional["Bed"]] = relationship(
        "Bed",
        back_populates="payments",
    )

    def __repr__(self) -> str:
        return f"<Payment(id={self.id}, amount={self.amount}, status={self.status})>"
