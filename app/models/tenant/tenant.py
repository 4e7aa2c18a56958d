# app/models/tenant/tenant.py
"""
Tenant model.

A tenant belongs to one property and holds at most one bed in it. The bed
side owns the link (``Bed.tenant_id``); ``Tenant.bed`` is its back-reference.
"""

from datetime import date
from typing import List, Optional

from sqlalchemy import Date, Enum, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import TimestampModel
from app.models.base.enums import TenantStatus
from app.models.base.mixins import AddressMixin, ContactMixin

__all__ = ["Tenant"]


class Tenant(TimestampModel, ContactMixin, AddressMixin):
    """Person renting a bed in a property."""

    __tablename__ = "tenants"

    property_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    tenant_code: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="Human readable tenant identifier, unique per property",
    )
    full_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    emergency_contact: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    occupation: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )
    id_proof_type: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
    )
    id_proof_number: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
    )

    # Lifecycle
    status: Mapped[TenantStatus] = mapped_column(
        Enum(TenantStatus, name="tenant_status_enum", native_enum=False, length=20),
        nullable=False,
        default=TenantStatus.PENDING,
        index=True,
    )
    joining_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
    )
    leaving_date: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
    )
    vacate_reason: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    # Relationships
    property: Mapped["Property"] = relationship(
        "Property",
        back_populates="tenants",
    )
    bed: Mapped[Optional["Bed"]] = relationship(
        "Bed",
        back_populates="tenant",
        uselist=False,
        foreign_keys="Bed.tenant_id",
    )
    payments: Mapped[List["Payment"]] = relationship(
        "Payment",
        back_populates="tenant",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        UniqueConstraint(
            "property_id",
            "tenant_code",
            name="uq_property_tenant_code",
        ),
    )

    def __repr__(self) -> str:
        return f"<Tenant(id={self.id}, tenant_code={self.tenant_code}, status={self.status})>"
