# app/models/room/bed.py
"""
Bed model.

A bed is OCCUPIED exactly when it carries a tenant. ``tenant_id`` is unique,
so a tenant can hold at most one bed.
"""

from decimal import Decimal
from typing import List, Optional

from sqlalchemy import Enum, ForeignKey, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import TimestampModel
from app.models.base.enums import BedStatus, BedType
from app.models.base.mixins import DescriptionMixin

__all__ = ["Bed"]


class Bed(TimestampModel, DescriptionMixin):
    """
    Individual bed entity within a room.
    """

    __tablename__ = "beds"

    # Room Association
    room_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Bed Identification
    bed_number: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
    )
    bed_type: Mapped[BedType] = mapped_column(
        Enum(BedType, name="bed_type_enum", native_enum=False, length=20),
        nullable=False,
        default=BedType.SINGLE,
    )

    # Pricing
    rent: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
    )
    deposit: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        default=Decimal("0"),
    )

    # Occupancy
    status: Mapped[BedStatus] = mapped_column(
        Enum(BedStatus, name="bed_status_enum", native_enum=False, length=20),
        nullable=False,
        default=BedStatus.AVAILABLE,
        index=True,
    )
    tenant_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("tenants.id", ondelete="SET NULL"),
        nullable=True,
        unique=True,
    )

    # Relationships
    room: Mapped["Room"] = relationship(
        "Room",
        back_populates="beds",
    )
    tenant: Mapped[Optional["Tenant"]] = relationship(
        "Tenant",
        back_populates="bed",
        foreign_keys=[tenant_id],
    )
    payments: Mapped[List["Payment"]] = relationship(
        "Payment",
        back_populates="bed",
    )

    __table_args__ = (
        UniqueConstraint(
            "room_id",
            "bed_number",
            name="uq_room_bed_number",
        ),
    )

    @property
    def is_occupied(self) -> bool:
        return self.tenant_id is not None

    def __repr__(self) -> str:
        return f"<Bed(id={self.id}, bed_number={self.bed_number}, status={self.status})>"
