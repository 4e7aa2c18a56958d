# app/models/property/property.py
"""
Property (PG/hostel building) model.

A property owns its floors and tenants. The floor, room and bed totals are
denormalized counters maintained by the services in the same transaction as
the change that moves them.
"""

from typing import List

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import TimestampModel
from app.models.base.mixins import AddressMixin, DescriptionMixin

__all__ = ["Property"]


class Property(TimestampModel, AddressMixin, DescriptionMixin):
    """PG/hostel property owned by a user."""

    __tablename__ = "properties"

    owner_id: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        index=True,
        comment="User owning the property",
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    # Counters
    total_floors: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_rooms: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_beds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    floors: Mapped[List["Floor"]] = relationship(
        "Floor",
        back_populates="property",
        cascade="all, delete-orphan",
        order_by="Floor.floor_number",
    )
    tenants: Mapped[List["Tenant"]] = relationship(
        "Tenant",
        back_populates="property",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, name={self.name})>"
