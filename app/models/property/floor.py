# app/models/property/floor.py
"""
Floor model.
"""

from typing import List, Optional

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import TimestampModel
from app.models.base.mixins import DescriptionMixin

__all__ = ["Floor"]


class Floor(TimestampModel, DescriptionMixin):
    """A floor of a property; owns its rooms."""

    __tablename__ = "floors"

    property_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    floor_number: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    name: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )

    # Counters
    total_rooms: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_beds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    property: Mapped["Property"] = relationship(
        "Property",
        back_populates="floors",
    )
    rooms: Mapped[List["Room"]] = relationship(
        "Room",
        back_populates="floor",
        cascade="all, delete-orphan",
        order_by="Room.room_number",
    )

    __table_args__ = (
        UniqueConstraint(
            "property_id",
            "floor_number",
            name="uq_property_floor_number",
        ),
    )

    def __repr__(self) -> str:
        return f"<Floor(id={self.id}, floor_number={self.floor_number})>"
