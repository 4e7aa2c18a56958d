# app/models/room/room.py
"""
Room model.

``current_beds`` counts the beds created in the room and never exceeds
``capacity``. ``status`` follows bed occupancy unless the room is under
maintenance.
"""

from typing import List, Optional

from sqlalchemy import JSON, Enum, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import TimestampModel
from app.models.base.enums import RoomStatus, RoomType
from app.models.base.mixins import DescriptionMixin

__all__ = ["Room"]


class Room(TimestampModel, DescriptionMixin):
    """A room on a floor; owns its beds."""

    __tablename__ = "rooms"

    floor_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("floors.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    room_number: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
    )
    name: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )
    room_type: Mapped[RoomType] = mapped_column(
        Enum(RoomType, name="room_type_enum", native_enum=False, length=20),
        nullable=False,
        default=RoomType.SHARED,
    )
    capacity: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Maximum number of beds (1-12)",
    )
    current_beds: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Number of beds created in the room",
    )
    amenities: Mapped[List[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
    )
    status: Mapped[RoomStatus] = mapped_column(
        Enum(RoomStatus, name="room_status_enum", native_enum=False, length=20),
        nullable=False,
        default=RoomStatus.AVAILABLE,
        index=True,
    )

    # Relationships
    floor: Mapped["Floor"] = relationship(
        "Floor",
        back_populates="rooms",
    )
    beds: Mapped[List["Bed"]] = relationship(
        "Bed",
        back_populates="room",
        cascade="all, delete-orphan",
        order_by="Bed.bed_number",
    )

    __table_args__ = (
        UniqueConstraint(
            "floor_id",
            "room_number",
            name="uq_floor_room_number",
        ),
    )

    def __repr__(self) -> str:
        return f"<Room(id={self.id}, room_number={self.room_number})>"
