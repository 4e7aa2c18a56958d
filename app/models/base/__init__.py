"""
Base models package.

Provides base classes, mixins and enums for all database models.
"""

from app.models.base.base_model import (
    Base,
    BaseModel,
    TimestampModel,
)

from app.models.base.mixins import (
    AddressMixin,
    ContactMixin,
    DescriptionMixin,
)

from app.models.base.enums import (
    UserRole,
    RoomType,
    RoomStatus,
    BedType,
    BedStatus,
    TenantStatus,
    PaymentStatus,
    PaymentType,
    OUTSTANDING_PAYMENT_STATUSES,
)

__all__ = [
    "Base",
    "BaseModel",
    "TimestampModel",
    "AddressMixin",
    "ContactMixin",
    "DescriptionMixin",
    "UserRole",
    "RoomType",
    "RoomStatus",
    "BedType",
    "BedStatus",
    "TenantStatus",
    "PaymentStatus",
    "PaymentType",
    "OUTSTANDING_PAYMENT_STATUSES",
]
