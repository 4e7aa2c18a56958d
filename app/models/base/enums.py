"""
Database enums mirroring schema enums.

Values are the upper-case strings used on the wire.
"""

import enum


class UserRole(str, enum.Enum):
    """User role enumeration."""
    ADMIN = "ADMIN"
    OWNER = "OWNER"
    MANAGER = "MANAGER"


class RoomType(str, enum.Enum):
    """Room type categorization."""
    SINGLE = "SINGLE"
    SHARED = "SHARED"
    DORMITORY = "DORMITORY"


class RoomStatus(str, enum.Enum):
    """Room availability status."""
    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"
    MAINTENANCE = "MAINTENANCE"


class BedType(str, enum.Enum):
    """Bed type categorization."""
    SINGLE = "SINGLE"
    DOUBLE = "DOUBLE"
    BUNK = "BUNK"


class BedStatus(str, enum.Enum):
    """Bed occupancy status."""
    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"
    MAINTENANCE = "MAINTENANCE"
    RESERVED = "RESERVED"


class TenantStatus(str, enum.Enum):
    """Tenant lifecycle status."""
    ACTIVE = "ACTIVE"
    PENDING = "PENDING"
    VACATED = "VACATED"


class PaymentStatus(str, enum.Enum):
    """Payment status."""
    PENDING = "PENDING"
    PAID = "PAID"
    OVERDUE = "OVERDUE"


class PaymentType(str, enum.Enum):
    """Payment type categorization."""
    RENT = "RENT"
    DEPOSIT = "DEPOSIT"
    ADVANCE = "ADVANCE"
    OTHER = "OTHER"


# Payments that still count as money owed by the tenant
OUTSTANDING_PAYMENT_STATUSES = (PaymentStatus.PENDING, PaymentStatus.OVERDUE)
