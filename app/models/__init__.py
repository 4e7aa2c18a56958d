# models/__init__.py
"""
ORM models. Importing this package registers every mapped class on ``Base``.
"""
from app.models.base import Base
from app.models.property import Property, Floor
from app.models.room import Room, Bed
from app.models.tenant import Tenant
from app.models.payment import Payment

__all__ = [
    "Base",
    "Property",
    "Floor",
    "Room",
    "Bed",
    "Tenant",
    "Payment",
]
