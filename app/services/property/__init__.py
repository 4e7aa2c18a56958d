"""Property and floor services."""

from app.services.property.property_service import PropertyService
from app.services.property.floor_service import FloorService

__all__ = ["PropertyService", "FloorService"]
