"""Property and floor repositories."""

from app.repositories.property.property_repository import PropertyRepository
from app.repositories.property.floor_repository import FloorRepository

__all__ = ["PropertyRepository", "FloorRepository"]
