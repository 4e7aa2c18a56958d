# app/models/property/__init__.py
"""
Property hierarchy models.

Example:
    from app.models.property import Property, Floor
"""

from app.models.property.property import Property
from app.models.property.floor import Floor

__all__ = ["Property", "Floor"]
