# app/models/room/__init__.py
"""
Room models package.

Example:
    from app.models.room import Room, Bed
"""

from app.models.room.room import Room
from app.models.room.bed import Bed

__all__ = ["Room", "Bed"]
