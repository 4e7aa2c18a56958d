"""
Room and bed service constants.
"""

from typing import Final

# Error messages
ERROR_ROOM_NOT_FOUND: Final[str] = "Room not found or access denied"
ERROR_FLOOR_NOT_FOUND: Final[str] = "Floor not found or access denied"
ERROR_BED_NOT_FOUND: Final[str] = "Bed not found or access denied"

# Success messages
SUCCESS_ROOM_CREATED: Final[str] = "Room created successfully"
SUCCESS_ROOM_UPDATED: Final[str] = "Room updated successfully"
SUCCESS_BED_CREATED: Final[str] = "Bed created successfully"
SUCCESS_BED_UPDATED: Final[str] = "Bed updated successfully"
