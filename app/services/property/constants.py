"""
Property and floor service constants.
"""

from typing import Final

# Error messages
ERROR_FLOOR_NOT_FOUND: Final[str] = "Floor not found or access denied"

# Success messages
SUCCESS_PROPERTY_CREATED: Final[str] = "Property created successfully"
SUCCESS_PROPERTY_UPDATED: Final[str] = "Property updated successfully"
SUCCESS_FLOOR_CREATED: Final[str] = "Floor created successfully"
SUCCESS_FLOOR_UPDATED: Final[str] = "Floor updated successfully"
