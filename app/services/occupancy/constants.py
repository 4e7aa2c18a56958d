"""
Occupancy service constants and messages.
"""

import enum
from typing import Final


class DeletionScope(str, enum.Enum):
    """Node of the property hierarchy a delete request targets."""
    BED = "BED"
    ROOM = "ROOM"
    FLOOR = "FLOOR"


# Remediation actions offered with a blocked delete
ACTION_RELOCATE_TENANT: Final[str] = "RELOCATE_TENANT"
ACTION_RELOCATE_TENANTS: Final[str] = "RELOCATE_TENANTS"
ACTION_RELOCATE: Final[str] = "RELOCATE"
ACTION_MANUAL_RELOCATE: Final[str] = "MANUAL_RELOCATE"
ACTION_ADD_BEDS: Final[str] = "ADD_BEDS"
ACTION_FORCE_DELETE: Final[str] = "FORCE_DELETE"

# Broadcast actions
TENANT_ACTION_ASSIGNED: Final[str] = "assigned"
TENANT_ACTION_UNASSIGNED: Final[str] = "unassigned"
TENANT_ACTION_RELOCATED: Final[str] = "relocated"
TENANT_ACTION_VACATED: Final[str] = "vacated"
TENANT_ACTION_CREATED: Final[str] = "created"
TENANT_ACTION_UPDATED: Final[str] = "updated"
TENANT_ACTION_DELETED: Final[str] = "deleted"
TENANT_ACTION_DISPLACED: Final[str] = "displaced"

# Capacity messages
ERROR_MAX_FLOORS: Final[str] = "Property has reached the maximum of {limit} floors"
ERROR_MAX_ROOMS: Final[str] = "Property has reached the maximum of {limit} rooms"
ERROR_DUPLICATE_FLOOR: Final[str] = "Floor number {number} already exists in this property"
ERROR_DUPLICATE_ROOM: Final[str] = "Room number {number} already exists on this floor"
ERROR_DUPLICATE_BED: Final[str] = "Bed number {number} already exists in this room"
ERROR_INVALID_CAPACITY: Final[str] = "Room capacity must be between 1 and {limit} beds"
ERROR_CAPACITY_BELOW_BEDS: Final[str] = (
    "Room capacity cannot be reduced below the {count} beds already in the room"
)
ERROR_ROOM_FULL: Final[str] = "Room is at full capacity ({capacity} beds). Cannot add more beds."
ERROR_MIN_RENT: Final[str] = "Bed rent must be at least {symbol}{amount}"

# Occupancy messages
ERROR_BED_NOT_FOUND: Final[str] = "Bed not found or access denied"
ERROR_TENANT_NOT_FOUND: Final[str] = "Tenant not found"
ERROR_BED_OCCUPIED: Final[str] = "Bed is already occupied"
ERROR_BED_UNAVAILABLE: Final[str] = "Bed is not available (status: {status})"
ERROR_BED_NOT_OCCUPIED: Final[str] = "Bed is not occupied"
ERROR_TENANT_HAS_BED: Final[str] = "Tenant is already assigned to bed {bed_number}"
ERROR_TENANT_VACATED: Final[str] = "Vacated tenants cannot be assigned a bed"
ERROR_CROSS_PROPERTY_ASSIGNMENT: Final[str] = "Tenant and bed belong to different properties"
ERROR_INVALID_TRANSITION: Final[str] = "Cannot change bed status from {current} to {target}"
ERROR_ALREADY_VACATED: Final[str] = "Tenant has already vacated"
ERROR_FUTURE_LEAVING_DATE: Final[str] = "Leaving date cannot be in the future"
ERROR_LEAVING_BEFORE_JOINING: Final[str] = "Leaving date cannot be before joining date"

# Deletion messages
ERROR_OCCUPIED_BED: Final[str] = "Cannot delete occupied bed. Please relocate tenant first."
ERROR_OCCUPIED_ROOM: Final[str] = (
    "Cannot delete room with {count} occupied bed(s). Please relocate tenants first."
)
ERROR_OCCUPIED_FLOOR: Final[str] = (
    "Cannot delete floor with {count} occupied bed(s). Please relocate tenants first."
)
ERROR_TARGET_NOT_FOUND: Final[str] = "Target bed for relocation not found"
ERROR_TARGET_OCCUPIED: Final[str] = "Target bed is already occupied"
ERROR_TARGET_CROSS_PROPERTY: Final[str] = "Cannot relocate tenant to a different property"
ERROR_TARGET_IN_SCOPE: Final[str] = "Target bed is part of the {scope} being deleted"
ERROR_TARGET_REUSED: Final[str] = "Target bed {bed_number} is used for more than one tenant"
ERROR_UNKNOWN_RELOCATION_TENANT: Final[str] = "Tenant {tenant_id} does not occupy a bed in this {scope}"
ERROR_ACTIVE_TENANTS: Final[str] = (
    "Cannot delete property with {count} active tenant(s). "
    "Please relocate or vacate all tenants first."
)

# Success messages
SUCCESS_BED_ASSIGNED: Final[str] = "Bed assigned successfully"
SUCCESS_BED_UNASSIGNED: Final[str] = "Bed unassigned successfully"
SUCCESS_BED_STATUS_UPDATED: Final[str] = "Bed status updated successfully"
SUCCESS_TENANT_TRANSFERRED: Final[str] = "Tenant moved to the new bed successfully"
SUCCESS_TENANT_VACATED: Final[str] = "Tenant vacated successfully"
SUCCESS_DELETED: Final[str] = "{scope} deleted successfully"
SUCCESS_DELETED_WITH_RELOCATION: Final[str] = "{scope} deleted and {count} tenant(s) relocated successfully"
SUCCESS_DELETED_FORCED: Final[str] = (
    "{scope} deleted. {count} tenant(s) were unassigned and marked as pending"
)
SUCCESS_PROPERTY_DELETED: Final[str] = "Property deleted successfully"
