"""
Tenant service constants.
"""

from typing import Final

# Error messages
ERROR_TENANT_NOT_FOUND: Final[str] = "Tenant not found"
ERROR_DUPLICATE_TENANT_ID: Final[str] = "Tenant ID {code} already exists in this property"
ERROR_JOINING_AFTER_LEAVING: Final[str] = "Joining date cannot be after the leaving date {leaving_date}"
ERROR_PENDING_PAYMENTS: Final[str] = (
    "Cannot delete tenant with {count} pending payment(s). "
    "Please settle or remove them first."
)

# Success messages
SUCCESS_TENANT_CREATED: Final[str] = "Tenant created successfully"
SUCCESS_TENANT_UPDATED: Final[str] = "Tenant updated successfully"
SUCCESS_TENANT_DELETED: Final[str] = "Tenant deleted successfully"
