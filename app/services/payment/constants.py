"""
Payment service constants.
"""

from typing import Final

# Error messages
ERROR_PAYMENT_NOT_FOUND: Final[str] = "Payment not found or access denied"
ERROR_ALREADY_PAID: Final[str] = "Payment is already marked as paid"
ERROR_PAID_NOT_EDITABLE: Final[str] = "Paid payments cannot be modified"
ERROR_PAID_NOT_DELETABLE: Final[str] = "Cannot delete a paid payment"
ERROR_MARK_PAID_ONLY: Final[str] = "Use mark-paid to settle a payment"
ERROR_BED_OUTSIDE_PROPERTY: Final[str] = "Bed does not belong to the tenant's property"

# Success messages
SUCCESS_PAYMENT_CREATED: Final[str] = "Payment recorded successfully"
SUCCESS_PAYMENT_UPDATED: Final[str] = "Payment updated successfully"
SUCCESS_PAYMENT_PAID: Final[str] = "Payment marked as paid"
SUCCESS_PAYMENT_DELETED: Final[str] = "Payment deleted successfully"
