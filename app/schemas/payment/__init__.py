"""Payment schemas."""

from app.schemas.payment.payment import (
    PaymentCreate,
    PaymentUpdate,
    PaymentResponse,
    PaymentMarkPaid,
)

__all__ = [
    "PaymentCreate",
    "PaymentUpdate",
    "PaymentResponse",
    "PaymentMarkPaid",
]
