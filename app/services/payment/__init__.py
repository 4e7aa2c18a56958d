"""Payment services."""

from app.services.payment.payment_service import PaymentService

__all__ = ["PaymentService"]
