"""Payment repositories."""

from app.repositories.payment.payment_repository import PaymentRepository

__all__ = ["PaymentRepository"]
