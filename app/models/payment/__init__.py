# app/models/payment/__init__.py
"""Payment models package."""

from app.models.payment.payment import Payment

__all__ = ["Payment"]
