"""
Column mixins shared by properties and tenants.
"""

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, validates


class AddressMixin:
    """Postal address of a property or a tenant's permanent address."""

    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, index=True)
    state: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    pincode: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)


class ContactMixin:
    """
    Phone numbers and email.

    Format checks live in the request schemas; the model only normalizes
    what it stores.
    """

    phone: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    alternate_phone: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    @validates('email')
    def _normalize_email(self, key: str, value: Optional[str]) -> Optional[str]:
        return value.strip().lower() if value else None

    @validates('phone', 'alternate_phone')
    def _normalize_phone(self, key: str, value: Optional[str]) -> Optional[str]:
        return value.strip() if value else value


class DescriptionMixin:
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
