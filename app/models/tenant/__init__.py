# app/models/tenant/__init__.py
"""Tenant models package."""

from app.models.tenant.tenant import Tenant

__all__ = ["Tenant"]
