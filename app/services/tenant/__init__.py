"""Tenant services."""

from app.services.tenant.tenant_service import TenantService

__all__ = ["TenantService"]
