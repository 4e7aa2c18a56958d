"""Tenant schemas."""

from app.schemas.tenant.tenant import (
    TenantCreate,
    TenantUpdate,
    TenantResponse,
    TenantBedBrief,
    TenantAssignBedRequest,
    TenantVacateRequest,
)

__all__ = [
    "TenantCreate",
    "TenantUpdate",
    "TenantResponse",
    "TenantBedBrief",
    "TenantAssignBedRequest",
    "TenantVacateRequest",
]
