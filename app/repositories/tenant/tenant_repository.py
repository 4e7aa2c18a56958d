# app/repositories/tenant/tenant_repository.py
"""
Tenant repository.
"""

from typing import Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.base.enums import TenantStatus
from app.models.tenant import Tenant
from ..base.base_repository import BaseRepository


class TenantRepository(BaseRepository[Tenant]):
    """Repository for Tenant entities."""

    def __init__(self, session: Session):
        super().__init__(Tenant, session)

    def find_tenants(
        self,
        property_ids: Optional[List[str]] = None,
        status: Optional[TenantStatus] = None,
    ) -> List[Tenant]:
        """Tenants of the given properties, newest first."""
        query = select(Tenant)
        if property_ids is not None:
            query = query.where(Tenant.property_id.in_(property_ids))
        if status is not None:
            query = query.where(Tenant.status == status)
        query = query.order_by(Tenant.created_at.desc(), Tenant.full_name)
        return list(self.session.execute(query).scalars().all())

    def tenant_code_taken(
        self,
        property_id: str,
        tenant_code: str,
        exclude_id: Optional[str] = None,
    ) -> bool:
        return self.exists(
            {"property_id": property_id, "tenant_code": tenant_code},
            exclude_id=exclude_id,
        )

    def count_active(self, property_id: str) -> int:
        return self.count({"property_id": property_id, "status": TenantStatus.ACTIVE})

    def count_by_status(self, property_id: str) -> Dict[str, int]:
        query = (
            select(Tenant.status, func.count(Tenant.id))
            .where(Tenant.property_id == property_id)
            .group_by(Tenant.status)
        )
        counts = {status.value: 0 for status in TenantStatus}
        for status, total in self.session.execute(query).all():
            key = status.value if isinstance(status, TenantStatus) else str(status)
            counts[key] = total
        return counts
