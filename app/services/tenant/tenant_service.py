# --- File: app/services/tenant/tenant_service.py ---
"""
Tenant service: registration, lookup, listing, contact updates and removal.

A tenant registered with a ``bed_id`` is placed on that bed in the same
transaction, using the occupancy rules; such a tenant starts ACTIVE, any
other starts PENDING. Bed moves and vacating live in the occupancy service.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.events.broadcaster import Broadcaster
from app.core.security import Actor
from app.models.base.enums import TenantStatus
from app.models.tenant.tenant import Tenant
from app.repositories.payment import PaymentRepository
from app.repositories.property import PropertyRepository
from app.repositories.room import BedRepository
from app.repositories.tenant import TenantRepository
from app.schemas.tenant import TenantCreate, TenantResponse, TenantUpdate
from app.services.base import BaseService, ErrorCode, ServiceResult, TransactionAborted
from app.services.base.service_result import failure
from app.services.occupancy.constants import (
    TENANT_ACTION_CREATED,
    TENANT_ACTION_DELETED,
    TENANT_ACTION_UPDATED,
)
from app.services.occupancy.occupancy_service import OccupancyService
from app.services.tenant.constants import (
    ERROR_DUPLICATE_TENANT_ID,
    ERROR_JOINING_AFTER_LEAVING,
    ERROR_PENDING_PAYMENTS,
    SUCCESS_TENANT_CREATED,
    SUCCESS_TENANT_DELETED,
    SUCCESS_TENANT_UPDATED,
)


class TenantService(BaseService[Tenant, TenantRepository]):
    """
    Tenant management service.

    Delete is refused while the tenant has PENDING or OVERDUE payments; a
    deleted tenant's bed is freed first.
    """

    def __init__(
        self,
        repository: TenantRepository,
        db_session: Session,
        broadcaster: Optional[Broadcaster] = None,
        occupancy: Optional[OccupancyService] = None,
    ):
        super().__init__(repository, db_session, broadcaster)
        self.beds = BedRepository(db_session)
        self.payments = PaymentRepository(db_session)
        self.properties = PropertyRepository(db_session)
        self.occupancy = occupancy or OccupancyService(self.beds, db_session, self.broadcaster)

    def _payload(self, tenant: Tenant) -> Dict[str, Any]:
        return TenantResponse.model_validate(tenant).to_wire()

    # =========================================================================
    # Create
    # =========================================================================

    def create_tenant(self, request: TenantCreate, actor: Actor) -> ServiceResult[Dict[str, Any]]:
        """
        Register a tenant, optionally straight onto a bed.

        Args:
            request: Tenant details; ``tenantId`` must be unique per property
            actor: Acting user

        Returns:
            ServiceResult containing the tenant
        """
        try:
            with self.transaction():
                loaded = self._load_property(request.property_id, actor)
                if not loaded:
                    raise TransactionAborted(loaded)

                if self.repository.tenant_code_taken(request.property_id, request.tenant_code):
                    raise TransactionAborted(
                        failure(
                            ErrorCode.DUPLICATE_TENANT_ID,
                            ERROR_DUPLICATE_TENANT_ID.format(code=request.tenant_code),
                            field="tenant_code",
                            details={"tenantId": request.tenant_code},
                        )
                    )

                data = request.model_dump(exclude={"bed_id"})
                data["status"] = TenantStatus.PENDING
                tenant = self.repository.create(data)

                bed = None
                if request.bed_id:
                    found = self.occupancy.load_bed(request.bed_id, actor, for_update=True)
                    if not found:
                        raise TransactionAborted(found)
                    bed = found.data
                    blocked = self.occupancy.check_assignable(bed, tenant)
                    if blocked is not None:
                        raise TransactionAborted(blocked)
                    self.occupancy.occupy(bed, tenant)

            if bed is not None:
                self.occupancy.announce_bed(bed)
            payload = self.occupancy.announce_tenant(tenant, TENANT_ACTION_CREATED)
            self._business_event(
                "tenant_created",
                tenant_id=tenant.id,
                property_id=tenant.property_id,
                bed_id=bed.id if bed is not None else None,
                actor_id=actor.id,
            )
            return ServiceResult.success(payload, message=SUCCESS_TENANT_CREATED)

        except TransactionAborted as aborted:
            return aborted.result
        except Exception as e:
            return self._handle_exception(e, "create tenant")

    # =========================================================================
    # Read
    # =========================================================================

    def get_tenant(self, tenant_id: str, actor: Actor) -> ServiceResult[Dict[str, Any]]:
        loaded = self.occupancy.load_tenant(tenant_id, actor)
        if not loaded:
            return loaded
        return ServiceResult.success(self._payload(loaded.data))

    def list_tenants(
        self,
        actor: Actor,
        property_id: Optional[str] = None,
        status: Optional[TenantStatus] = None,
    ) -> ServiceResult[List[Dict[str, Any]]]:
        if property_id is not None:
            loaded = self._load_property(property_id, actor)
            if not loaded:
                return loaded
            property_ids: Optional[List[str]] = [property_id]
        elif actor.is_admin:
            property_ids = None
        else:
            property_ids = [p.id for p in self.properties.find_for_owner(actor.id)]

        tenants = self.repository.find_tenants(property_ids=property_ids, status=status)
        return ServiceResult.success(
            [self._payload(t) for t in tenants],
            metadata={"count": len(tenants)},
        )

    # =========================================================================
    # Update / delete
    # =========================================================================

    def update_tenant(
        self,
        tenant_id: str,
        request: TenantUpdate,
        actor: Actor,
    ) -> ServiceResult[Dict[str, Any]]:
        try:
            with self.transaction():
                loaded = self.occupancy.load_tenant(tenant_id, actor)
                if not loaded:
                    raise TransactionAborted(loaded)
                tenant = loaded.data
                changes = request.model_dump(exclude_unset=True)

                joining = changes.get("joining_date")
                if joining is not None and tenant.leaving_date is not None and joining > tenant.leaving_date:
                    raise TransactionAborted(
                        failure(
                            ErrorCode.INVALID_DATE_RANGE,
                            ERROR_JOINING_AFTER_LEAVING.format(leaving_date=tenant.leaving_date.isoformat()),
                            field="joining_date",
                            details={
                                "joiningDate": joining.isoformat(),
                                "leavingDate": tenant.leaving_date.isoformat(),
                            },
                        )
                    )

                tenant = self.repository.update(tenant, changes)

            payload = self.occupancy.announce_tenant(tenant, TENANT_ACTION_UPDATED)
            return ServiceResult.success(payload, message=SUCCESS_TENANT_UPDATED)

        except TransactionAborted as aborted:
            return aborted.result
        except Exception as e:
            return self._handle_exception(e, "update tenant", tenant_id)

    def delete_tenant(self, tenant_id: str, actor: Actor) -> ServiceResult[Dict[str, Any]]:
        """Remove a tenant without outstanding payments, freeing their bed."""
        try:
            with self.transaction():
                loaded = self.occupancy.load_tenant(tenant_id, actor)
                if not loaded:
                    raise TransactionAborted(loaded)
                tenant = loaded.data

                outstanding = self.payments.find_outstanding_for_tenant(tenant.id)
                if outstanding:
                    raise TransactionAborted(
                        failure(
                            ErrorCode.PENDING_PAYMENTS_EXIST,
                            ERROR_PENDING_PAYMENTS.format(count=len(outstanding)),
                            details={
                                "pendingPayments": len(outstanding),
                                "totalAmount": float(sum(p.amount for p in outstanding)),
                            },
                        )
                    )

                bed = self.beds.find_by_tenant(tenant.id)
                if bed is not None:
                    self.occupancy.release(bed)
                snapshot = self._payload(tenant)
                self.repository.delete(tenant)

            if bed is not None:
                self.occupancy.announce_bed(bed)
            self.broadcaster.broadcast_tenant_update(snapshot["propertyId"], snapshot, TENANT_ACTION_DELETED)
            self._business_event(
                "tenant_deleted",
                tenant_id=tenant_id,
                freed_bed_id=bed.id if bed is not None else None,
                actor_id=actor.id,
            )
            return ServiceResult.success({"id": tenant_id}, message=SUCCESS_TENANT_DELETED)

        except TransactionAborted as aborted:
            return aborted.result
        except Exception as e:
            return self._handle_exception(e, "delete tenant", tenant_id)
