# --- File: app/services/occupancy/occupancy_service.py ---
"""
Bed occupancy: the bed state machine and the tenant moves built on it.

Bed states::

    AVAILABLE <-> OCCUPIED            (assign / unassign, vacate, transfer)
    AVAILABLE <-> MAINTENANCE         (operator)
    AVAILABLE <-> RESERVED            (operator)

A bed holds a tenant exactly when it is OCCUPIED. Occupancy never changes
the bed counters, which track bed existence only.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Callable, Dict, Optional

from sqlalchemy.orm import Session

from app.config.settings import settings
from app.core.events.broadcaster import Broadcaster
from app.core.security import Actor
from app.models.base.enums import BedStatus, RoomStatus, TenantStatus
from app.models.room.bed import Bed
from app.models.room.room import Room
from app.models.tenant.tenant import Tenant
from app.repositories.payment import PaymentRepository
from app.repositories.room import BedRepository
from app.repositories.tenant import TenantRepository
from app.schemas.occupancy import PendingPaymentsSummary, VacationSummary
from app.schemas.payment import PaymentResponse
from app.schemas.room import BedResponse
from app.schemas.tenant import TenantResponse
from app.services.base import (
    BaseService,
    ErrorCode,
    ErrorSeverity,
    ServiceResult,
    TransactionAborted,
)
from app.services.base.service_result import failure
from app.services.occupancy.constants import (
    ERROR_ALREADY_VACATED,
    ERROR_BED_NOT_FOUND,
    ERROR_BED_NOT_OCCUPIED,
    ERROR_BED_OCCUPIED,
    ERROR_BED_UNAVAILABLE,
    ERROR_CROSS_PROPERTY_ASSIGNMENT,
    ERROR_FUTURE_LEAVING_DATE,
    ERROR_INVALID_TRANSITION,
    ERROR_LEAVING_BEFORE_JOINING,
    ERROR_TENANT_HAS_BED,
    ERROR_TENANT_NOT_FOUND,
    ERROR_TENANT_VACATED,
    SUCCESS_BED_ASSIGNED,
    SUCCESS_BED_STATUS_UPDATED,
    SUCCESS_BED_UNASSIGNED,
    SUCCESS_TENANT_TRANSFERRED,
    SUCCESS_TENANT_VACATED,
    TENANT_ACTION_ASSIGNED,
    TENANT_ACTION_RELOCATED,
    TENANT_ACTION_UNASSIGNED,
    TENANT_ACTION_VACATED,
)
from app.services.occupancy.relocation_planner import bed_location

__all__ = ["OccupancyService"]

# Operator transitions; OCCUPIED is only entered through assign
OPERATOR_TRANSITIONS = {
    BedStatus.AVAILABLE: {BedStatus.MAINTENANCE, BedStatus.RESERVED},
    BedStatus.MAINTENANCE: {BedStatus.AVAILABLE},
    BedStatus.RESERVED: {BedStatus.AVAILABLE},
}


class OccupancyService(BaseService[Bed, BedRepository]):
    """
    Assign, unassign, transfer and vacate.

    The building blocks ``occupy``, ``release`` and ``check_assignable`` are
    shared with tenant creation and the deletion flow; they work inside the
    caller's transaction and never commit.
    """

    def __init__(
        self,
        repository: BedRepository,
        db_session: Session,
        broadcaster: Optional[Broadcaster] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        super().__init__(repository, db_session, broadcaster)
        self.tenants = TenantRepository(db_session)
        self.payments = PaymentRepository(db_session)
        self._today = today or date.today

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load_bed(
        self,
        bed_id: str,
        actor: Actor,
        for_update: bool = False,
    ) -> ServiceResult[Bed]:
        bed = self.repository.find_by_id(bed_id, for_update=for_update)
        if bed is None:
            return ServiceResult.not_found("Bed", bed_id, message=ERROR_BED_NOT_FOUND)
        denied = self._check_access(bed.room.floor.property, actor, "Bed", bed_id)
        if denied is not None:
            return denied
        return ServiceResult.success(bed)

    def load_tenant(self, tenant_id: str, actor: Actor) -> ServiceResult[Tenant]:
        tenant = self.tenants.find_by_id(tenant_id)
        if tenant is None:
            return ServiceResult.not_found("Tenant", tenant_id, message=ERROR_TENANT_NOT_FOUND)
        denied = self._check_access(tenant.property, actor, "Tenant", tenant_id)
        if denied is not None:
            return denied
        return ServiceResult.success(tenant)

    # -------------------------------------------------------------------------
    # Building blocks
    # -------------------------------------------------------------------------

    def check_assignable(
        self,
        bed: Bed,
        tenant: Tenant,
        allow_current_bed: bool = False,
    ) -> Optional[ServiceResult]:
        """
        Return the failure that stops ``tenant`` from taking ``bed``, if any.

        Args:
            bed: Target bed
            tenant: Tenant to place
            allow_current_bed: Skip the "already has a bed" rule (transfers)
        """
        if bed.status == BedStatus.OCCUPIED or bed.tenant_id is not None:
            return failure(
                ErrorCode.BED_OCCUPIED,
                ERROR_BED_OCCUPIED,
                details={"bedId": bed.id, "bedNumber": bed.bed_number},
            )
        if bed.status != BedStatus.AVAILABLE:
            return failure(
                ErrorCode.BED_UNAVAILABLE,
                ERROR_BED_UNAVAILABLE.format(status=bed.status.value),
                details={"bedId": bed.id, "status": bed.status.value},
            )
        if not allow_current_bed:
            current = self.repository.find_by_tenant(tenant.id)
            if current is not None:
                return failure(
                    ErrorCode.TENANT_ALREADY_ASSIGNED,
                    ERROR_TENANT_HAS_BED.format(bed_number=current.bed_number),
                    details={"currentBedId": current.id},
                )
        if tenant.status == TenantStatus.VACATED:
            return failure(
                ErrorCode.TENANT_VACATED,
                ERROR_TENANT_VACATED,
                details={"tenantId": tenant.tenant_code},
            )
        if tenant.property_id != self.repository.property_id_of(bed):
            return failure(
                ErrorCode.CROSS_PROPERTY_ASSIGNMENT,
                ERROR_CROSS_PROPERTY_ASSIGNMENT,
                details={"bedId": bed.id, "tenantPropertyId": tenant.property_id},
            )
        return None

    @staticmethod
    def is_free(bed: Bed) -> bool:
        return bed.status == BedStatus.AVAILABLE and bed.tenant_id is None

    def refresh_room_status(self, room: Room) -> None:
        """OCCUPIED while any bed is taken, else AVAILABLE; MAINTENANCE sticks."""
        if room.status == RoomStatus.MAINTENANCE:
            return
        occupied = self.repository.count_occupied_in_room(room.id)
        room.status = RoomStatus.OCCUPIED if occupied else RoomStatus.AVAILABLE

    def occupy(self, bed: Bed, tenant: Tenant) -> None:
        """Put ``tenant`` on ``bed``; a PENDING tenant becomes ACTIVE."""
        bed.tenant_id = tenant.id
        bed.status = BedStatus.OCCUPIED
        if tenant.status == TenantStatus.PENDING:
            tenant.status = TenantStatus.ACTIVE
        self.db.flush()
        self.db.expire(bed, ["tenant"])
        self.db.expire(tenant, ["bed"])
        self.refresh_room_status(bed.room)

    def release(self, bed: Bed) -> Optional[str]:
        """Free ``bed`` and return the id of the tenant it held."""
        tenant_id = bed.tenant_id
        bed.tenant_id = None
        bed.status = BedStatus.AVAILABLE
        self.db.flush()
        self.db.expire(bed, ["tenant"])
        if tenant_id is not None:
            tenant = self.db.get(Tenant, tenant_id)
            if tenant is not None:
                self.db.expire(tenant, ["bed"])
        self.refresh_room_status(bed.room)
        return tenant_id

    # -------------------------------------------------------------------------
    # Broadcast helpers
    # -------------------------------------------------------------------------

    def bed_payload(self, bed: Bed) -> Dict[str, Any]:
        payload = BedResponse.model_validate(bed).to_wire()
        payload["location"] = bed_location(bed)
        return payload

    def announce_bed(self, bed: Bed) -> Dict[str, Any]:
        payload = self.bed_payload(bed)
        self.broadcaster.broadcast_bed_update(self.repository.property_id_of(bed), payload)
        return payload

    def announce_tenant(self, tenant: Tenant, action: str) -> Dict[str, Any]:
        payload = TenantResponse.model_validate(tenant).to_wire()
        self.broadcaster.broadcast_tenant_update(tenant.property_id, payload, action)
        return payload

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def assign(self, bed_id: str, tenant_id: str, actor: Actor) -> ServiceResult[Dict[str, Any]]:
        """
        Assign a tenant to an AVAILABLE bed.

        Returns:
            ServiceResult with the updated bed
        """
        try:
            with self.transaction():
                loaded = self.load_bed(bed_id, actor, for_update=True)
                if not loaded:
                    raise TransactionAborted(loaded)
                bed = loaded.data

                found = self.load_tenant(tenant_id, actor)
                if not found:
                    raise TransactionAborted(found)
                tenant = found.data

                blocked = self.check_assignable(bed, tenant)
                if blocked is not None:
                    raise TransactionAborted(blocked)

                self.occupy(bed, tenant)

            payload = self.announce_bed(bed)
            self.announce_tenant(tenant, TENANT_ACTION_ASSIGNED)
            self._business_event(
                "bed_assigned",
                bed_id=bed.id,
                tenant_id=tenant.id,
                actor_id=actor.id,
            )
            return ServiceResult.success(payload, message=SUCCESS_BED_ASSIGNED)

        except TransactionAborted as aborted:
            return aborted.result
        except Exception as e:
            return self._handle_exception(e, "assign bed", bed_id)

    def unassign(self, bed_id: str, actor: Actor) -> ServiceResult[Dict[str, Any]]:
        """Free an OCCUPIED bed; the tenant keeps its status."""
        try:
            with self.transaction():
                loaded = self.load_bed(bed_id, actor, for_update=True)
                if not loaded:
                    raise TransactionAborted(loaded)
                bed = loaded.data

                if bed.status != BedStatus.OCCUPIED or bed.tenant_id is None:
                    raise TransactionAborted(
                        failure(
                            ErrorCode.BED_NOT_OCCUPIED,
                            ERROR_BED_NOT_OCCUPIED,
                            details={"bedId": bed.id, "status": bed.status.value},
                        )
                    )
                tenant_id = self.release(bed)

            payload = self.announce_bed(bed)
            tenant = self.tenants.find_by_id(tenant_id)
            if tenant is not None:
                self.announce_tenant(tenant, TENANT_ACTION_UNASSIGNED)
            self._business_event(
                "bed_unassigned",
                bed_id=bed.id,
                tenant_id=tenant_id,
                actor_id=actor.id,
            )
            return ServiceResult.success(payload, message=SUCCESS_BED_UNASSIGNED)

        except TransactionAborted as aborted:
            return aborted.result
        except Exception as e:
            return self._handle_exception(e, "unassign bed", bed_id)

    def set_bed_status(
        self,
        bed_id: str,
        status: BedStatus,
        actor: Actor,
    ) -> ServiceResult[Dict[str, Any]]:
        """Operator move between AVAILABLE and MAINTENANCE or RESERVED."""
        try:
            with self.transaction():
                loaded = self.load_bed(bed_id, actor, for_update=True)
                if not loaded:
                    raise TransactionAborted(loaded)
                bed = loaded.data

                if bed.status != status:
                    allowed = OPERATOR_TRANSITIONS.get(bed.status, set())
                    if status not in allowed:
                        raise TransactionAborted(
                            failure(
                                ErrorCode.INVALID_STATE_TRANSITION,
                                ERROR_INVALID_TRANSITION.format(
                                    current=bed.status.value,
                                    target=status.value,
                                ),
                                details={"current": bed.status.value, "requested": status.value},
                            )
                        )
                    bed.status = status
                    self.db.flush()

            payload = self.announce_bed(bed)
            self._business_event(
                "bed_status_changed",
                bed_id=bed.id,
                status=status.value,
                actor_id=actor.id,
            )
            return ServiceResult.success(payload, message=SUCCESS_BED_STATUS_UPDATED)

        except TransactionAborted as aborted:
            return aborted.result
        except Exception as e:
            return self._handle_exception(e, "update bed status", bed_id)

    def transfer(
        self,
        tenant_id: str,
        target_bed_id: str,
        actor: Actor,
    ) -> ServiceResult[Dict[str, Any]]:
        """
        Move a tenant to another bed in one transaction.

        A tenant without a bed is simply assigned.
        """
        try:
            with self.transaction():
                found = self.load_tenant(tenant_id, actor)
                if not found:
                    raise TransactionAborted(found)
                tenant = found.data

                loaded = self.load_bed(target_bed_id, actor, for_update=True)
                if not loaded:
                    raise TransactionAborted(loaded)
                target = loaded.data

                current = self.repository.find_by_tenant(tenant.id)
                if current is not None and current.id == target.id:
                    raise TransactionAborted(
                        failure(
                            ErrorCode.TENANT_ALREADY_ASSIGNED,
                            ERROR_TENANT_HAS_BED.format(bed_number=current.bed_number),
                            details={"currentBedId": current.id},
                        )
                    )

                blocked = self.check_assignable(target, tenant, allow_current_bed=True)
                if blocked is not None:
                    raise TransactionAborted(blocked)

                if current is not None:
                    self.release(current)
                self.occupy(target, tenant)

            if current is not None:
                self.announce_bed(current)
            self.announce_bed(target)
            payload = self.announce_tenant(
                tenant,
                TENANT_ACTION_RELOCATED if current is not None else TENANT_ACTION_ASSIGNED,
            )
            self._business_event(
                "tenant_transferred",
                tenant_id=tenant.id,
                from_bed_id=current.id if current is not None else None,
                to_bed_id=target.id,
                actor_id=actor.id,
            )
            return ServiceResult.success(payload, message=SUCCESS_TENANT_TRANSFERRED)

        except TransactionAborted as aborted:
            return aborted.result
        except Exception as e:
            return self._handle_exception(e, "transfer tenant", tenant_id)

    def vacate(
        self,
        tenant_id: str,
        leaving_date: date,
        actor: Actor,
        reason: Optional[str] = None,
    ) -> ServiceResult[Dict[str, Any]]:
        """
        Mark a tenant VACATED and free their bed.

        Outstanding payments never block a vacate; they come back as warnings
        next to the freed bed. Vacating twice returns ``ALREADY_VACATED`` with
        the recorded leaving date and changes nothing.
        """
        try:
            found = self.load_tenant(tenant_id, actor)
            if not found:
                return found
            tenant = found.data

            if tenant.status == TenantStatus.VACATED:
                vacated_on = tenant.leaving_date.isoformat() if tenant.leaving_date else None
                return failure(
                    ErrorCode.ALREADY_VACATED,
                    ERROR_ALREADY_VACATED,
                    details={"vacatedDate": vacated_on},
                    severity=ErrorSeverity.WARNING,
                )
            if leaving_date > self._today():
                return failure(
                    ErrorCode.FUTURE_DATE_NOT_ALLOWED,
                    ERROR_FUTURE_LEAVING_DATE,
                    field="leaving_date",
                    details={"leavingDate": leaving_date.isoformat()},
                )
            if leaving_date < tenant.joining_date:
                return failure(
                    ErrorCode.INVALID_DATE_RANGE,
                    ERROR_LEAVING_BEFORE_JOINING,
                    field="leaving_date",
                    details={
                        "leavingDate": leaving_date.isoformat(),
                        "joiningDate": tenant.joining_date.isoformat(),
                    },
                )

            outstanding = self.payments.find_outstanding_for_tenant(tenant.id)
            pending = PendingPaymentsSummary(
                count=len(outstanding),
                total_amount=float(sum((p.amount for p in outstanding), Decimal("0"))),
                payments=[PaymentResponse.model_validate(p) for p in outstanding],
            )

            with self.transaction():
                bed = self.repository.find_by_tenant(tenant.id)
                freed: Optional[Dict[str, Any]] = None
                if bed is not None:
                    freed = {
                        "id": bed.id,
                        "bedNumber": bed.bed_number,
                        "roomId": bed.room_id,
                        "location": bed_location(bed),
                    }
                    self.release(bed)

                tenant.status = TenantStatus.VACATED
                tenant.leaving_date = leaving_date
                tenant.vacate_reason = reason
                self.db.flush()

            warnings = []
            if pending.count:
                warnings.append(
                    f"Tenant has {pending.count} pending payment(s) totalling "
                    f"{settings.CURRENCY_SYMBOL}{pending.total_amount:,.2f}"
                )

            summary = VacationSummary(
                tenant_name=tenant.full_name,
                joining_date=tenant.joining_date,
                leaving_date=leaving_date,
                days_stayed=(leaving_date - tenant.joining_date).days,
                reason=reason,
                last_location=freed["location"] if freed else None,
            )

            if bed is not None:
                self.announce_bed(bed)
            tenant_payload = self.announce_tenant(tenant, TENANT_ACTION_VACATED)
            self.broadcaster.broadcast_activity(
                tenant.property_id,
                {"type": "tenant_vacated", "tenantId": tenant.id, "name": tenant.full_name},
            )
            self._business_event(
                "tenant_vacated",
                tenant_id=tenant.id,
                bed_id=freed["id"] if freed else None,
                leaving_date=leaving_date.isoformat(),
                pending_payments=pending.count,
                actor_id=actor.id,
            )

            return ServiceResult.success(
                {
                    "tenant": tenant_payload,
                    "freedBed": freed,
                    "pendingPayments": pending.to_wire(),
                    "warnings": warnings,
                    "vacationSummary": summary.to_wire(),
                },
                message=SUCCESS_TENANT_VACATED,
            )

        except TransactionAborted as aborted:
            return aborted.result
        except Exception as e:
            return self._handle_exception(e, "vacate tenant", tenant_id)
