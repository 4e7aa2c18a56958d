# --- File: app/services/payment/payment_service.py ---
"""
Payment service.

Payments are recorded by the operator. Paid payments are final: they can
neither be edited nor deleted.
"""

from datetime import date
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.events.broadcaster import Broadcaster
from app.core.security import Actor
from app.models.base.enums import PaymentStatus
from app.models.payment.payment import Payment
from app.repositories.payment import PaymentRepository
from app.repositories.property import PropertyRepository
from app.repositories.room import BedRepository
from app.repositories.tenant import TenantRepository
from app.schemas.payment import PaymentCreate, PaymentResponse, PaymentUpdate
from app.services.base import (
    BaseService,
    ErrorCode,
    ErrorSeverity,
    ServiceResult,
    TransactionAborted,
)
from app.services.base.service_result import failure
from app.services.payment.constants import (
    ERROR_ALREADY_PAID,
    ERROR_BED_OUTSIDE_PROPERTY,
    ERROR_MARK_PAID_ONLY,
    ERROR_PAID_NOT_DELETABLE,
    ERROR_PAID_NOT_EDITABLE,
    ERROR_PAYMENT_NOT_FOUND,
    SUCCESS_PAYMENT_CREATED,
    SUCCESS_PAYMENT_DELETED,
    SUCCESS_PAYMENT_PAID,
    SUCCESS_PAYMENT_UPDATED,
)
from app.services.tenant.constants import ERROR_TENANT_NOT_FOUND


class PaymentService(BaseService[Payment, PaymentRepository]):
    """Rent, deposit and other payments of tenants."""

    def __init__(
        self,
        repository: PaymentRepository,
        db_session: Session,
        broadcaster: Optional[Broadcaster] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        super().__init__(repository, db_session, broadcaster)
        self.tenants = TenantRepository(db_session)
        self.beds = BedRepository(db_session)
        self.properties = PropertyRepository(db_session)
        self._today = today or date.today

    def _load_payment(self, payment_id: str, actor: Actor) -> ServiceResult[Payment]:
        payment = self.repository.find_by_id(payment_id)
        if payment is None:
            return ServiceResult.not_found("Payment", payment_id, message=ERROR_PAYMENT_NOT_FOUND)
        prop = self.properties.find_by_id(payment.property_id)
        denied = self._check_access(prop, actor, "Payment", payment_id)
        if denied is not None:
            return denied
        return ServiceResult.success(payment)

    @staticmethod
    def _payload(payment: Payment) -> Dict[str, Any]:
        return PaymentResponse.model_validate(payment).to_wire()

    def create_payment(self, request: PaymentCreate, actor: Actor) -> ServiceResult[Dict[str, Any]]:
        """
        Record a payment for a tenant.

        The bed defaults to the tenant's current bed; a PAID payment without
        a paid date is dated today.
        """
        try:
            with self.transaction():
                tenant = self.tenants.find_by_id(request.tenant_id)
                if tenant is None:
                    raise TransactionAborted(
                        ServiceResult.not_found("Tenant", request.tenant_id, message=ERROR_TENANT_NOT_FOUND)
                    )
                denied = self._check_access(tenant.property, actor, "Tenant", request.tenant_id)
                if denied is not None:
                    raise TransactionAborted(denied)

                data = request.model_dump()
                if request.bed_id:
                    bed = self.beds.find_by_id(request.bed_id)
                    if bed is None or self.beds.property_id_of(bed) != tenant.property_id:
                        raise TransactionAborted(
                            ServiceResult.validation_failure(
                                ERROR_BED_OUTSIDE_PROPERTY,
                                field="bed_id",
                                details={"bedId": request.bed_id},
                            )
                        )
                else:
                    current = self.beds.find_by_tenant(tenant.id)
                    data["bed_id"] = current.id if current is not None else None

                data["property_id"] = tenant.property_id
                if request.status == PaymentStatus.PAID and request.paid_date is None:
                    data["paid_date"] = self._today()
                payment = self.repository.create(data)

            payload = self._payload(payment)
            self.broadcaster.broadcast_activity(
                payment.property_id,
                {"type": "payment_recorded", "id": payment.id, "amount": payload["amount"]},
            )
            self._business_event(
                "payment_recorded",
                payment_id=payment.id,
                tenant_id=payment.tenant_id,
                amount=str(payment.amount),
                status=payment.status.value,
                actor_id=actor.id,
            )
            return ServiceResult.success(payload, message=SUCCESS_PAYMENT_CREATED)

        except TransactionAborted as aborted:
            return aborted.result
        except Exception as e:
            return self._handle_exception(e, "record payment")

    def get_payment(self, payment_id: str, actor: Actor) -> ServiceResult[Dict[str, Any]]:
        loaded = self._load_payment(payment_id, actor)
        if not loaded:
            return loaded
        return ServiceResult.success(self._payload(loaded.data))

    def list_payments(
        self,
        actor: Actor,
        tenant_id: Optional[str] = None,
        property_id: Optional[str] = None,
        status: Optional[PaymentStatus] = None,
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

        payments = self.repository.find_payments(
            property_ids=property_ids,
            tenant_id=tenant_id,
            status=status,
        )
        return ServiceResult.success(
            [self._payload(p) for p in payments],
            metadata={"count": len(payments)},
        )

    def update_payment(
        self,
        payment_id: str,
        request: PaymentUpdate,
        actor: Actor,
    ) -> ServiceResult[Dict[str, Any]]:
        try:
            with self.transaction():
                loaded = self._load_payment(payment_id, actor)
                if not loaded:
                    raise TransactionAborted(loaded)
                payment = loaded.data

                if payment.status == PaymentStatus.PAID:
                    raise TransactionAborted(
                        failure(ErrorCode.ALREADY_PAID, ERROR_PAID_NOT_EDITABLE)
                    )
                changes = request.model_dump(exclude_unset=True)
                if changes.get("status") == PaymentStatus.PAID:
                    raise TransactionAborted(
                        ServiceResult.validation_failure(ERROR_MARK_PAID_ONLY, field="status")
                    )
                payment = self.repository.update(payment, changes)

            return ServiceResult.success(self._payload(payment), message=SUCCESS_PAYMENT_UPDATED)

        except TransactionAborted as aborted:
            return aborted.result
        except Exception as e:
            return self._handle_exception(e, "update payment", payment_id)

    def mark_paid(
        self,
        payment_id: str,
        actor: Actor,
        paid_date: Optional[date] = None,
    ) -> ServiceResult[Dict[str, Any]]:
        """Settle a PENDING or OVERDUE payment."""
        try:
            with self.transaction():
                loaded = self._load_payment(payment_id, actor)
                if not loaded:
                    raise TransactionAborted(loaded)
                payment = loaded.data

                if payment.status == PaymentStatus.PAID:
                    raise TransactionAborted(
                        failure(
                            ErrorCode.ALREADY_PAID,
                            ERROR_ALREADY_PAID,
                            details={
                                "paidDate": payment.paid_date.isoformat() if payment.paid_date else None,
                            },
                            severity=ErrorSeverity.WARNING,
                        )
                    )
                payment.status = PaymentStatus.PAID
                payment.paid_date = paid_date or self._today()
                self.db.flush()

            payload = self._payload(payment)
            self.broadcaster.broadcast_activity(
                payment.property_id,
                {"type": "payment_received", "id": payment.id, "amount": payload["amount"]},
            )
            self._business_event(
                "payment_received",
                payment_id=payment.id,
                tenant_id=payment.tenant_id,
                paid_date=payment.paid_date.isoformat(),
                actor_id=actor.id,
            )
            return ServiceResult.success(payload, message=SUCCESS_PAYMENT_PAID)

        except TransactionAborted as aborted:
            return aborted.result
        except Exception as e:
            return self._handle_exception(e, "mark payment paid", payment_id)

    def delete_payment(self, payment_id: str, actor: Actor) -> ServiceResult[Dict[str, Any]]:
        try:
            with self.transaction():
                loaded = self._load_payment(payment_id, actor)
                if not loaded:
                    raise TransactionAborted(loaded)
                payment = loaded.data

                if payment.status == PaymentStatus.PAID:
                    raise TransactionAborted(
                        failure(
                            ErrorCode.PAID_PAYMENT_NOT_DELETABLE,
                            ERROR_PAID_NOT_DELETABLE,
                            details={"paymentId": payment.id},
                        )
                    )
                self.repository.delete(payment)

            self._log_operation("delete payment", payment_id)
            return ServiceResult.success({"id": payment_id}, message=SUCCESS_PAYMENT_DELETED)

        except TransactionAborted as aborted:
            return aborted.result
        except Exception as e:
            return self._handle_exception(e, "delete payment", payment_id)
