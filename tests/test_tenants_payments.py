"""Tests for tenant and payment records."""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from app.models.base.enums import BedStatus, PaymentStatus, TenantStatus
from app.models.room.bed import Bed
from app.models.tenant.tenant import Tenant
from app.schemas.payment import PaymentCreate, PaymentUpdate
from app.schemas.tenant import TenantCreate, TenantUpdate
from app.services.base import ErrorCode

from conftest import TODAY


class TestTenants:
    def test_created_pending_without_bed(self, build, building):
        tenant = build.tenant(building["property"]["id"], "T002")

        assert tenant["status"] == "PENDING"
        assert tenant["tenantId"] == "T002"
        assert tenant["bed"] is None

    def test_created_on_bed_is_active(self, db, building):
        assert building["tenant"]["status"] == "ACTIVE"
        assert building["tenant"]["bed"]["id"] == building["b1"]["id"]
        assert db.get(Bed, building["b1"]["id"]).status == BedStatus.OCCUPIED

    def test_duplicate_code_in_property(self, services, building, owner):
        result = services.tenants.create_tenant(
            TenantCreate(
                property_id=building["property"]["id"],
                tenant_code="T001",
                full_name="Someone Else",
                phone="9123456780",
                joining_date=date(2024, 2, 1),
            ),
            owner,
        )

        assert result.error_code == ErrorCode.DUPLICATE_TENANT_ID

    def test_same_code_in_other_property(self, build, building):
        other = build.property("Lakeview PG")

        assert build.tenant(other["id"], "T001")["tenantId"] == "T001"

    def test_create_onto_occupied_bed_rolls_back(self, services, building, owner):
        result = services.tenants.create_tenant(
            TenantCreate(
                property_id=building["property"]["id"],
                tenant_code="T002",
                full_name="Ravi Kumar",
                phone="9123456780",
                joining_date=date(2024, 2, 1),
                bed_id=building["b1"]["id"],
            ),
            owner,
        )

        assert result.error_code == ErrorCode.BED_OCCUPIED
        listed = services.tenants.list_tenants(owner, property_id=building["property"]["id"]).unwrap()
        assert [t["tenantId"] for t in listed] == ["T001"]

    def test_phone_must_have_ten_digits(self):
        with pytest.raises(ValidationError):
            TenantCreate(
                property_id="p1",
                tenant_code="T1",
                full_name="Asha Rao",
                phone="12345",
                joining_date=date(2024, 1, 1),
            )

    def test_update_contact_details(self, services, building, owner):
        result = services.tenants.update_tenant(
            building["tenant"]["id"], TenantUpdate(occupation="Engineer"), owner
        )

        assert result.data["occupation"] == "Engineer"
        assert result.data["status"] == "ACTIVE"

    def test_joining_date_cannot_pass_leaving_date(self, db, services, building, owner):
        tenant_id = building["tenant"]["id"]
        services.occupancy.vacate(tenant_id, date(2024, 6, 15), owner)

        result = services.tenants.update_tenant(
            tenant_id, TenantUpdate(joining_date=date(2024, 6, 20)), owner
        )

        assert result.error_code == ErrorCode.INVALID_DATE_RANGE
        assert result.error.field == "joining_date"
        assert result.error.details["leavingDate"] == "2024-06-15"
        assert db.get(Tenant, tenant_id).joining_date == date(2024, 1, 1)

    def test_joining_date_moved_within_stay(self, services, building, owner):
        tenant_id = building["tenant"]["id"]
        services.occupancy.vacate(tenant_id, date(2024, 6, 15), owner)

        result = services.tenants.update_tenant(
            tenant_id, TenantUpdate(joining_date=date(2024, 6, 15)), owner
        )

        assert result.data["joiningDate"] == "2024-06-15"

    def test_required_fields_cannot_be_nulled(self):
        with pytest.raises(ValidationError):
            TenantUpdate.model_validate({"phone": None})

        assert TenantUpdate.model_validate({"email": None}).email is None

    def test_delete_blocked_by_pending_payments(self, services, build, building, owner):
        build.payment(building["tenant"]["id"], 3000)

        result = services.tenants.delete_tenant(building["tenant"]["id"], owner)

        assert result.error_code == ErrorCode.PENDING_PAYMENTS_EXIST
        assert result.error.details["totalAmount"] == 3000.0

    def test_delete_frees_bed(self, db, services, build, building, owner):
        build.payment(building["tenant"]["id"], 3000, status=PaymentStatus.PAID)

        result = services.tenants.delete_tenant(building["tenant"]["id"], owner)

        assert result.is_success
        bed = db.get(Bed, building["b1"]["id"])
        assert bed.tenant_id is None
        assert bed.status == BedStatus.AVAILABLE

    def test_filter_by_status(self, services, build, building, owner):
        build.tenant(building["property"]["id"], "T002")

        pending = services.tenants.list_tenants(owner, status=TenantStatus.PENDING).unwrap()

        assert [t["tenantId"] for t in pending] == ["T002"]


class TestPayments:
    def test_defaults_to_current_bed(self, build, building):
        payment = build.payment(building["tenant"]["id"])

        assert payment["bedId"] == building["b1"]["id"]
        assert payment["propertyId"] == building["property"]["id"]
        assert payment["status"] == "PENDING"

    def test_paid_on_creation_dated_today(self, build, building):
        payment = build.payment(building["tenant"]["id"], status=PaymentStatus.PAID)

        assert payment["paidDate"] == TODAY.isoformat()

    def test_bed_from_other_property_rejected(self, services, build, building, owner):
        other = build.property("Lakeview PG")
        floor = build.floor(other["id"], 0)
        room = build.room(floor["id"], "1")
        foreign = build.bed(room["id"], "B1")

        result = services.payments.create_payment(
            PaymentCreate(
                tenant_id=building["tenant"]["id"],
                amount=Decimal("100"),
                due_date=date(2024, 6, 5),
                bed_id=foreign["id"],
            ),
            owner,
        )

        assert result.error_code == ErrorCode.VALIDATION_ERROR

    def test_mark_paid_once(self, services, build, building, owner):
        payment = build.payment(building["tenant"]["id"])

        paid = services.payments.mark_paid(payment["id"], owner, paid_date=date(2024, 6, 10))
        assert paid.data["status"] == "PAID"
        assert paid.data["paidDate"] == "2024-06-10"

        again = services.payments.mark_paid(payment["id"], owner)
        assert again.error_code == ErrorCode.ALREADY_PAID
        assert again.error.details["paidDate"] == "2024-06-10"

    def test_status_cannot_be_set_to_paid_by_update(self, services, build, building, owner):
        payment = build.payment(building["tenant"]["id"])

        result = services.payments.update_payment(
            payment["id"], PaymentUpdate(status=PaymentStatus.PAID), owner
        )

        assert result.error_code == ErrorCode.VALIDATION_ERROR

    def test_paid_payment_not_deletable(self, services, build, building, owner):
        payment = build.payment(building["tenant"]["id"], status=PaymentStatus.PAID)

        result = services.payments.delete_payment(payment["id"], owner)

        assert result.error_code == ErrorCode.PAID_PAYMENT_NOT_DELETABLE

    def test_pending_payment_deleted(self, services, build, building, owner):
        payment = build.payment(building["tenant"]["id"])

        assert services.payments.delete_payment(payment["id"], owner).is_success
        assert services.payments.get_payment(payment["id"], owner).error_code == ErrorCode.NOT_FOUND

    def test_list_by_status(self, services, build, building, owner):
        build.payment(building["tenant"]["id"])
        build.payment(building["tenant"]["id"], status=PaymentStatus.PAID)

        pending = services.payments.list_payments(owner, status=PaymentStatus.PENDING)

        assert pending.metadata["count"] == 1
