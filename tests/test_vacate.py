"""Tests for vacating tenants."""

from datetime import date

from app.models.base.enums import BedStatus, PaymentStatus, RoomStatus, TenantStatus
from app.models.room.bed import Bed
from app.models.room.room import Room
from app.models.tenant.tenant import Tenant
from app.services.base import ErrorCode, ErrorSeverity

from conftest import TODAY


class TestVacate:
    def test_frees_bed_and_marks_tenant(self, db, services, building, owner):
        result = services.occupancy.vacate(
            building["tenant"]["id"], date(2024, 6, 15), owner, reason="Moved cities"
        )

        assert result.is_success
        data = result.data
        assert data["freedBed"]["id"] == building["b1"]["id"]
        assert data["freedBed"]["location"] == "Ground Floor - Room 101 - Bed B1"
        assert data["tenant"]["status"] == "VACATED"
        assert data["tenant"]["leavingDate"] == "2024-06-15"
        assert data["warnings"] == []
        assert data["vacationSummary"]["daysStayed"] == 166
        assert data["vacationSummary"]["reason"] == "Moved cities"

        bed = db.get(Bed, building["b1"]["id"])
        assert bed.status == BedStatus.AVAILABLE
        assert bed.tenant_id is None
        assert db.get(Tenant, building["tenant"]["id"]).vacate_reason == "Moved cities"

    def test_leaving_today_is_allowed(self, services, building, owner):
        assert services.occupancy.vacate(building["tenant"]["id"], TODAY, owner).is_success

    def test_pending_payments_warn_but_do_not_block(self, services, build, building, owner):
        build.payment(building["tenant"]["id"], 4500)
        build.payment(building["tenant"]["id"], 500, status=PaymentStatus.OVERDUE)
        build.payment(building["tenant"]["id"], 5000, status=PaymentStatus.PAID)

        result = services.occupancy.vacate(building["tenant"]["id"], date(2024, 6, 15), owner)

        assert result.is_success
        pending = result.data["pendingPayments"]
        assert pending["count"] == 2
        assert pending["totalAmount"] == 5000.0
        assert len(result.data["warnings"]) == 1
        assert "2 pending payment(s)" in result.data["warnings"][0]

    def test_vacating_twice(self, db, services, building, owner):
        services.occupancy.vacate(building["tenant"]["id"], date(2024, 6, 15), owner)

        result = services.occupancy.vacate(building["tenant"]["id"], date(2024, 6, 20), owner)

        assert result.error_code == ErrorCode.ALREADY_VACATED
        assert result.error.severity == ErrorSeverity.WARNING
        assert result.error.details["vacatedDate"] == "2024-06-15"
        assert db.get(Tenant, building["tenant"]["id"]).leaving_date == date(2024, 6, 15)

    def test_future_date_rejected(self, db, services, building, owner):
        result = services.occupancy.vacate(building["tenant"]["id"], date(2024, 7, 1), owner)

        assert result.error_code == ErrorCode.FUTURE_DATE_NOT_ALLOWED
        assert db.get(Bed, building["b1"]["id"]).tenant_id == building["tenant"]["id"]

    def test_leaving_before_joining_rejected(self, services, building, owner):
        result = services.occupancy.vacate(building["tenant"]["id"], date(2023, 12, 31), owner)

        assert result.error_code == ErrorCode.INVALID_DATE_RANGE
        assert result.error.details["joiningDate"] == "2024-01-01"

    def test_tenant_without_bed(self, services, build, building, owner):
        tenant = build.tenant(building["property"]["id"], "T002")

        result = services.occupancy.vacate(tenant["id"], date(2024, 6, 1), owner)

        assert result.is_success
        assert result.data["freedBed"] is None
        assert result.data["vacationSummary"]["lastLocation"] is None

    def test_vacated_tenant_cannot_be_assigned(self, services, building, owner):
        services.occupancy.vacate(building["tenant"]["id"], date(2024, 6, 15), owner)

        result = services.occupancy.assign(building["b2"]["id"], building["tenant"]["id"], owner)

        assert result.error_code == ErrorCode.TENANT_VACATED

    def test_broadcasts_activity(self, services, building, broadcaster, owner):
        broadcaster.messages.clear()

        services.occupancy.vacate(building["tenant"]["id"], date(2024, 6, 15), owner)

        activity = broadcaster.of_type("activity")
        assert activity[-1].payload["type"] == "tenant_vacated"
        assert broadcaster.of_type("tenant_update")[-1].payload["action"] == "vacated"

    def test_last_occupant_leaving_frees_room(self, db, services, building, owner):
        room_id = building["room"]["id"]
        assert db.get(Room, room_id).status == RoomStatus.OCCUPIED

        services.occupancy.vacate(building["tenant"]["id"], date(2024, 6, 15), owner)

        assert db.get(Room, room_id).status == RoomStatus.AVAILABLE

    def test_room_stays_occupied_while_someone_remains(self, db, services, build, building, owner):
        build.tenant(building["property"]["id"], "T002", bed_id=building["b2"]["id"])

        services.occupancy.vacate(building["tenant"]["id"], date(2024, 6, 15), owner)

        assert db.get(Room, building["room"]["id"]).status == RoomStatus.OCCUPIED
