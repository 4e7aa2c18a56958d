"""Tests for bed assignment, status changes and transfers."""

from app.models.base.enums import BedStatus, RoomStatus, TenantStatus
from app.models.room.bed import Bed
from app.models.room.room import Room
from app.models.tenant.tenant import Tenant
from app.services.base import ErrorCode


class TestAssign:
    def test_assign_activates_tenant_and_fills_room(self, db, services, build, building, owner):
        tenant = build.tenant(building["property"]["id"], "T002", name="Ravi Kumar")
        assert tenant["status"] == "PENDING"

        result = services.occupancy.assign(building["b2"]["id"], tenant["id"], owner)

        assert result.is_success
        assert result.data["status"] == "OCCUPIED"
        assert result.data["tenantId"] == tenant["id"]
        assert db.get(Tenant, tenant["id"]).status == TenantStatus.ACTIVE
        assert db.get(Room, building["room"]["id"]).status == RoomStatus.OCCUPIED

    def test_assign_does_not_touch_bed_counters(self, db, services, build, building, owner):
        tenant = build.tenant(building["property"]["id"], "T002")
        services.occupancy.assign(building["b2"]["id"], tenant["id"], owner)

        assert db.get(Room, building["room"]["id"]).current_beds == 2

    def test_occupied_bed_rejected(self, services, build, building, owner):
        tenant = build.tenant(building["property"]["id"], "T002")
        result = services.occupancy.assign(building["b1"]["id"], tenant["id"], owner)

        assert result.error_code == ErrorCode.BED_OCCUPIED

    def test_tenant_with_a_bed_rejected(self, services, building, owner):
        result = services.occupancy.assign(building["b2"]["id"], building["tenant"]["id"], owner)

        assert result.error_code == ErrorCode.TENANT_ALREADY_ASSIGNED
        assert result.error.details["currentBedId"] == building["b1"]["id"]

    def test_bed_under_maintenance_rejected(self, services, build, building, owner):
        services.occupancy.set_bed_status(building["b2"]["id"], BedStatus.MAINTENANCE, owner)
        tenant = build.tenant(building["property"]["id"], "T002")

        result = services.occupancy.assign(building["b2"]["id"], tenant["id"], owner)

        assert result.error_code == ErrorCode.BED_UNAVAILABLE

    def test_cross_property_rejected(self, services, build, building, owner):
        other = build.property("Lakeview PG")
        stranger = build.tenant(other["id"], "L001")

        result = services.occupancy.assign(building["b2"]["id"], stranger["id"], owner)

        assert result.error_code == ErrorCode.CROSS_PROPERTY_ASSIGNMENT

    def test_other_owner_cannot_see_bed(self, services, build, building, other_owner):
        result = services.occupancy.assign(building["b2"]["id"], building["tenant"]["id"], other_owner)

        assert result.error_code == ErrorCode.NOT_FOUND

    def test_admin_reaches_any_property(self, services, build, building, admin):
        tenant = build.tenant(building["property"]["id"], "T002")

        assert services.occupancy.assign(building["b2"]["id"], tenant["id"], admin).is_success

    def test_broadcasts_bed_and_tenant(self, services, build, building, broadcaster, owner):
        tenant = build.tenant(building["property"]["id"], "T002")
        broadcaster.messages.clear()

        services.occupancy.assign(building["b2"]["id"], tenant["id"], owner)

        bed_updates = broadcaster.of_type("bed_update")
        tenant_updates = broadcaster.of_type("tenant_update")
        assert [m.payload["id"] for m in bed_updates] == [building["b2"]["id"]]
        assert tenant_updates[0].payload["action"] == "assigned"
        assert bed_updates[0].property_id == building["property"]["id"]


class TestUnassign:
    def test_frees_bed_and_keeps_tenant_status(self, db, services, building, owner):
        result = services.occupancy.unassign(building["b1"]["id"], owner)

        assert result.is_success
        bed = db.get(Bed, building["b1"]["id"])
        assert bed.status == BedStatus.AVAILABLE
        assert bed.tenant_id is None
        assert db.get(Tenant, building["tenant"]["id"]).status == TenantStatus.ACTIVE
        assert db.get(Room, building["room"]["id"]).status == RoomStatus.AVAILABLE

    def test_free_bed_rejected(self, services, building, owner):
        result = services.occupancy.unassign(building["b2"]["id"], owner)

        assert result.error_code == ErrorCode.BED_NOT_OCCUPIED


class TestBedStatus:
    def test_maintenance_round_trip(self, db, services, building, owner):
        assert services.occupancy.set_bed_status(building["b2"]["id"], BedStatus.MAINTENANCE, owner)
        assert db.get(Bed, building["b2"]["id"]).status == BedStatus.MAINTENANCE

        assert services.occupancy.set_bed_status(building["b2"]["id"], BedStatus.AVAILABLE, owner)
        assert db.get(Bed, building["b2"]["id"]).status == BedStatus.AVAILABLE

    def test_occupied_bed_cannot_go_to_maintenance(self, services, building, owner):
        result = services.occupancy.set_bed_status(building["b1"]["id"], BedStatus.MAINTENANCE, owner)

        assert result.error_code == ErrorCode.INVALID_STATE_TRANSITION

    def test_occupied_is_entered_only_through_assign(self, services, building, owner):
        result = services.occupancy.set_bed_status(building["b2"]["id"], BedStatus.OCCUPIED, owner)

        assert result.error_code == ErrorCode.INVALID_STATE_TRANSITION

    def test_reserved_cannot_jump_to_maintenance(self, services, building, owner):
        services.occupancy.set_bed_status(building["b2"]["id"], BedStatus.RESERVED, owner)
        result = services.occupancy.set_bed_status(building["b2"]["id"], BedStatus.MAINTENANCE, owner)

        assert result.error_code == ErrorCode.INVALID_STATE_TRANSITION


class TestTransfer:
    def test_moves_tenant_in_one_step(self, db, services, building, owner):
        result = services.occupancy.transfer(building["tenant"]["id"], building["b3"]["id"], owner)

        assert result.is_success
        assert db.get(Bed, building["b1"]["id"]).tenant_id is None
        assert db.get(Bed, building["b1"]["id"]).status == BedStatus.AVAILABLE
        assert db.get(Bed, building["b3"]["id"]).tenant_id == building["tenant"]["id"]
        assert db.get(Room, building["room"]["id"]).status == RoomStatus.AVAILABLE
        assert db.get(Room, building["upstairs"]["id"]).status == RoomStatus.OCCUPIED

    def test_same_bed_rejected(self, services, building, owner):
        result = services.occupancy.transfer(building["tenant"]["id"], building["b1"]["id"], owner)

        assert result.error_code == ErrorCode.TENANT_ALREADY_ASSIGNED

    def test_occupied_target_leaves_everything_in_place(self, db, services, build, building, owner):
        other = build.tenant(building["property"]["id"], "T002", bed_id=building["b3"]["id"])

        result = services.occupancy.transfer(building["tenant"]["id"], building["b3"]["id"], owner)

        assert result.error_code == ErrorCode.BED_OCCUPIED
        assert db.get(Bed, building["b1"]["id"]).tenant_id == building["tenant"]["id"]
        assert db.get(Bed, building["b3"]["id"]).tenant_id == other["id"]

    def test_tenant_without_bed_is_assigned(self, db, services, build, building, owner):
        tenant = build.tenant(building["property"]["id"], "T002")

        result = services.occupancy.transfer(tenant["id"], building["b2"]["id"], owner)

        assert result.is_success
        assert result.data["status"] == "ACTIVE"
        assert db.get(Bed, building["b2"]["id"]).tenant_id == tenant["id"]
