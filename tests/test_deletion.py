"""Tests for occupancy-aware deletion of beds, rooms, floors and properties."""

from datetime import date
from decimal import Decimal

from sqlalchemy import update

from app.models.base.enums import BedStatus, TenantStatus
from app.models.property.floor import Floor
from app.models.property.property import Property
from app.models.room.bed import Bed
from app.models.room.room import Room
from app.models.tenant.tenant import Tenant
from app.schemas.occupancy import DeleteRequest
from app.schemas.room import BedCreate
from app.services.base import ErrorCode, ErrorSeverity
from app.services.occupancy import DeletionScope


def assert_counters_consistent(services, property_id, actor):
    report = services.dashboard.verify_counters(property_id, actor).unwrap()
    assert report["drifts"] == []
    assert report["consistent"]


class TestBlockedDelete:
    def test_occupied_room_returns_relocation_report(self, db, services, building, owner):
        result = services.deletion.delete(DeletionScope.ROOM, building["room"]["id"], actor=owner)

        assert result.error_code == ErrorCode.REQUIRES_RELOCATION_DECISION
        assert result.error.severity == ErrorSeverity.WARNING
        details = result.error.details
        assert details["occupiedBeds"] == 1
        assert details["tenants"][0]["tenantId"] == "T001"
        assert details["tenants"][0]["currentBed"]["location"] == "Ground Floor - Room 101 - Bed B1"
        # B2 sits in the room being deleted
        assert [b["id"] for b in details["availableBeds"]] == [building["b3"]["id"]]

        meta = result.metadata
        assert meta["requiresAction"] == "RELOCATE_TENANTS"
        assert meta["relocationOptions"]["canRelocateAll"] is True
        assert [a["action"] for a in meta["actions"]] == ["RELOCATE", "FORCE_DELETE"]
        assert meta["actions"][0]["payload"] == {
            "relocations": {building["tenant"]["id"]: building["b3"]["id"]}
        }
        assert meta["recommendations"][-1]["action"] == "FORCE_DELETE"

        assert db.get(Room, building["room"]["id"]) is not None
        assert db.get(Bed, building["b1"]["id"]).tenant_id == building["tenant"]["id"]

    def test_occupied_bed_offers_single_relocation(self, services, building, owner):
        result = services.deletion.delete(DeletionScope.BED, building["b1"]["id"], actor=owner)

        assert result.error_code == ErrorCode.REQUIRES_RELOCATION_DECISION
        assert result.error.details["tenant"]["id"] == building["tenant"]["id"]
        assert result.error.details["currentBed"]["bedNumber"] == "B1"
        assert result.metadata["requiresAction"] == "RELOCATE_TENANT"
        relocate, force = result.metadata["actions"]
        assert relocate["payload"] == {"relocateTenantToBedId": building["b2"]["id"]}
        assert force["payload"] == {"forceDelete": True}

    def test_no_free_beds_only_offers_force(self, services, build, owner):
        prop = build.property()
        floor = build.floor(prop["id"], 0)
        room = build.room(floor["id"], "1", capacity=1)
        bed = build.bed(room["id"], "B1")
        build.tenant(prop["id"], "T001", bed_id=bed["id"])

        result = services.deletion.delete(DeletionScope.FLOOR, floor["id"], actor=owner)

        assert result.error.details["availableBeds"] == []
        assert [a["action"] for a in result.metadata["actions"]] == ["FORCE_DELETE"]
        assert result.metadata["relocationOptions"]["shortfall"] == 1

    def test_repeated_blocked_delete_changes_nothing(self, db, services, building, owner):
        first = services.deletion.delete(DeletionScope.ROOM, building["room"]["id"], actor=owner)
        second = services.deletion.delete(DeletionScope.ROOM, building["room"]["id"], actor=owner)

        assert second.error_code == ErrorCode.REQUIRES_RELOCATION_DECISION
        assert second.error.details == first.error.details
        assert second.metadata == first.metadata
        assert db.get(Bed, building["b1"]["id"]).tenant_id == building["tenant"]["id"]
        assert db.get(Room, building["room"]["id"]).current_beds == 2
        assert_counters_consistent(services, building["property"]["id"], owner)


class TestDeleteWithRelocation:
    def test_room_delete_moves_tenant_and_fixes_counters(self, db, services, building, owner):
        options = DeleteRequest(relocations={building["tenant"]["id"]: building["b3"]["id"]})

        result = services.deletion.delete(DeletionScope.ROOM, building["room"]["id"], options, owner)

        assert result.is_success
        assert result.data["deletedBeds"] == 2
        assert result.data["deletedRooms"] == 1
        assert result.data["relocated"][0]["toLocation"] == "First Floor - Room 201 - Bed B1"
        assert result.data["displacedTenants"] == []

        assert db.get(Room, building["room"]["id"]) is None
        assert db.get(Bed, building["b1"]["id"]) is None
        assert db.get(Bed, building["b3"]["id"]).tenant_id == building["tenant"]["id"]
        assert db.get(Tenant, building["tenant"]["id"]).status == TenantStatus.ACTIVE

        prop = db.get(Property, building["property"]["id"])
        assert (prop.total_rooms, prop.total_beds) == (1, 1)
        ground = db.get(Floor, building["ground"]["id"])
        assert (ground.total_rooms, ground.total_beds) == (0, 0)
        assert_counters_consistent(services, building["property"]["id"], owner)

    def test_bed_delete_with_single_target(self, db, services, building, owner):
        options = DeleteRequest(relocate_tenant_to_bed_id=building["b2"]["id"])

        result = services.deletion.delete(DeletionScope.BED, building["b1"]["id"], options, owner)

        assert result.is_success
        assert db.get(Bed, building["b2"]["id"]).tenant_id == building["tenant"]["id"]
        assert db.get(Room, building["room"]["id"]).current_beds == 1
        assert_counters_consistent(services, building["property"]["id"], owner)

    def test_wire_names_accepted(self, services, building, owner):
        options = DeleteRequest.model_validate({"relocateTenantToBedId": building["b3"]["id"]})

        result = services.deletion.delete(DeletionScope.BED, building["b1"]["id"], options, owner)

        assert result.is_success

    def test_target_inside_deleted_room_rejected(self, db, services, building, owner):
        options = DeleteRequest(relocations={building["tenant"]["id"]: building["b2"]["id"]})

        result = services.deletion.delete(DeletionScope.ROOM, building["room"]["id"], options, owner)

        assert result.error_code == ErrorCode.INVALID_RELOCATION_TARGET
        assert db.get(Room, building["room"]["id"]) is not None

    def test_target_in_other_property_rejected(self, db, services, build, building, owner):
        other = build.property("Lakeview PG")
        floor = build.floor(other["id"], 0)
        room = build.room(floor["id"], "1")
        foreign = build.bed(room["id"], "B1")
        options = DeleteRequest(relocate_tenant_to_bed_id=foreign["id"])

        result = services.deletion.delete(DeletionScope.BED, building["b1"]["id"], options, owner)

        assert result.error_code == ErrorCode.CROSS_PROPERTY_RELOCATION
        assert db.get(Bed, building["b1"]["id"]).tenant_id == building["tenant"]["id"]

    def test_occupied_target_rejected(self, db, services, build, building, owner):
        build.tenant(building["property"]["id"], "T002", bed_id=building["b3"]["id"])
        options = DeleteRequest(relocations={building["tenant"]["id"]: building["b3"]["id"]})

        result = services.deletion.delete(DeletionScope.ROOM, building["room"]["id"], options, owner)

        assert result.error_code == ErrorCode.TARGET_BED_OCCUPIED
        assert db.get(Room, building["room"]["id"]) is not None

    def test_target_under_maintenance_rejected(self, services, building, owner):
        services.occupancy.set_bed_status(building["b3"]["id"], BedStatus.MAINTENANCE, owner)
        options = DeleteRequest(relocations={building["tenant"]["id"]: building["b3"]["id"]})

        result = services.deletion.delete(DeletionScope.ROOM, building["room"]["id"], options, owner)

        assert result.error_code == ErrorCode.TARGET_BED_OCCUPIED

    def test_locked_target_reflects_row_changed_outside_session(self, db, services, building, owner):
        target_id = building["b3"]["id"]
        assert db.get(Bed, target_id).status == BedStatus.AVAILABLE
        db.execute(
            update(Bed)
            .where(Bed.id == target_id)
            .values(status=BedStatus.MAINTENANCE)
            .execution_options(synchronize_session=False)
        )
        options = DeleteRequest(relocations={building["tenant"]["id"]: target_id})

        result = services.deletion.delete(DeletionScope.ROOM, building["room"]["id"], options, owner)

        assert result.error_code == ErrorCode.TARGET_BED_OCCUPIED
        assert db.get(Bed, building["b1"]["id"]).tenant_id == building["tenant"]["id"]

    def test_unknown_tenant_in_relocations_rejected(self, services, build, building, owner):
        outsider = build.tenant(building["property"]["id"], "T009")
        options = DeleteRequest(relocations={outsider["id"]: building["b3"]["id"]})

        result = services.deletion.delete(DeletionScope.ROOM, building["room"]["id"], options, owner)

        assert result.error_code == ErrorCode.INVALID_RELOCATION_TARGET

    def test_same_target_twice_rejected(self, services, build, building, owner):
        second = build.tenant(building["property"]["id"], "T002", bed_id=building["b2"]["id"])
        options = DeleteRequest(
            relocations={
                building["tenant"]["id"]: building["b3"]["id"],
                second["id"]: building["b3"]["id"],
            }
        )

        result = services.deletion.delete(DeletionScope.ROOM, building["room"]["id"], options, owner)

        assert result.error_code == ErrorCode.INVALID_RELOCATION_TARGET


class TestForceDelete:
    def test_displaced_tenants_become_pending(self, db, services, building, broadcaster, owner):
        broadcaster.messages.clear()

        result = services.deletion.delete(
            DeletionScope.ROOM, building["room"]["id"], DeleteRequest(force_delete=True), owner
        )

        assert result.is_success
        assert result.data["displacedTenants"][0]["id"] == building["tenant"]["id"]
        tenant = db.get(Tenant, building["tenant"]["id"])
        assert tenant.status == TenantStatus.PENDING
        assert tenant.bed is None
        assert_counters_consistent(services, building["property"]["id"], owner)

        actions = [m.payload["action"] for m in broadcaster.of_type("tenant_update")]
        assert actions == ["displaced"]
        assert broadcaster.of_type("activity")[-1].payload["type"] == "room_deleted"

    def test_relocate_some_force_the_rest(self, db, services, build, building, owner):
        second = build.tenant(building["property"]["id"], "T002", bed_id=building["b2"]["id"])
        options = DeleteRequest(
            force_delete=True,
            relocations={building["tenant"]["id"]: building["b3"]["id"]},
        )

        result = services.deletion.delete(DeletionScope.ROOM, building["room"]["id"], options, owner)

        assert result.is_success
        assert len(result.data["relocated"]) == 1
        assert [t["id"] for t in result.data["displacedTenants"]] == [second["id"]]
        assert db.get(Tenant, second["id"]).status == TenantStatus.PENDING
        assert db.get(Tenant, building["tenant"]["id"]).status == TenantStatus.ACTIVE


class TestEmptyCascade:
    def test_empty_floor_removed_with_rooms_and_beds(self, db, services, build, building, owner):
        upstairs = building["upstairs"]
        build.bed(upstairs["id"], "B2")

        result = services.deletion.delete(DeletionScope.FLOOR, building["first"]["id"], actor=owner)

        assert result.is_success
        assert result.data["deletedRooms"] == 1
        assert result.data["deletedBeds"] == 2
        assert db.get(Room, upstairs["id"]) is None
        prop = db.get(Property, building["property"]["id"])
        assert (prop.total_floors, prop.total_rooms, prop.total_beds) == (1, 1, 2)
        assert_counters_consistent(services, building["property"]["id"], owner)

    def test_free_bed_deleted_without_options(self, db, services, building, owner):
        result = services.deletion.delete(DeletionScope.BED, building["b2"]["id"], actor=owner)

        assert result.is_success
        assert db.get(Room, building["room"]["id"]).current_beds == 1

    def test_missing_node(self, services, owner):
        result = services.deletion.delete(DeletionScope.ROOM, "missing", actor=owner)

        assert result.error_code == ErrorCode.NOT_FOUND

    def test_other_owner_denied(self, db, services, building, other_owner):
        result = services.deletion.delete(DeletionScope.BED, building["b2"]["id"], actor=other_owner)

        assert result.error_code == ErrorCode.NOT_FOUND
        assert db.get(Bed, building["b2"]["id"]) is not None


class TestDeleteProperty:
    def test_active_tenants_block(self, db, services, building, owner):
        result = services.deletion.delete_property(building["property"]["id"], owner)

        assert result.error_code == ErrorCode.ACTIVE_TENANTS_EXIST
        assert result.error.details["activeTenants"] == 1
        assert db.get(Property, building["property"]["id"]) is not None

    def test_removes_everything_once_tenants_leave(self, db, services, build, building, owner):
        build.payment(building["tenant"]["id"])
        services.occupancy.vacate(building["tenant"]["id"], date(2024, 6, 15), owner)

        result = services.deletion.delete_property(building["property"]["id"], owner)

        assert result.is_success
        assert result.data["name"] == "Sunrise PG"
        assert db.get(Property, building["property"]["id"]) is None
        assert db.get(Floor, building["ground"]["id"]) is None
        assert db.get(Bed, building["b1"]["id"]) is None
        assert db.get(Tenant, building["tenant"]["id"]) is None


class TestTwoBedRoomLifecycle:
    def test_fill_block_and_relocate(self, db, services, build, owner):
        prop = build.property("Lakeview PG")
        floor = build.floor(prop["id"], 0)
        room = build.room(floor["id"], "1", capacity=2)
        b1 = build.bed(room["id"], "B1")
        b2 = build.bed(room["id"], "B2")

        full = services.beds.create_bed(
            BedCreate(room_id=room["id"], bed_number="B3", rent=Decimal("5000")), owner
        )
        assert full.error_code == ErrorCode.ROOM_FULL

        tenant = build.tenant(prop["id"], "T001")
        assert services.occupancy.assign(b1["id"], tenant["id"], owner).is_success

        blocked = services.deletion.delete(DeletionScope.BED, b1["id"], actor=owner)
        assert blocked.error_code == ErrorCode.REQUIRES_RELOCATION_DECISION
        assert [b["id"] for b in blocked.error.details["availableBeds"]] == [b2["id"]]

        options = DeleteRequest(relocate_tenant_to_bed_id=b2["id"])
        assert services.deletion.delete(DeletionScope.BED, b1["id"], options, owner).is_success

        assert db.get(Bed, b1["id"]) is None
        assert db.get(Bed, b2["id"]).tenant_id == tenant["id"]
        assert db.get(Room, room["id"]).current_beds == 1
        assert db.get(Tenant, tenant["id"]).status == TenantStatus.ACTIVE
        assert_counters_consistent(services, prop["id"], owner)
