"""Tests for the occupancy summary and counter verification."""

from app.models.base.enums import PaymentStatus
from app.models.property.floor import Floor
from app.models.property.property import Property
from app.models.room.room import Room
from app.services.base import ErrorCode


class TestOccupancySummary:
    def test_counts_and_rate(self, services, build, building, owner):
        build.payment(building["tenant"]["id"], 4500)
        build.payment(building["tenant"]["id"], 5000, status=PaymentStatus.PAID)

        summary = services.dashboard.occupancy_summary(building["property"]["id"], owner).unwrap()

        assert summary["totalFloors"] == 2
        assert summary["totalRooms"] == 2
        assert summary["totalBeds"] == 3
        assert summary["occupiedBeds"] == 1
        assert summary["availableBeds"] == 2
        assert summary["occupancyRate"] == 33.33
        assert summary["bedsByStatus"]["MAINTENANCE"] == 0
        assert summary["tenantsByStatus"] == {"ACTIVE": 1, "PENDING": 0, "VACATED": 0}
        assert summary["outstandingPayments"] == 4500.0

    def test_property_without_beds(self, services, build, owner):
        prop = build.property()

        summary = services.dashboard.occupancy_summary(prop["id"], owner).unwrap()

        assert summary["occupancyRate"] == 0.0
        assert summary["totalBeds"] == 0

    def test_other_owner_denied(self, services, building, other_owner):
        result = services.dashboard.occupancy_summary(building["property"]["id"], other_owner)

        assert result.error_code == ErrorCode.NOT_FOUND


class TestCounters:
    def test_fresh_building_is_consistent(self, services, building, owner):
        result = services.dashboard.verify_counters(building["property"]["id"], owner)

        assert result.message == "All counters match the stored rows"
        report = result.data
        assert report["consistent"]
        assert report["checked"] == 9
        assert report["inconsistentBeds"] == 0

    def test_drift_reported_then_reconciled(self, db, services, building, owner):
        db.get(Room, building["room"]["id"]).current_beds = 7
        db.get(Floor, building["first"]["id"]).total_beds = 0
        db.get(Property, building["property"]["id"]).total_floors = 5
        db.commit()

        report = services.dashboard.verify_counters(building["property"]["id"], owner).unwrap()

        assert not report["consistent"]
        drifted = {(d["entityType"], d["counter"]): (d["stored"], d["actual"]) for d in report["drifts"]}
        assert drifted == {
            ("property", "totalFloors"): (5, 2),
            ("floor", "totalBeds"): (0, 1),
            ("room", "currentBeds"): (7, 2),
        }

        fixed = services.dashboard.reconcile_counters(building["property"]["id"], owner).unwrap()

        assert fixed["reconciled"]
        assert len(fixed["drifts"]) == 3
        assert db.get(Room, building["room"]["id"]).current_beds == 2
        assert db.get(Property, building["property"]["id"]).total_floors == 2
        assert services.dashboard.verify_counters(building["property"]["id"], owner).data["consistent"]

    def test_drift_label_names_the_room(self, db, services, building, owner):
        db.get(Room, building["upstairs"]["id"]).current_beds = 0
        db.commit()

        report = services.dashboard.verify_counters(building["property"]["id"], owner).unwrap()

        assert report["drifts"][0]["label"] == "First Floor - Room 201"
