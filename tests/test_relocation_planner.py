"""Tests for relocation planning."""

from app.repositories.room import BedRepository
from app.services.occupancy import DeletionScope, RelocationPlanner


class TestFindAvailableBeds:
    def test_lowest_floor_first(self, db, building):
        planner = RelocationPlanner(BedRepository(db))
        beds = planner.find_available_beds(building["property"]["id"])

        assert [b.id for b in beds] == [building["b2"]["id"], building["b3"]["id"]]

    def test_excludes_the_room_being_deleted(self, db, building):
        planner = RelocationPlanner(BedRepository(db))
        beds = planner.find_available_beds(
            building["property"]["id"], DeletionScope.ROOM, building["room"]["id"]
        )

        assert [b.id for b in beds] == [building["b3"]["id"]]

    def test_excludes_the_floor_being_deleted(self, db, building):
        planner = RelocationPlanner(BedRepository(db))
        beds = planner.find_available_beds(
            building["property"]["id"], DeletionScope.FLOOR, building["first"]["id"]
        )

        assert [b.id for b in beds] == [building["b2"]["id"]]

    def test_excludes_the_bed_itself(self, db, building):
        planner = RelocationPlanner(BedRepository(db))
        beds = planner.find_available_beds(
            building["property"]["id"], DeletionScope.BED, building["b2"]["id"]
        )

        assert [b.id for b in beds] == [building["b3"]["id"]]

    def test_other_properties_never_offered(self, db, build, building):
        other = build.property("Lakeview PG")
        floor = build.floor(other["id"], 0)
        room = build.room(floor["id"], "1")
        build.bed(room["id"], "B1")

        planner = RelocationPlanner(BedRepository(db))
        offered = {b.id for b in planner.find_available_beds(building["property"]["id"])}

        assert offered == {building["b2"]["id"], building["b3"]["id"]}

    def test_candidates_carry_location(self, db, building):
        planner = RelocationPlanner(BedRepository(db))
        first = planner.describe(planner.find_available_beds(building["property"]["id"])[0]).to_wire()

        assert first["location"] == "Ground Floor - Room 101 - Bed B2"
        assert first["floorNumber"] == 0
        assert first["rent"] == 5000.0


class TestPlanBulkRelocation:
    def test_enough_beds(self):
        plan = RelocationPlanner.plan_bulk_relocation(["a", "b"], ["x", "y", "z"])

        assert plan.can_relocate_all
        assert plan.shortfall == 0
        assert plan.tenants_to_relocate == 2

    def test_shortfall(self):
        plan = RelocationPlanner.plan_bulk_relocation(["a", "b", "c"], ["x"])

        assert not plan.can_relocate_all
        assert plan.shortfall == 2


class TestRecommendations:
    def test_partial_relocation_then_add_beds_then_force(self):
        plan = RelocationPlanner.plan_bulk_relocation(["a", "b", "c"], ["x"])
        steps = RelocationPlanner.recommendations(plan, DeletionScope.ROOM)

        assert [s.action for s in steps] == ["MANUAL_RELOCATE", "ADD_BEDS", "FORCE_DELETE"]
        assert [s.priority for s in steps] == [1, 2, 3]
        assert "1 of 3" in steps[0].message

    def test_no_free_beds_leaves_add_beds_and_force(self):
        plan = RelocationPlanner.plan_bulk_relocation(["a"], [])
        steps = RelocationPlanner.recommendations(plan, DeletionScope.FLOOR)

        assert [s.action for s in steps] == ["ADD_BEDS", "FORCE_DELETE"]
        assert steps[-1].message.startswith("Force delete the floor")
