"""Tests for the capacity validator."""

from decimal import Decimal

from app.config.settings import Settings
from app.models.property.floor import Floor
from app.models.property.property import Property
from app.models.room.bed import Bed
from app.models.room.room import Room
from app.services.base import ErrorCode
from app.services.occupancy import CapacityValidator


def make_property(floors=0, rooms=0):
    return Property(id="p1", owner_id="owner-1", name="Sunrise PG", total_floors=floors, total_rooms=rooms)


def make_room(capacity=2, current_beds=0):
    return Room(id="r1", floor_id="f1", room_number="101", capacity=capacity, current_beds=current_beds)


class TestFloorCreate:
    def test_unlimited_by_default(self):
        result = CapacityValidator().validate_floor_create(make_property(floors=40), 41, False)
        assert result.is_success

    def test_floor_quota(self):
        validator = CapacityValidator(Settings(MAX_FLOORS_PER_PROPERTY=2))
        result = validator.validate_floor_create(make_property(floors=2), 3, False)

        assert result.error_code == ErrorCode.CAPACITY_EXCEEDED
        assert result.error.details["constraint"] == "max_floors_per_property"
        assert result.error.details["limit"] == 2

    def test_duplicate_floor_number(self):
        result = CapacityValidator().validate_floor_create(make_property(), 0, True)

        assert result.error_code == ErrorCode.DUPLICATE_FLOOR_NUMBER
        assert result.error.field == "floor_number"


class TestRoomCreate:
    def test_capacity_bounds(self):
        validator = CapacityValidator()
        floor = Floor(id="f1", property_id="p1", floor_number=0)

        assert validator.validate_room_create(floor, make_property(), "101", 1, False).is_success
        assert validator.validate_room_create(floor, make_property(), "101", 12, False).is_success

        for bad in (0, 13):
            result = validator.validate_room_create(floor, make_property(), "101", bad, False)
            assert result.error_code == ErrorCode.INVALID_CAPACITY
            assert result.error.details["max"] == 12

    def test_room_quota(self):
        validator = CapacityValidator(Settings(MAX_ROOMS_PER_PROPERTY=5))
        floor = Floor(id="f1", property_id="p1", floor_number=0)
        result = validator.validate_room_create(floor, make_property(rooms=5), "106", 2, False)

        assert result.error_code == ErrorCode.CAPACITY_EXCEEDED

    def test_duplicate_room_number(self):
        floor = Floor(id="f1", property_id="p1", floor_number=0)
        result = CapacityValidator().validate_room_create(floor, make_property(), "101", 2, True)

        assert result.error_code == ErrorCode.DUPLICATE_ROOM_NUMBER
        assert result.error.details["floorId"] == "f1"

    def test_capacity_cannot_drop_below_bed_count(self):
        validator = CapacityValidator()
        room = make_room(capacity=4, current_beds=3)

        result = validator.validate_room_capacity_update(room, 2)
        assert result.error_code == ErrorCode.INVALID_CAPACITY
        assert result.error.details["constraint"] == "capacity_not_below_current_beds"

        assert validator.validate_room_capacity_update(room, 3).is_success


class TestBedCreate:
    def test_full_room(self):
        result = CapacityValidator().validate_bed_create(
            make_room(capacity=2, current_beds=2), "B3", False, Decimal("5000")
        )

        assert result.error_code == ErrorCode.ROOM_FULL
        assert result.error.details["capacity"] == 2
        assert "2 beds" in result.error.message

    def test_duplicate_bed_number(self):
        result = CapacityValidator().validate_bed_create(make_room(), "B1", True, Decimal("5000"))

        assert result.error_code == ErrorCode.DUPLICATE_BED_NUMBER

    def test_minimum_rent(self):
        validator = CapacityValidator()

        result = validator.validate_bed_create(make_room(), "B1", False, Decimal("999.99"))
        assert result.error_code == ErrorCode.INVALID_RENT
        assert result.error.field == "rent"

        assert validator.validate_bed_create(make_room(), "B1", False, Decimal("1000")).is_success

    def test_full_room_reported_before_other_problems(self):
        result = CapacityValidator().validate_bed_create(
            make_room(capacity=1, current_beds=1), "B1", True, Decimal("10")
        )
        assert result.error_code == ErrorCode.ROOM_FULL


class TestBedUpdate:
    def test_unchanged_number_is_not_a_duplicate(self):
        bed = Bed(id="b1", room_id="r1", bed_number="B1")
        assert CapacityValidator().validate_bed_update(bed, "B1", True).is_success

    def test_renaming_onto_taken_number(self):
        bed = Bed(id="b1", room_id="r1", bed_number="B1")
        result = CapacityValidator().validate_bed_update(bed, "B2", True)

        assert result.error_code == ErrorCode.DUPLICATE_BED_NUMBER

    def test_rent_checked_only_when_given(self):
        bed = Bed(id="b1", room_id="r1", bed_number="B1")
        validator = CapacityValidator()

        assert validator.validate_bed_update(bed).is_success
        assert validator.validate_bed_update(bed, rent=Decimal("500")).error_code == ErrorCode.INVALID_RENT
