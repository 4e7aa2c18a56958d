"""Shared fixtures: in-memory database, services and a recording broadcaster."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "testing"
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.events.broadcaster import Broadcaster
from app.core.security import Actor
from app.db.base import Base
from app.models.base.enums import PaymentStatus, UserRole
from app.repositories.payment import PaymentRepository
from app.repositories.property import FloorRepository, PropertyRepository
from app.repositories.room import BedRepository, RoomRepository
from app.repositories.tenant import TenantRepository
from app.schemas.payment import PaymentCreate
from app.schemas.property import FloorCreate, PropertyCreate
from app.schemas.room import BedCreate, RoomCreate
from app.schemas.tenant import TenantCreate
from app.services.dashboard import DashboardService
from app.services.occupancy import DeletionService, OccupancyService
from app.services.payment import PaymentService
from app.services.property import FloorService, PropertyService
from app.services.room import BedService, RoomService
from app.services.tenant import TenantService

TODAY = date(2024, 6, 30)


class RecordingBroadcaster(Broadcaster):
    """Broadcaster that keeps every published message."""

    def __init__(self):
        super().__init__()
        self.messages = []
        self.subscribe(self.messages.append)

    def of_type(self, event_type):
        return [m for m in self.messages if m.event_type == event_type]


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def broadcaster():
    return RecordingBroadcaster()


@pytest.fixture
def owner():
    return Actor(id="owner-1", role=UserRole.OWNER)


@pytest.fixture
def other_owner():
    return Actor(id="owner-2", role=UserRole.OWNER)


@pytest.fixture
def admin():
    return Actor(id="admin-1", role=UserRole.ADMIN)


class Services:
    """Every service wired to one session and broadcaster."""

    def __init__(self, db, broadcaster):
        self.db = db
        self.properties = PropertyService(PropertyRepository(db), db, broadcaster)
        self.floors = FloorService(FloorRepository(db), db, broadcaster)
        self.rooms = RoomService(RoomRepository(db), db, broadcaster)
        self.beds = BedService(BedRepository(db), db, broadcaster)
        self.occupancy = OccupancyService(BedRepository(db), db, broadcaster, today=lambda: TODAY)
        self.deletion = DeletionService(BedRepository(db), db, broadcaster, occupancy=self.occupancy)
        self.tenants = TenantService(TenantRepository(db), db, broadcaster, occupancy=self.occupancy)
        self.payments = PaymentService(PaymentRepository(db), db, broadcaster, today=lambda: TODAY)
        self.dashboard = DashboardService(PropertyRepository(db), db, broadcaster)


@pytest.fixture
def services(db, broadcaster):
    return Services(db, broadcaster)


class Builder:
    """Creates records through the services so counters stay consistent."""

    def __init__(self, services, actor):
        self.services = services
        self.actor = actor

    def property(self, name="Sunrise PG", actor=None):
        return self.services.properties.create_property(
            PropertyCreate(name=name, city="Pune"), actor or self.actor
        ).unwrap()

    def floor(self, property_id, number=0, name=None, actor=None):
        return self.services.floors.create_floor(
            FloorCreate(property_id=property_id, floor_number=number, name=name),
            actor or self.actor,
        ).unwrap()

    def room(self, floor_id, number="101", capacity=3, actor=None):
        return self.services.rooms.create_room(
            RoomCreate(floor_id=floor_id, room_number=number, capacity=capacity),
            actor or self.actor,
        ).unwrap()

    def bed(self, room_id, number="B1", rent=5000, actor=None):
        return self.services.beds.create_bed(
            BedCreate(room_id=room_id, bed_number=number, rent=Decimal(rent)),
            actor or self.actor,
        ).unwrap()

    def tenant(self, property_id, code="T001", bed_id=None, name="Asha Rao",
               joining_date=date(2024, 1, 1), actor=None):
        return self.services.tenants.create_tenant(
            TenantCreate(
                property_id=property_id,
                tenant_code=code,
                full_name=name,
                phone="9876543210",
                joining_date=joining_date,
                bed_id=bed_id,
            ),
            actor or self.actor,
        ).unwrap()

    def payment(self, tenant_id, amount=5000, status=PaymentStatus.PENDING, actor=None):
        return self.services.payments.create_payment(
            PaymentCreate(
                tenant_id=tenant_id,
                amount=Decimal(amount),
                status=status,
                due_date=date(2024, 6, 5),
            ),
            actor or self.actor,
        ).unwrap()


@pytest.fixture
def build(services, owner):
    return Builder(services, owner)


@pytest.fixture
def building(build):
    """
    One property with two floors:

    - Ground Floor, room 101: B1 (tenant T001), B2 (free)
    - First Floor, room 201: B1 (free)
    """
    prop = build.property()
    ground = build.floor(prop["id"], 0, "Ground Floor")
    first = build.floor(prop["id"], 1, "First Floor")
    room = build.room(ground["id"], "101")
    upstairs = build.room(first["id"], "201")
    b1 = build.bed(room["id"], "B1")
    b2 = build.bed(room["id"], "B2")
    b3 = build.bed(upstairs["id"], "B1")
    tenant = build.tenant(prop["id"], "T001", bed_id=b1["id"])
    return {
        "property": prop,
        "ground": ground,
        "first": first,
        "room": room,
        "upstairs": upstairs,
        "b1": b1,
        "b2": b2,
        "b3": b3,
        "tenant": tenant,
    }
