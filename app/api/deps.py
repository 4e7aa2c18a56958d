# app/api/deps.py
"""
FastAPI dependencies: database session, acting user and service factories.

Example usage in a router:

    @router.get("/{bed_id}")
    def get_bed(
        bed_id: str,
        actor: Actor = Depends(deps.get_current_actor),
        service: BedService = Depends(deps.get_bed_service),
    ):
        ...
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.events.broadcaster import Broadcaster, get_broadcaster
from app.core.exceptions import AuthenticationError
from app.core.logging import actor_id as actor_id_var
from app.core.security import Actor, actor_from_token
from app.db.session import get_db
from app.repositories.payment import PaymentRepository
from app.repositories.property import FloorRepository, PropertyRepository
from app.repositories.room import BedRepository, RoomRepository
from app.repositories.tenant import TenantRepository
from app.services.dashboard import DashboardService
from app.services.occupancy import DeletionService, OccupancyService
from app.services.payment import PaymentService
from app.services.property import FloorService, PropertyService
from app.services.room import BedService, RoomService
from app.services.tenant import TenantService

_bearer = HTTPBearer(auto_error=False)


# --- Authentication ------------------------------------------------------------

def get_current_actor(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> Actor:
    """Resolve the acting user from the bearer token."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Authentication credentials were not provided")
    actor = actor_from_token(credentials.credentials)
    actor_id_var.set(actor.id)
    return actor


def get_event_broadcaster() -> Broadcaster:
    return get_broadcaster()


# --- Services ------------------------------------------------------------------

def get_property_service(
    db: Session = Depends(get_db),
    broadcaster: Broadcaster = Depends(get_event_broadcaster),
) -> PropertyService:
    return PropertyService(PropertyRepository(db), db, broadcaster)


def get_floor_service(
    db: Session = Depends(get_db),
    broadcaster: Broadcaster = Depends(get_event_broadcaster),
) -> FloorService:
    return FloorService(FloorRepository(db), db, broadcaster)


def get_room_service(
    db: Session = Depends(get_db),
    broadcaster: Broadcaster = Depends(get_event_broadcaster),
) -> RoomService:
    return RoomService(RoomRepository(db), db, broadcaster)


def get_bed_service(
    db: Session = Depends(get_db),
    broadcaster: Broadcaster = Depends(get_event_broadcaster),
) -> BedService:
    return BedService(BedRepository(db), db, broadcaster)


def get_occupancy_service(
    db: Session = Depends(get_db),
    broadcaster: Broadcaster = Depends(get_event_broadcaster),
) -> OccupancyService:
    return OccupancyService(BedRepository(db), db, broadcaster)


def get_deletion_service(
    db: Session = Depends(get_db),
    broadcaster: Broadcaster = Depends(get_event_broadcaster),
) -> DeletionService:
    return DeletionService(BedRepository(db), db, broadcaster)


def get_tenant_service(
    db: Session = Depends(get_db),
    broadcaster: Broadcaster = Depends(get_event_broadcaster),
) -> TenantService:
    return TenantService(TenantRepository(db), db, broadcaster)


def get_payment_service(
    db: Session = Depends(get_db),
    broadcaster: Broadcaster = Depends(get_event_broadcaster),
) -> PaymentService:
    return PaymentService(PaymentRepository(db), db, broadcaster)


def get_dashboard_service(
    db: Session = Depends(get_db),
    broadcaster: Broadcaster = Depends(get_event_broadcaster),
) -> DashboardService:
    return DashboardService(PropertyRepository(db), db, broadcaster)


__all__ = [
    "get_db",
    "get_current_actor",
    "get_event_broadcaster",
    "get_property_service",
    "get_floor_service",
    "get_room_service",
    "get_bed_service",
    "get_occupancy_service",
    "get_deletion_service",
    "get_tenant_service",
    "get_payment_service",
    "get_dashboard_service",
]
