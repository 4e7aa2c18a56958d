# --- File: app/services/dashboard/dashboard_service.py ---
"""
Dashboard service: property occupancy summary and counter verification.

Room, floor and property counters are maintained incrementally. The
verification here recounts the rows and reports every counter that drifted;
``reconcile_counters`` rewrites them from the recount.
"""

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from app.core.events.broadcaster import Broadcaster
from app.core.security import Actor
from app.models.base.enums import BedStatus
from app.models.property.property import Property
from app.repositories.payment import PaymentRepository
from app.repositories.property import FloorRepository, PropertyRepository
from app.repositories.room import BedRepository, RoomRepository
from app.repositories.tenant import TenantRepository
from app.schemas.dashboard import CounterDrift, CounterReport, OccupancySummary
from app.services.base import BaseService, ServiceResult, TransactionAborted
from app.services.dashboard.constants import (
    COUNTER_COLUMNS,
    SUCCESS_COUNTERS_CONSISTENT,
    SUCCESS_COUNTERS_DRIFTED,
    SUCCESS_COUNTERS_RECONCILED,
)
from app.services.occupancy.relocation_planner import floor_label


class DashboardService(BaseService[Property, PropertyRepository]):
    """Read models over a property plus counter repair."""

    def __init__(
        self,
        repository: PropertyRepository,
        db_session: Session,
        broadcaster: Optional[Broadcaster] = None,
    ):
        super().__init__(repository, db_session, broadcaster)
        self.floors = FloorRepository(db_session)
        self.rooms = RoomRepository(db_session)
        self.beds = BedRepository(db_session)
        self.tenants = TenantRepository(db_session)
        self.payments = PaymentRepository(db_session)

    def occupancy_summary(self, property_id: str, actor: Actor) -> ServiceResult[Dict[str, Any]]:
        """
        Beds by status, occupancy rate, tenants by status and the
        outstanding payment total of one property.
        """
        try:
            loaded = self._load_property(property_id, actor)
            if not loaded:
                return loaded
            prop = loaded.data

            counts = self.repository.actual_counts(prop.id)
            beds_by_status = self.beds.count_by_status(prop.id)
            occupied = beds_by_status[BedStatus.OCCUPIED.value]
            total_beds = counts["beds"]
            rate = round(occupied * 100.0 / total_beds, 2) if total_beds else 0.0

            summary = OccupancySummary(
                property_id=prop.id,
                property_name=prop.name,
                total_floors=counts["floors"],
                total_rooms=counts["rooms"],
                total_beds=total_beds,
                beds_by_status=beds_by_status,
                occupied_beds=occupied,
                available_beds=beds_by_status[BedStatus.AVAILABLE.value],
                occupancy_rate=rate,
                tenants_by_status=self.tenants.count_by_status(prop.id),
                outstanding_payments=float(self.payments.outstanding_total_for_property(prop.id)),
            )
            return ServiceResult.success(summary.to_wire())

        except Exception as e:
            return self._handle_exception(e, "build occupancy summary", property_id)

    # =========================================================================
    # Counter verification
    # =========================================================================

    def _collect_drifts(self, prop: Property) -> Tuple[List[CounterDrift], int]:
        """Compare every stored counter of the property with a recount."""
        drifts: List[CounterDrift] = []
        checked = 0

        def compare(entity_type, entity_id, label, counter, stored, actual):
            nonlocal checked
            checked += 1
            if (stored or 0) != actual:
                drifts.append(
                    CounterDrift(
                        entity_type=entity_type,
                        entity_id=entity_id,
                        label=label,
                        counter=counter,
                        stored=stored or 0,
                        actual=actual,
                    )
                )

        totals = self.repository.actual_counts(prop.id)
        compare("property", prop.id, prop.name, "totalFloors", prop.total_floors, totals["floors"])
        compare("property", prop.id, prop.name, "totalRooms", prop.total_rooms, totals["rooms"])
        compare("property", prop.id, prop.name, "totalBeds", prop.total_beds, totals["beds"])

        for floor in self.floors.find_by_property(prop.id):
            label = floor_label(floor)
            floor_totals = self.floors.actual_counts(floor.id)
            compare("floor", floor.id, label, "totalRooms", floor.total_rooms, floor_totals["rooms"])
            compare("floor", floor.id, label, "totalBeds", floor.total_beds, floor_totals["beds"])

            for room in self.rooms.find_rooms(floor_id=floor.id):
                compare(
                    "room", room.id, f"{label} - Room {room.room_number}",
                    "currentBeds", room.current_beds, self.beds.count_in_room(room.id),
                )

        return drifts, checked

    def verify_counters(self, property_id: str, actor: Actor) -> ServiceResult[Dict[str, Any]]:
        try:
            loaded = self._load_property(property_id, actor)
            if not loaded:
                return loaded
            prop = loaded.data

            drifts, checked = self._collect_drifts(prop)
            inconsistent = self.beds.count_inconsistent(prop.id)
            report = CounterReport(
                property_id=prop.id,
                consistent=not drifts and not inconsistent,
                checked=checked,
                drifts=drifts,
                inconsistent_beds=inconsistent,
            )
            if not report.consistent:
                self._logger.warning(
                    f"Counter drift on property {prop.id}: {len(drifts)} counter(s), "
                    f"{inconsistent} inconsistent bed(s)"
                )
            return ServiceResult.success(
                report.to_wire(),
                message=SUCCESS_COUNTERS_CONSISTENT if report.consistent else SUCCESS_COUNTERS_DRIFTED,
            )

        except Exception as e:
            return self._handle_exception(e, "verify counters", property_id)

    def reconcile_counters(self, property_id: str, actor: Actor) -> ServiceResult[Dict[str, Any]]:
        """
        Rewrite drifted counters from the recount.

        Bed status mismatches are reported but not repaired; they need an
        operator decision.
        """
        try:
            with self.transaction():
                loaded = self._load_property(property_id, actor)
                if not loaded:
                    raise TransactionAborted(loaded)
                prop = loaded.data

                drifts, checked = self._collect_drifts(prop)
                for drift in drifts:
                    if drift.entity_type == "property":
                        entity = prop
                    elif drift.entity_type == "floor":
                        entity = self.floors.find_by_id(drift.entity_id)
                    else:
                        entity = self.rooms.find_by_id(drift.entity_id)
                    setattr(entity, COUNTER_COLUMNS[drift.counter], drift.actual)
                self.db.flush()
                inconsistent = self.beds.count_inconsistent(prop.id)

            if drifts:
                self._business_event(
                    "counters_reconciled",
                    property_id=property_id,
                    fixed=len(drifts),
                    actor_id=actor.id,
                )
            report = CounterReport(
                property_id=property_id,
                consistent=not inconsistent,
                checked=checked,
                drifts=drifts,
                inconsistent_beds=inconsistent,
                reconciled=True,
            )
            return ServiceResult.success(report.to_wire(), message=SUCCESS_COUNTERS_RECONCILED)

        except TransactionAborted as aborted:
            return aborted.result
        except Exception as e:
            return self._handle_exception(e, "reconcile counters", property_id)
