# --- File: app/services/occupancy/deletion_service.py ---
"""
Deletion of beds, rooms and floors that may still hold tenants.

One flow serves all three scopes:

1. Load the node, check access and collect its beds.
2. If occupied beds remain without a relocation target or ``force_delete``,
   refuse with ``REQUIRES_RELOCATION_DECISION`` and a report of the
   occupants, the free beds elsewhere in the property and the calls that
   would resolve the block. Nothing is written.
3. Otherwise, inside one transaction, lock and re-check every relocation
   target, move those tenants, unassign the rest (they become PENDING),
   delete the subtree and decrement the Room/Floor/Property counters.

Empty rooms and floors are removed with everything below them; only
displacing tenants needs ``force_delete``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Union

from sqlalchemy.orm import Session

from app.core.events.broadcaster import Broadcaster
from app.core.security import Actor
from app.models.base.enums import TenantStatus
from app.models.property.floor import Floor
from app.models.property.property import Property
from app.models.room.bed import Bed
from app.models.room.room import Room
from app.models.tenant.tenant import Tenant
from app.repositories.property import FloorRepository, PropertyRepository
from app.repositories.room import BedRepository, RoomRepository
from app.repositories.tenant import TenantRepository
from app.schemas.occupancy import (
    CurrentBed,
    DeleteRequest,
    DeletionOutcome,
    RelocationRecord,
    RemediationAction,
    TenantSummary,
)
from app.services.base import (
    BaseService,
    ErrorCode,
    ErrorSeverity,
    ServiceResult,
    TransactionAborted,
)
from app.services.base.service_result import failure
from app.services.occupancy.constants import (
    ACTION_FORCE_DELETE,
    ACTION_RELOCATE,
    ACTION_RELOCATE_TENANT,
    ACTION_RELOCATE_TENANTS,
    ERROR_ACTIVE_TENANTS,
    ERROR_OCCUPIED_BED,
    ERROR_OCCUPIED_FLOOR,
    ERROR_OCCUPIED_ROOM,
    ERROR_TARGET_CROSS_PROPERTY,
    ERROR_TARGET_IN_SCOPE,
    ERROR_TARGET_NOT_FOUND,
    ERROR_TARGET_OCCUPIED,
    ERROR_TARGET_REUSED,
    ERROR_UNKNOWN_RELOCATION_TENANT,
    SUCCESS_DELETED,
    SUCCESS_DELETED_FORCED,
    SUCCESS_DELETED_WITH_RELOCATION,
    SUCCESS_PROPERTY_DELETED,
    TENANT_ACTION_DISPLACED,
    TENANT_ACTION_RELOCATED,
    DeletionScope,
)
from app.services.occupancy.occupancy_service import OccupancyService
from app.services.occupancy.relocation_planner import (
    RelocationPlanner,
    bed_location,
    floor_label,
)

__all__ = ["DeletionService"]


@dataclass
class _Subtree:
    """A node being deleted with everything hanging under it."""

    scope: DeletionScope
    node: Union[Bed, Room, Floor]
    prop: Property
    floor: Floor
    room: Optional[Room]
    beds: List[Bed]
    room_count: int = 0
    bed_ids: Set[str] = field(default_factory=set)

    @property
    def occupied(self) -> List[Bed]:
        return [bed for bed in self.beds if bed.tenant_id is not None]


class DeletionService(BaseService[Bed, BedRepository]):
    """
    Occupancy-aware deletes for the property hierarchy.

    Every delete either completes with consistent counters or returns a
    failure without touching the database.
    """

    def __init__(
        self,
        repository: BedRepository,
        db_session: Session,
        broadcaster: Optional[Broadcaster] = None,
        occupancy: Optional[OccupancyService] = None,
    ):
        super().__init__(repository, db_session, broadcaster)
        self.rooms = RoomRepository(db_session)
        self.floors = FloorRepository(db_session)
        self.properties = PropertyRepository(db_session)
        self.tenants = TenantRepository(db_session)
        self.planner = RelocationPlanner(repository)
        self.occupancy = occupancy or OccupancyService(repository, db_session, self.broadcaster)

    # =========================================================================
    # Loading
    # =========================================================================

    def _load_subtree(
        self,
        scope: DeletionScope,
        entity_id: str,
        actor: Actor,
    ) -> ServiceResult[_Subtree]:
        resource = scope.value.capitalize()

        if scope == DeletionScope.BED:
            bed = self.repository.find_by_id(entity_id, for_update=True)
            if bed is None:
                return ServiceResult.not_found(resource, entity_id, message=f"{resource} not found or access denied")
            subtree = _Subtree(scope, bed, bed.room.floor.property, bed.room.floor, bed.room, [bed])
        elif scope == DeletionScope.ROOM:
            room = self.rooms.find_by_id(entity_id, for_update=True)
            if room is None:
                return ServiceResult.not_found(resource, entity_id, message=f"{resource} not found or access denied")
            subtree = _Subtree(
                scope, room, room.floor.property, room.floor, room,
                self.repository.find_beds(room_id=room.id),
                room_count=1,
            )
        else:
            floor = self.floors.find_by_id(entity_id, for_update=True)
            if floor is None:
                return ServiceResult.not_found(resource, entity_id, message=f"{resource} not found or access denied")
            subtree = _Subtree(
                scope, floor, floor.property, floor, None,
                self.repository.find_beds(floor_id=floor.id),
                room_count=self.rooms.count({"floor_id": floor.id}),
            )

        denied = self._check_access(subtree.prop, actor, resource, entity_id)
        if denied is not None:
            return denied
        subtree.bed_ids = {bed.id for bed in subtree.beds}
        return ServiceResult.success(subtree)

    # =========================================================================
    # Reports
    # =========================================================================

    @staticmethod
    def _tenant_summary(tenant: Tenant) -> TenantSummary:
        return TenantSummary(
            id=tenant.id,
            tenant_code=tenant.tenant_code,
            name=tenant.full_name,
            phone=tenant.phone,
            status=tenant.status,
        )

    @staticmethod
    def _current_bed(bed: Bed) -> CurrentBed:
        return CurrentBed(
            id=bed.id,
            bed_number=bed.bed_number,
            room=bed.room.room_number,
            floor=floor_label(bed.room.floor),
            location=bed_location(bed),
        )

    def _blocked_report(self, subtree: _Subtree, unresolved: List[Bed]) -> ServiceResult:
        """Soft reject carrying everything needed to resolve the block."""
        candidates = self.planner.find_available_beds(
            subtree.prop.id, subtree.scope, subtree.node.id
        )
        available = [self.planner.describe(bed) for bed in candidates]
        available_wire = [bed.to_wire() for bed in available]
        force_action = RemediationAction(
            action=ACTION_FORCE_DELETE,
            description=(
                f"Delete the {subtree.scope.value.lower()} anyway; tenants are "
                "unassigned and marked as pending"
            ),
            payload={"forceDelete": True},
        )

        if subtree.scope == DeletionScope.BED:
            bed = unresolved[0]
            tenant = self.db.get(Tenant, bed.tenant_id)
            actions = []
            if available:
                actions.append(
                    RemediationAction(
                        action=ACTION_RELOCATE,
                        description=f"Move the tenant to {available[0].location} and delete the bed",
                        payload={"relocateTenantToBedId": available[0].id},
                    )
                )
            actions.append(force_action)
            return failure(
                ErrorCode.REQUIRES_RELOCATION_DECISION,
                ERROR_OCCUPIED_BED,
                details={
                    "tenant": self._tenant_summary(tenant).to_wire(),
                    "currentBed": self._current_bed(bed).to_wire(),
                    "availableBeds": available_wire,
                },
                severity=ErrorSeverity.WARNING,
                metadata={
                    "requiresAction": ACTION_RELOCATE_TENANT,
                    "actions": [action.to_wire() for action in actions],
                },
            )

        occupants = []
        for bed in unresolved:
            tenant = self.db.get(Tenant, bed.tenant_id)
            entry = self._tenant_summary(tenant).to_wire()
            entry["currentBed"] = self._current_bed(bed).to_wire()
            occupants.append(entry)

        plan = self.planner.plan_bulk_relocation(unresolved, candidates)
        plan.available_beds = available
        recommendations = self.planner.recommendations(plan, subtree.scope)

        actions = []
        if available:
            # Pair occupants with free beds in building order
            suggested = {
                bed.tenant_id: target.id
                for bed, target in zip(unresolved, available)
            }
            actions.append(
                RemediationAction(
                    action=ACTION_RELOCATE,
                    description=(
                        f"Relocate {len(suggested)} of {len(unresolved)} tenant(s) "
                        f"and delete the {subtree.scope.value.lower()}"
                    ),
                    payload={"relocations": suggested},
                )
            )
        actions.append(force_action)

        template = ERROR_OCCUPIED_ROOM if subtree.scope == DeletionScope.ROOM else ERROR_OCCUPIED_FLOOR
        return failure(
            ErrorCode.REQUIRES_RELOCATION_DECISION,
            template.format(count=len(unresolved)),
            details={
                "tenants": occupants,
                "occupiedBeds": len(unresolved),
                "availableBeds": available_wire,
            },
            severity=ErrorSeverity.WARNING,
            metadata={
                "requiresAction": ACTION_RELOCATE_TENANTS,
                "actions": [action.to_wire() for action in actions],
                "relocationOptions": plan.to_wire(),
                "recommendations": [step.to_wire() for step in recommendations],
            },
        )

    # =========================================================================
    # Relocation targets
    # =========================================================================

    def _resolve_relocations(
        self,
        subtree: _Subtree,
        options: DeleteRequest,
    ) -> ServiceResult[Dict[str, str]]:
        """Map each relocating tenant id to its target bed id."""
        occupants = {bed.tenant_id for bed in subtree.occupied}
        relocations = dict(options.relocations)
        if options.relocate_tenant_to_bed_id and len(occupants) == 1:
            relocations.setdefault(next(iter(occupants)), options.relocate_tenant_to_bed_id)

        for tenant_id in relocations:
            if tenant_id not in occupants:
                return failure(
                    ErrorCode.INVALID_RELOCATION_TARGET,
                    ERROR_UNKNOWN_RELOCATION_TENANT.format(
                        tenant_id=tenant_id,
                        scope=subtree.scope.value.lower(),
                    ),
                    details={"tenantId": tenant_id},
                )
        return ServiceResult.success(relocations)

    def _lock_target(
        self,
        subtree: _Subtree,
        target_id: str,
        claimed: Set[str],
    ) -> ServiceResult[Bed]:
        """Load a relocation target under a row lock and re-check it."""
        target = self.repository.find_by_id(target_id, for_update=True)
        if target is None:
            return ServiceResult.not_found("Bed", target_id, message=ERROR_TARGET_NOT_FOUND)
        if self.repository.property_id_of(target) != subtree.prop.id:
            return failure(
                ErrorCode.CROSS_PROPERTY_RELOCATION,
                ERROR_TARGET_CROSS_PROPERTY,
                details={"targetBedId": target_id},
            )
        if target.id in subtree.bed_ids:
            return failure(
                ErrorCode.INVALID_RELOCATION_TARGET,
                ERROR_TARGET_IN_SCOPE.format(scope=subtree.scope.value.lower()),
                details={"targetBedId": target_id},
            )
        if target.id in claimed:
            return failure(
                ErrorCode.INVALID_RELOCATION_TARGET,
                ERROR_TARGET_REUSED.format(bed_number=target.bed_number),
                details={"targetBedId": target_id},
            )
        if not self.occupancy.is_free(target):
            return failure(
                ErrorCode.TARGET_BED_OCCUPIED,
                ERROR_TARGET_OCCUPIED,
                details={"targetBedId": target_id, "status": target.status.value},
            )
        return ServiceResult.success(target)

    # =========================================================================
    # Delete
    # =========================================================================

    def _remove(self, subtree: _Subtree) -> None:
        """Delete the node and shift the counters above it."""
        bed_count = len(subtree.beds)
        if subtree.scope == DeletionScope.BED:
            room = subtree.room
            self.repository.delete(subtree.node)
            self.rooms.adjust_beds(room, -1)
            self.floors.adjust_counters(subtree.floor, beds=-1)
            self.properties.adjust_counters(subtree.prop, beds=-1)
            self.occupancy.refresh_room_status(room)
        elif subtree.scope == DeletionScope.ROOM:
            self.rooms.delete(subtree.node)
            self.floors.adjust_counters(subtree.floor, rooms=-1, beds=-bed_count)
            self.properties.adjust_counters(subtree.prop, rooms=-1, beds=-bed_count)
        else:
            self.floors.delete(subtree.node)
            self.properties.adjust_counters(
                subtree.prop,
                floors=-1,
                rooms=-subtree.room_count,
                beds=-bed_count,
            )
        self.db.flush()

    def delete(
        self,
        scope: DeletionScope,
        entity_id: str,
        options: Optional[DeleteRequest] = None,
        actor: Optional[Actor] = None,
    ) -> ServiceResult[Dict[str, Any]]:
        """
        Delete a bed, room or floor.

        Args:
            scope: Kind of node
            entity_id: Its id
            options: ``force_delete`` and relocation targets
            actor: Acting user

        Returns:
            ServiceResult with a DeletionOutcome payload, or the blocked
            report when occupants are left unresolved
        """
        options = options or DeleteRequest()
        try:
            with self.transaction():
                loaded = self._load_subtree(scope, entity_id, actor)
                if not loaded:
                    raise TransactionAborted(loaded)
                subtree = loaded.data

                mapped = self._resolve_relocations(subtree, options)
                if not mapped:
                    raise TransactionAborted(mapped)
                relocations = mapped.data

                unresolved = [bed for bed in subtree.occupied if bed.tenant_id not in relocations]
                if unresolved and not options.force_delete:
                    raise TransactionAborted(self._blocked_report(subtree, unresolved))

                # Check every target before moving anyone
                claimed: Set[str] = set()
                moves = []
                sources = {bed.tenant_id: bed for bed in subtree.occupied}
                for tenant_id, target_id in relocations.items():
                    locked = self._lock_target(subtree, target_id, claimed)
                    if not locked:
                        raise TransactionAborted(locked)
                    claimed.add(target_id)
                    moves.append((sources[tenant_id], locked.data))

                outcome = DeletionOutcome(scope=scope.value, deleted_id=subtree.node.id)
                moved_tenants = []
                for source, target in moves:
                    tenant = self.db.get(Tenant, source.tenant_id)
                    self.occupancy.release(source)
                    self.occupancy.occupy(target, tenant)
                    moved_tenants.append((tenant, target))
                    outcome.relocated.append(
                        RelocationRecord(
                            tenant_id=tenant.id,
                            from_bed_id=source.id,
                            to_bed_id=target.id,
                            to_location=bed_location(target),
                        )
                    )

                displaced = []
                for bed in unresolved:
                    tenant = self.db.get(Tenant, bed.tenant_id)
                    self.occupancy.release(bed)
                    tenant.status = TenantStatus.PENDING
                    displaced.append(tenant)
                    outcome.displaced_tenants.append(self._tenant_summary(tenant))

                outcome.deleted_beds = len(subtree.beds)
                outcome.deleted_rooms = subtree.room_count
                property_id = subtree.prop.id
                self._remove(subtree)

            for tenant, target in moved_tenants:
                self.occupancy.announce_bed(target)
                self.occupancy.announce_tenant(tenant, TENANT_ACTION_RELOCATED)
            for tenant in displaced:
                self.occupancy.announce_tenant(tenant, TENANT_ACTION_DISPLACED)
            self.broadcaster.broadcast_activity(
                property_id,
                {
                    "type": f"{scope.value.lower()}_deleted",
                    "id": entity_id,
                    "relocated": len(moved_tenants),
                    "displaced": len(displaced),
                },
            )
            self._business_event(
                f"{scope.value.lower()}_deleted",
                entity_id=entity_id,
                property_id=property_id,
                deleted_beds=outcome.deleted_beds,
                relocated=len(moved_tenants),
                displaced=len(displaced),
                forced=bool(displaced),
                actor_id=actor.id if actor else None,
            )

            label = scope.value.capitalize()
            if displaced:
                message = SUCCESS_DELETED_FORCED.format(scope=label, count=len(displaced))
            elif moved_tenants:
                message = SUCCESS_DELETED_WITH_RELOCATION.format(scope=label, count=len(moved_tenants))
            else:
                message = SUCCESS_DELETED.format(scope=label)
            return ServiceResult.success(outcome.to_wire(), message=message)

        except TransactionAborted as aborted:
            return aborted.result
        except Exception as e:
            return self._handle_exception(e, f"delete {scope.value.lower()}", entity_id)

    def delete_property(self, property_id: str, actor: Actor) -> ServiceResult[Dict[str, Any]]:
        """
        Delete a property with its floors, rooms, beds, tenants and payments.

        There is no force option: any ACTIVE tenant blocks the delete.
        """
        try:
            with self.transaction():
                loaded = self._load_property(property_id, actor)
                if not loaded:
                    raise TransactionAborted(loaded)
                prop = loaded.data

                active = self.tenants.count_active(prop.id)
                if active:
                    raise TransactionAborted(
                        failure(
                            ErrorCode.ACTIVE_TENANTS_EXIST,
                            ERROR_ACTIVE_TENANTS.format(count=active),
                            details={"activeTenants": active},
                        )
                    )
                name = prop.name
                self.properties.delete(prop)

            self.broadcaster.broadcast_activity(
                property_id,
                {"type": "property_deleted", "id": property_id, "name": name},
            )
            self._business_event("property_deleted", property_id=property_id, actor_id=actor.id)
            return ServiceResult.success(
                {"id": property_id, "name": name},
                message=SUCCESS_PROPERTY_DELETED,
            )

        except TransactionAborted as aborted:
            return aborted.result
        except Exception as e:
            return self._handle_exception(e, "delete property", property_id)
