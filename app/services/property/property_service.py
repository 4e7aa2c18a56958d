# --- File: app/services/property/property_service.py ---
"""
Property service: registration, lookup, listing and updates.

Deleting a property goes through the deletion service, which refuses while
any tenant is still ACTIVE.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.events.broadcaster import Broadcaster
from app.core.logging import get_logger
from app.core.security import Actor
from app.models.property.property import Property
from app.repositories.property import PropertyRepository
from app.schemas.property import PropertyCreate, PropertyResponse, PropertyUpdate
from app.services.base import BaseService, ServiceResult, TransactionAborted
from app.services.property.constants import (
    SUCCESS_PROPERTY_CREATED,
    SUCCESS_PROPERTY_UPDATED,
)

logger = get_logger(__name__)


class PropertyService(BaseService[Property, PropertyRepository]):
    """
    Property CRUD for owners and admins.

    Owners see their own properties; admins see all of them.
    """

    def __init__(
        self,
        repository: PropertyRepository,
        db_session: Session,
        broadcaster: Optional[Broadcaster] = None,
    ):
        super().__init__(repository, db_session, broadcaster)

    def create_property(
        self,
        request: PropertyCreate,
        actor: Actor,
    ) -> ServiceResult[Dict[str, Any]]:
        """
        Register a property owned by the acting user.

        Args:
            request: Property details
            actor: Acting user, recorded as owner

        Returns:
            ServiceResult containing the created property
        """
        try:
            logger.info(f"Creating property: {request.name}")
            with self.transaction():
                data = request.model_dump()
                data["owner_id"] = actor.id
                prop = self.repository.create(data)

            payload = PropertyResponse.model_validate(prop).to_wire()
            self.broadcaster.broadcast_activity(
                prop.id,
                {"type": "property_created", "id": prop.id, "name": prop.name},
            )
            self._business_event("property_created", property_id=prop.id, actor_id=actor.id)
            return ServiceResult.success(payload, message=SUCCESS_PROPERTY_CREATED)

        except Exception as e:
            return self._handle_exception(e, "create property")

    def get_property(self, property_id: str, actor: Actor) -> ServiceResult[Dict[str, Any]]:
        loaded = self._load_property(property_id, actor)
        if not loaded:
            return loaded
        return ServiceResult.success(PropertyResponse.model_validate(loaded.data).to_wire())

    def list_properties(self, actor: Actor) -> ServiceResult[List[Dict[str, Any]]]:
        """Properties visible to ``actor``."""
        try:
            owner_id = None if actor.is_admin else actor.id
            props = self.repository.find_for_owner(owner_id)
            return ServiceResult.success(
                [PropertyResponse.model_validate(p).to_wire() for p in props],
                metadata={"count": len(props)},
            )
        except Exception as e:
            return self._handle_exception(e, "list properties")

    def update_property(
        self,
        property_id: str,
        request: PropertyUpdate,
        actor: Actor,
    ) -> ServiceResult[Dict[str, Any]]:
        try:
            with self.transaction():
                loaded = self._load_property(property_id, actor)
                if not loaded:
                    raise TransactionAborted(loaded)
                prop = self.repository.update(loaded.data, request.model_dump(exclude_unset=True))

            self._log_operation("update property", property_id)
            return ServiceResult.success(
                PropertyResponse.model_validate(prop).to_wire(),
                message=SUCCESS_PROPERTY_UPDATED,
            )

        except TransactionAborted as aborted:
            return aborted.result
        except Exception as e:
            return self._handle_exception(e, "update property", property_id)
