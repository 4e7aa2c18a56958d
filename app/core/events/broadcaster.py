"""
Real-time broadcast channel for bed, tenant and activity updates.

Services call the broadcaster after a successful commit. The in-process
implementation fans each message out to the handlers subscribed for the
property; a WebSocket transport subscribes a handler per connected room.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

BED_UPDATE = "bed_update"
TENANT_UPDATE = "tenant_update"
ACTIVITY = "activity"


@dataclass
class BroadcastMessage:
    """A message sent to everyone watching a property."""

    event_type: str
    property_id: str
    payload: Dict[str, Any]
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.event_type,
            "propertyId": self.property_id,
            "data": self.payload,
            "timestamp": self.timestamp.isoformat(),
        }


Handler = Callable[[BroadcastMessage], None]


class Broadcaster:
    """
    Property-scoped publish/subscribe channel.

    Handlers registered with ``property_id=None`` receive every message.
    """

    def __init__(self):
        self._handlers: Dict[Optional[str], List[Handler]] = {}

    def subscribe(self, handler: Handler, property_id: Optional[str] = None) -> None:
        """
        Subscribe a handler to a property's messages.

        Args:
            handler: Callable receiving each BroadcastMessage
            property_id: Property to watch, or None for all properties
        """
        self._handlers.setdefault(property_id, []).append(handler)
        logger.info(f"Registered broadcast handler for property: {property_id or '*'}")

    def unsubscribe(self, handler: Handler, property_id: Optional[str] = None) -> None:
        handlers = self._handlers.get(property_id, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, message: BroadcastMessage) -> None:
        """Deliver a message to the property's handlers and global handlers."""
        handlers = self._handlers.get(message.property_id, []) + self._handlers.get(None, [])
        logger.debug(f"Broadcasting {message.event_type} to {len(handlers)} handlers")
        for handler in handlers:
            try:
                handler(message)
            except Exception as e:
                # A failing subscriber must not undo a committed change
                logger.error(f"Broadcast handler failed for {message.event_type}: {str(e)}")

    def broadcast_bed_update(self, property_id: str, bed_data: Dict[str, Any]) -> None:
        self.publish(BroadcastMessage(BED_UPDATE, property_id, bed_data))

    def broadcast_tenant_update(self, property_id: str, tenant_data: Dict[str, Any], action: str) -> None:
        self.publish(
            BroadcastMessage(TENANT_UPDATE, property_id, {"tenant": tenant_data, "action": action})
        )

    def broadcast_activity(self, property_id: str, activity: Dict[str, Any]) -> None:
        self.publish(BroadcastMessage(ACTIVITY, property_id, activity))


# Global broadcaster instance
broadcaster = Broadcaster()


def get_broadcaster() -> Broadcaster:
    """Return the process-wide broadcaster."""
    return broadcaster
