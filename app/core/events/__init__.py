"""
Real-time event channel for the PG manager application.
"""

from .broadcaster import Broadcaster, BroadcastMessage, broadcaster, get_broadcaster

__all__ = [
    "Broadcaster",
    "BroadcastMessage",
    "broadcaster",
    "get_broadcaster",
]
