"""Dashboard schemas."""

from app.schemas.dashboard.dashboard import (
    OccupancySummary,
    CounterDrift,
    CounterReport,
)

__all__ = [
    "OccupancySummary",
    "CounterDrift",
    "CounterReport",
]
