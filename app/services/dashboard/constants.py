"""
Dashboard service constants.
"""

from typing import Final

SUCCESS_COUNTERS_CONSISTENT: Final[str] = "All counters match the stored rows"
SUCCESS_COUNTERS_DRIFTED: Final[str] = "Counter drift detected"
SUCCESS_COUNTERS_RECONCILED: Final[str] = "Counters reconciled"

# Keys of the wire report, mapped to model columns
COUNTER_COLUMNS: Final[dict] = {
    "totalFloors": "total_floors",
    "totalRooms": "total_rooms",
    "totalBeds": "total_beds",
    "currentBeds": "current_beds",
}
