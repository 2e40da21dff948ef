from lodgebook.schemas.analytics.reports import (
    MonthlyRevenue,
    OccupancySummary,
    OutstandingSummary,
    PendingDue,
    RoomOccupancy,
)

__all__ = [
    "MonthlyRevenue",
    "OccupancySummary",
    "OutstandingSummary",
    "PendingDue",
    "RoomOccupancy",
]
