"""
Read-model schemas for revenue, occupancy and dues reports.

These are derived on demand and never stored.
"""

from __future__ import annotations

from datetime import date as Date

from pydantic import Field, computed_field

from lodgebook.schemas.common.base import BaseSchema
from lodgebook.schemas.common.enums import RoomStatus
from lodgebook.schemas.payment.payment_base import Payment

__all__ = [
    "MonthlyRevenue",
    "OutstandingSummary",
    "RoomOccupancy",
    "OccupancySummary",
    "PendingDue",
]


class MonthlyRevenue(BaseSchema):
    """Collected revenue of one billing month, split by payment type."""

    month: str = Field(..., description="Billing month (YYYY-MM)")
    rent: int = Field(default=0)
    mess: int = Field(default=0)
    other: int = Field(default=0)

    @computed_field
    @property
    def total(self) -> int:
        return self.rent + self.mess + self.other


class OutstandingSummary(BaseSchema):
    pending_count: int = 0
    pending_amount: int = 0
    overdue_count: int = 0
    overdue_amount: int = 0

    @computed_field
    @property
    def total_count(self) -> int:
        return self.pending_count + self.overdue_count

    @computed_field
    @property
    def total_amount(self) -> int:
        return self.pending_amount + self.overdue_amount


class RoomOccupancy(BaseSchema):
    room_number: str
    capacity: int
    occupied: int
    available: int
    status: RoomStatus


class OccupancySummary(BaseSchema):
    """Facility-wide bed usage."""

    total_rooms: int = 0
    active_residents: int = 0
    total_capacity: int = 0
    occupied_beds: int = 0

    @computed_field
    @property
    def vacant_beds(self) -> int:
        return max(self.total_capacity - self.occupied_beds, 0)

    @computed_field
    @property
    def occupancy_rate(self) -> float:
        """Occupied share of all beds, as a percentage rounded to one decimal."""
        if self.total_capacity == 0:
            return 0.0
        return round(self.occupied_beds * 100 / self.total_capacity, 1)


class PendingDue(BaseSchema):
    """An outstanding payment joined with its resident."""

    payment: Payment
    resident_name: str
    room_number: str
    due_date: Date

