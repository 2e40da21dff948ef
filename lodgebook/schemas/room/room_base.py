# --- File: lodgebook/schemas/room/room_base.py ---
"""
Room schemas.

``Room.occupied_by`` is an index derived from resident assignments. The
commands below deliberately have no occupant field: only the occupancy
reconciler writes it.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field, field_validator

from lodgebook.schemas.common.base import (
    BaseCreateSchema,
    BaseSchema,
    BaseUpdateSchema,
    IdentifiedMixin,
)
from lodgebook.schemas.common.enums import RoomStatus

__all__ = [
    "Room",
    "RoomCreate",
    "RoomUpdate",
]


def _normalize_room_number(v: str) -> str:
    v = " ".join(v.split())
    if not v:
        raise ValueError("Room number cannot be empty")
    return v


class Room(BaseSchema, IdentifiedMixin):
    """Stored room record."""

    room_number: str = Field(..., min_length=1, max_length=50)
    capacity: int = Field(..., ge=1, description="Number of beds")
    occupied_by: List[str] = Field(
        default_factory=list,
        description="Ids of the active residents assigned to this room",
    )
    status: RoomStatus = Field(default=RoomStatus.VACANT)

    @property
    def occupancy(self) -> int:
        return len(self.occupied_by)

    @property
    def available_beds(self) -> int:
        return max(self.capacity - self.occupancy, 0)

    @property
    def is_full(self) -> bool:
        return self.occupancy >= self.capacity

    @property
    def is_under_maintenance(self) -> bool:
        return self.status is RoomStatus.MAINTENANCE


class RoomCreate(BaseCreateSchema):
    """Register a new room."""

    room_number: str = Field(..., min_length=1, max_length=50)
    capacity: int = Field(..., ge=1)
    status: RoomStatus = Field(default=RoomStatus.VACANT)

    @field_validator("room_number")
    @classmethod
    def validate_room_number(cls, v: str) -> str:
        return _normalize_room_number(v)


class RoomUpdate(BaseUpdateSchema, IdentifiedMixin):
    """Change capacity and/or status of an existing room."""

    capacity: Optional[int] = Field(default=None, ge=1)
    status: Optional[RoomStatus] = Field(default=None)
