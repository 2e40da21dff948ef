"""
Schemas package.

Pydantic models for every stored entity and every store command.
"""

from lodgebook.schemas.common import (
    BaseSchema,
    Collection,
    MessSubscription,
    PaymentStatus,
    PaymentType,
    ResidentStatus,
    RoomStatus,
)
from lodgebook.schemas.mess.mess_fee import MessFeeConfig
from lodgebook.schemas.payment.payment_base import (
    Payment,
    PaymentCreate,
    PaymentUpdate,
)
from lodgebook.schemas.resident.resident_base import (
    Resident,
    ResidentCreate,
    ResidentUpdate,
)
from lodgebook.schemas.room.room_base import Room, RoomCreate, RoomUpdate

__all__ = [
    "BaseSchema",
    "Collection",
    "MessSubscription",
    "PaymentStatus",
    "PaymentType",
    "ResidentStatus",
    "RoomStatus",
    "MessFeeConfig",
    "Payment",
    "PaymentCreate",
    "PaymentUpdate",
    "Resident",
    "ResidentCreate",
    "ResidentUpdate",
    "Room",
    "RoomCreate",
    "RoomUpdate",
]
