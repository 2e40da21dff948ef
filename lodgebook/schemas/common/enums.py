# --- File: lodgebook/schemas/common/enums.py ---
"""
Enumerations shared by schemas and services.
"""

from enum import Enum

__all__ = [
    "ResidentStatus",
    "MessSubscription",
    "RoomStatus",
    "PaymentStatus",
    "PaymentType",
    "Collection",
]


class ResidentStatus(str, Enum):
    """Resident lifecycle status."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class MessSubscription(str, Enum):
    """Meal plan subscription flag."""

    SUBSCRIBED = "subscribed"
    UNSUBSCRIBED = "unsubscribed"


class RoomStatus(str, Enum):
    """Room status enumeration."""

    VACANT = "vacant"
    OCCUPIED = "occupied"
    MAINTENANCE = "maintenance"


class PaymentStatus(str, Enum):
    """Payment status enumeration."""

    PAID = "paid"
    PENDING = "pending"
    OVERDUE = "overdue"

    @property
    def is_outstanding(self) -> bool:
        return self in (PaymentStatus.PENDING, PaymentStatus.OVERDUE)


class PaymentType(str, Enum):
    """Payment type enumeration."""

    RENT = "rent"
    MESS = "mess"
    SECURITY = "security"
    OTHER = "other"


class Collection(str, Enum):
    """Snapshot collections and the storage keys they are saved under."""

    RESIDENTS = "residents"
    PAYMENTS = "payments"
    ROOMS = "rooms"
    MESS_FEE = "messFee"
