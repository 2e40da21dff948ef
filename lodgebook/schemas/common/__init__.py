from lodgebook.schemas.common.base import (
    BaseCreateSchema,
    BaseSchema,
    BaseUpdateSchema,
    IdentifiedMixin,
)
from lodgebook.schemas.common.enums import (
    Collection,
    MessSubscription,
    PaymentStatus,
    PaymentType,
    ResidentStatus,
    RoomStatus,
)

__all__ = [
    "BaseCreateSchema",
    "BaseSchema",
    "BaseUpdateSchema",
    "IdentifiedMixin",
    "Collection",
    "MessSubscription",
    "PaymentStatus",
    "PaymentType",
    "ResidentStatus",
    "RoomStatus",
]
