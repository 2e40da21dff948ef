from lodgebook.core.exceptions import (
    BaseAppException,
    CapacityViolationError,
    DuplicateRoomError,
    ErrorCode,
    OccupancyError,
    PaymentNotFoundError,
    PersistenceError,
    ResidentNotFoundError,
    ResourceNotFoundError,
    RoomFullError,
    RoomNotFoundError,
    RoomUnavailableError,
    ValidationError,
)

__all__ = [
    "BaseAppException",
    "CapacityViolationError",
    "DuplicateRoomError",
    "ErrorCode",
    "OccupancyError",
    "PaymentNotFoundError",
    "PersistenceError",
    "ResidentNotFoundError",
    "ResourceNotFoundError",
    "RoomFullError",
    "RoomNotFoundError",
    "RoomUnavailableError",
    "ValidationError",
]
