"""
Custom Exceptions for the lodging ledger.

This module defines the exception hierarchy raised by the store, the
occupancy reconciler, the payment ledger and the persistence gateways.
Every exception carries a machine readable error code and a details
mapping so callers can report the offending field, room or resident.
"""

from typing import Any, Dict, List, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"

    # Entity lookups
    RESIDENT_NOT_FOUND = "RESIDENT_NOT_FOUND"
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    PAYMENT_NOT_FOUND = "PAYMENT_NOT_FOUND"

    # Occupancy errors
    ROOM_FULL = "ROOM_FULL"
    ROOM_UNAVAILABLE = "ROOM_UNAVAILABLE"
    CAPACITY_VIOLATION = "CAPACITY_VIOLATION"

    # Storage errors
    PERSISTENCE_ERROR = "PERSISTENCE_ERROR"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format"""
        return {
            "error": {
                "message": self.message,
                "code": self.error_code.value,
                "details": self.details,
                "type": self.__class__.__name__
            }
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# Validation Exceptions
# ========================================

class ValidationError(BaseAppException):
    """Exception raised when command data validation fails"""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, List[str]]] = None,
    ):
        self.field_errors = field_errors or {}
        details = {"field_errors": self.field_errors} if self.field_errors else {}
        super().__init__(message, ErrorCode.VALIDATION_ERROR, details)

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        """Build a validation error reporting a single offending field."""
        return cls(f"Invalid value for '{field}': {message}", {field: [message]})


class DuplicateRoomError(BaseAppException):
    """Exception raised when a room number is registered twice"""

    def __init__(self, room_number: str):
        super().__init__(
            f"Room '{room_number}' already exists",
            ErrorCode.DUPLICATE_ENTRY,
            {"field": "room_number", "value": room_number},
        )
        self.room_number = room_number


# ========================================
# Resource Not Found Exceptions
# ========================================

class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None
    ):
        if not message:
            message = f"{resource_type} not found"
            if resource_id:
                message += f" (ID: {resource_id})"

        details = {
            "resource_type": resource_type,
            "resource_id": resource_id
        }
        super().__init__(message, ErrorCode.RESOURCE_NOT_FOUND, details)
        self.resource_type = resource_type
        self.resource_id = resource_id


class ResidentNotFoundError(ResourceNotFoundError):
    """Exception raised when a resident is not found"""

    def __init__(self, resident_id: Optional[str] = None):
        super().__init__("Resident", resident_id)
        self.error_code = ErrorCode.RESIDENT_NOT_FOUND


class RoomNotFoundError(ResourceNotFoundError):
    """Exception raised when a room is not found"""

    def __init__(
        self,
        room_number: Optional[str] = None,
        message: Optional[str] = None
    ):
        if not message:
            message = "Room not found"
            if room_number:
                message = f"Room '{room_number}' not found"
        super().__init__("Room", room_number, message)
        self.error_code = ErrorCode.ROOM_NOT_FOUND
        self.room_number = room_number


class PaymentNotFoundError(ResourceNotFoundError):
    """Exception raised when a payment is not found"""

    def __init__(self, payment_id: Optional[str] = None):
        super().__init__("Payment", payment_id)
        self.error_code = ErrorCode.PAYMENT_NOT_FOUND


# ========================================
# Occupancy Exceptions
# ========================================

class OccupancyError(BaseAppException):
    """Base class for room occupancy exceptions"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        room_number: Optional[str] = None,
        capacity: Optional[int] = None,
        occupancy: Optional[int] = None,
        resident_id: Optional[str] = None,
    ):
        details = {
            "room_number": room_number,
            "capacity": capacity,
            "occupancy": occupancy,
            "resident_id": resident_id,
        }
        super().__init__(message, error_code, details)
        self.room_number = room_number


class RoomFullError(OccupancyError):
    """Exception raised when a room has no free bed for a new occupant"""

    def __init__(
        self,
        room_number: str,
        capacity: int,
        occupancy: int,
        resident_id: Optional[str] = None,
    ):
        super().__init__(
            f"Room '{room_number}' is full ({occupancy}/{capacity} occupied)",
            ErrorCode.ROOM_FULL,
            room_number=room_number,
            capacity=capacity,
            occupancy=occupancy,
            resident_id=resident_id,
        )


class RoomUnavailableError(OccupancyError):
    """Exception raised when a room under maintenance is assigned a new occupant"""

    def __init__(self, room_number: str, resident_id: Optional[str] = None):
        super().__init__(
            f"Room '{room_number}' is under maintenance and cannot take new occupants",
            ErrorCode.ROOM_UNAVAILABLE,
            room_number=room_number,
            resident_id=resident_id,
        )


class CapacityViolationError(OccupancyError):
    """Exception raised when a capacity change would drop below current occupancy"""

    def __init__(self, room_number: str, requested_capacity: int, occupancy: int):
        super().__init__(
            f"Room '{room_number}' has {occupancy} occupants; "
            f"capacity cannot be reduced to {requested_capacity}",
            ErrorCode.CAPACITY_VIOLATION,
            room_number=room_number,
            capacity=requested_capacity,
            occupancy=occupancy,
        )


# ========================================
# Persistence Exceptions
# ========================================

class PersistenceError(BaseAppException):
    """Exception raised when a snapshot cannot be read from or written to storage"""

    def __init__(
        self,
        message: str = "Snapshot persistence failed",
        collection: Optional[str] = None,
        operation: Optional[str] = None,
    ):
        details = {
            "collection": collection,
            "operation": operation
        }
        super().__init__(message, ErrorCode.PERSISTENCE_ERROR, details)
        self.collection = collection
        self.operation = operation
