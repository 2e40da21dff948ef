from lodgebook.schemas.resident.resident_base import (
    Resident,
    ResidentBase,
    ResidentCreate,
    ResidentUpdate,
)

__all__ = ["Resident", "ResidentBase", "ResidentCreate", "ResidentUpdate"]
