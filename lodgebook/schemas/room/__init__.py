from lodgebook.schemas.room.room_base import Room, RoomCreate, RoomUpdate

__all__ = ["Room", "RoomCreate", "RoomUpdate"]
