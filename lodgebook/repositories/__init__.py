"""
Persistence gateways.

Every gateway stores opaque payloads by collection key; ``SnapshotCodec``
turns collections into payloads and back.
"""

from lodgebook.repositories.base import PersistenceGateway
from lodgebook.repositories.file_gateway import FileGateway
from lodgebook.repositories.memory_gateway import InMemoryGateway
from lodgebook.repositories.snapshot_codec import SnapshotCodec
from lodgebook.repositories.sql_gateway import SqlAlchemyGateway

__all__ = [
    "PersistenceGateway",
    "FileGateway",
    "InMemoryGateway",
    "SnapshotCodec",
    "SqlAlchemyGateway",
]
