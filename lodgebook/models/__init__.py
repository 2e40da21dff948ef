from lodgebook.models.base import Base
from lodgebook.models.snapshot_blob import SnapshotBlob

__all__ = ["Base", "SnapshotBlob"]
