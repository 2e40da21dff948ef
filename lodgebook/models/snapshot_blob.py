# lodgebook/models/snapshot_blob.py
"""
Snapshot blob table.

One row per collection key; the payload is the serialized collection
exactly as the other gateways store it.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column

from lodgebook.models.base import Base

__all__ = ["SnapshotBlob"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SnapshotBlob(Base):
    """Serialized collection keyed by collection name."""

    __tablename__ = "snapshot_blobs"

    key: Mapped[str] = mapped_column(
        String(50),
        primary_key=True,
        comment="Collection name (residents, payments, rooms, messFee)",
    )
    payload: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<SnapshotBlob key={self.key!r} bytes={len(self.payload or b'')}>"
