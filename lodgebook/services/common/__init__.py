# lodgebook/services/common/__init__.py
"""
Shared service-layer infrastructure.

- **StoreUnitOfWork**: copy-on-write scope of a single store command
- **SnapshotWriter**: gateway writes with retry of failed collections
- **mapping**: command validation into typed schemas
"""
from __future__ import annotations

from .mapping import coerce_command, field_errors_from
from .unit_of_work import Snapshot, SnapshotWriter, StoreUnitOfWork

__all__ = [
    "coerce_command",
    "field_errors_from",
    "Snapshot",
    "SnapshotWriter",
    "StoreUnitOfWork",
]
