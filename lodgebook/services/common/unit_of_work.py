# lodgebook/services/common/unit_of_work.py
"""
Unit of Work over the in-memory snapshot.

Each store command works on a private deep copy of the snapshot. On a
clean exit the copy is committed and the collections it touched are
written through the persistence gateway; on any exception the copy is
dropped and the committed snapshot is left exactly as it was.
"""
from __future__ import annotations

import logging
from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional

from lodgebook.core.exceptions import PersistenceError
from lodgebook.repositories.base import PersistenceGateway
from lodgebook.repositories.snapshot_codec import SnapshotCodec
from lodgebook.schemas import Collection, MessFeeConfig, Payment, Resident, Room

logger = logging.getLogger(__name__)


@dataclass
class Snapshot:
    """Current state of every entity collection."""

    residents: List[Resident] = field(default_factory=list)
    rooms: List[Room] = field(default_factory=list)
    payments: List[Payment] = field(default_factory=list)
    mess_fee: MessFeeConfig = field(
        default_factory=lambda: MessFeeConfig(monthly_rate=0, is_active=False)
    )

    def copy(self) -> "Snapshot":
        return Snapshot(
            residents=[r.model_copy(deep=True) for r in self.residents],
            rooms=[r.model_copy(deep=True) for r in self.rooms],
            payments=[p.model_copy(deep=True) for p in self.payments],
            mess_fee=self.mess_fee.model_copy(deep=True),
        )

    def get(self, collection: Collection) -> Any:
        if collection is Collection.RESIDENTS:
            return self.residents
        if collection is Collection.ROOMS:
            return self.rooms
        if collection is Collection.PAYMENTS:
            return self.payments
        return self.mess_fee


class SnapshotWriter:
    """
    Writes collections through a gateway and remembers the ones that failed.

    A failed collection stays pending and is written again, with its
    latest content, on the next ``write`` or ``retry`` call.
    """

    def __init__(
        self,
        gateway: PersistenceGateway,
        codec: Optional[SnapshotCodec] = None,
    ) -> None:
        self.gateway = gateway
        self.codec = codec or SnapshotCodec()
        self._pending: Dict[Collection, None] = {}
        self.last_error: Optional[PersistenceError] = None

    @property
    def pending(self) -> List[Collection]:
        return list(self._pending)

    def write(self, snapshot: Snapshot, collections: Iterable[Collection]) -> None:
        for collection in collections:
            self._pending[collection] = None
        self.retry(snapshot)

    def retry(self, snapshot: Snapshot) -> None:
        for collection in list(self._pending):
            payload = self.codec.encode(collection, snapshot.get(collection))
            try:
                self.gateway.save(collection.value, payload)
            except PersistenceError as exc:
                self.last_error = exc
                logger.error(
                    f"Saving '{collection.value}' failed; kept for retry: {exc.message}"
                )
                continue
            del self._pending[collection]
            logger.debug(f"Saved '{collection.value}' ({len(payload)} bytes)")
        if not self._pending:
            self.last_error = None


class StoreUnitOfWork(AbstractContextManager["StoreUnitOfWork"]):
    """
    Scope of a single store command.

    Usage:
        >>> with StoreUnitOfWork(store.snapshot, writer, store.commit) as uow:
        ...     uow.snapshot.payments.append(payment)
        ...     uow.touch(Collection.PAYMENTS)
    """

    def __init__(
        self,
        committed: Snapshot,
        writer: SnapshotWriter,
        on_commit: Callable[[Snapshot], None],
        *,
        name: str = "command",
    ) -> None:
        self._committed = committed
        self._writer = writer
        self._on_commit = on_commit
        self.name = name

        self.snapshot: Optional[Snapshot] = None
        self._touched: Dict[Collection, None] = {}

    def __enter__(self) -> "StoreUnitOfWork":
        if self.snapshot is not None:
            raise RuntimeError("StoreUnitOfWork context already entered")
        self.snapshot = self._committed.copy()
        self._touched.clear()
        logger.debug(f"Unit of work '{self.name}' started")
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> bool:
        working = self.snapshot
        self.snapshot = None
        if working is None:
            return False

        if exc_type is not None:
            logger.warning(
                f"Unit of work '{self.name}' discarded due to {exc_type.__name__}"
            )
            return False

        if self._touched:
            self._on_commit(working)
            logger.debug(
                f"Unit of work '{self.name}' committed: "
                f"{', '.join(c.value for c in self._touched)}"
            )
        self._writer.write(working, self.touched)
        return False

    def touch(self, *collections: Collection) -> None:
        """Mark collections as changed by this command."""
        if self.snapshot is None:
            raise RuntimeError("StoreUnitOfWork.touch() called outside of context")
        for collection in collections:
            self._touched[collection] = None

    @property
    def touched(self) -> List[Collection]:
        return list(self._touched)

    @property
    def is_active(self) -> bool:
        return self.snapshot is not None
