# lodgebook/services/store/hostel_store.py
"""
Hostel store.

Owns the authoritative snapshot (residents, rooms, payments, mess fee)
and exposes the command and query surface used by callers.

Every command:
- validates its input into a typed command schema,
- runs inside a ``StoreUnitOfWork`` over a private copy of the snapshot,
- lends the copy's lists to the occupancy reconciler and payment ledger,
- commits and writes the touched collections only if nothing raised.

Read accessors return copies; the snapshot is never handed out.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Callable, Iterable, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel

from lodgebook.config.settings import Settings, get_settings
from lodgebook.core.exceptions import (
    CapacityViolationError,
    DuplicateRoomError,
    PersistenceError,
    ResidentNotFoundError,
    RoomNotFoundError,
    ValidationError,
)
from lodgebook.core.logging import get_logger
from lodgebook.repositories.base import PersistenceGateway
from lodgebook.repositories.snapshot_codec import SnapshotCodec
from lodgebook.schemas import (
    Collection,
    MessFeeConfig,
    Payment,
    PaymentCreate,
    PaymentStatus,
    PaymentType,
    PaymentUpdate,
    Resident,
    ResidentCreate,
    ResidentStatus,
    ResidentUpdate,
    Room,
    RoomCreate,
    RoomStatus,
    RoomUpdate,
)
from lodgebook.schemas.analytics import PendingDue
from lodgebook.services.analytics import occupancy_queries, revenue_queries
from lodgebook.services.common import Snapshot, SnapshotWriter, StoreUnitOfWork, coerce_command
from lodgebook.services.occupancy import OccupancyReconciler
from lodgebook.services.payment import PaymentLedger, default_payment_amount, new_id
from lodgebook.utils.date_utils import today_in

TSchema = TypeVar("TSchema", bound=BaseModel)
CommandInput = Union[BaseModel, Mapping[str, Any]]


class HostelStore:
    """
    Entity store for one lodging facility.

    Usage:
        >>> store = HostelStore(FileGateway("data")).load()
        >>> resident = store.add_resident({...})
        >>> store.total_revenue()
    """

    def __init__(
        self,
        gateway: PersistenceGateway,
        *,
        settings: Optional[Settings] = None,
        clock: Optional[Callable[[], date]] = None,
        id_factory: Optional[Callable[[], str]] = None,
        codec: Optional[SnapshotCodec] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.gateway = gateway
        self._clock = clock or (lambda: today_in(self.settings.TIMEZONE))
        self._id_factory = id_factory or new_id
        self._writer = SnapshotWriter(gateway, codec)
        self._logger = get_logger(__name__)
        self._seed_rooms = self._default_rooms()
        self._snapshot = Snapshot(
            rooms=[r.model_copy(deep=True) for r in self._seed_rooms],
            mess_fee=self._default_mess_fee(),
        )

    # ------------------------------------------------------------------ #
    # Startup
    # ------------------------------------------------------------------ #

    def _default_rooms(self) -> List[Room]:
        defaults = self.settings.defaults
        return [
            Room(
                id=self._id_factory(),
                room_number=number,
                capacity=defaults.DEFAULT_ROOM_CAPACITY,
                occupied_by=[],
                status=RoomStatus.VACANT,
            )
            for number in defaults.DEFAULT_ROOM_NUMBERS
        ]

    def _default_mess_fee(self) -> MessFeeConfig:
        defaults = self.settings.defaults
        return MessFeeConfig(
            monthly_rate=defaults.DEFAULT_MESS_RATE,
            is_active=defaults.DEFAULT_MESS_ACTIVE,
        )

    def load(self) -> "HostelStore":
        """
        Replace the snapshot with what the gateway holds.

        Absent collections fall back to defaults. Room occupant lists are
        repaired against the loaded residents. Defaults and repaired rooms
        are written back.

        Raises:
            PersistenceError: If a collection cannot be read or decoded
        """
        codec = self._writer.codec
        loaded = {}
        for collection in Collection:
            payload = self.gateway.load(collection.value)
            if payload is not None:
                loaded[collection] = codec.decode(collection, payload)

        snapshot = Snapshot(
            residents=loaded.get(Collection.RESIDENTS, []),
            rooms=loaded.get(Collection.ROOMS, [r.model_copy(deep=True) for r in self._seed_rooms]),
            payments=loaded.get(Collection.PAYMENTS, []),
            mess_fee=loaded.get(Collection.MESS_FEE, self._default_mess_fee()),
        )
        to_write = [c for c in Collection if c not in loaded]

        reconciler = OccupancyReconciler(snapshot.rooms)
        repaired = reconciler.repair(snapshot.residents)
        if repaired and Collection.ROOMS not in to_write:
            self._logger.warning(
                f"Repaired occupancy of {len(repaired)} room(s) at load",
                extra={"rooms": [r.room_number for r in repaired]},
            )
            to_write.append(Collection.ROOMS)
        crowded = reconciler.over_capacity()
        if crowded:
            self._logger.warning(
                f"{len(crowded)} room(s) over capacity after load",
                extra={"rooms": [r.room_number for r in crowded]},
            )

        self._snapshot = snapshot
        self._logger.info(
            f"Loaded {len(snapshot.residents)} residents, {len(snapshot.rooms)} rooms, "
            f"{len(snapshot.payments)} payments"
        )
        if to_write:
            self._writer.write(snapshot, to_write)
        return self

    # ------------------------------------------------------------------ #
    # Plumbing
    # ------------------------------------------------------------------ #

    def today(self) -> date:
        return self._clock()

    def _commit(self, snapshot: Snapshot) -> None:
        self._snapshot = snapshot

    def _unit_of_work(self, name: str) -> StoreUnitOfWork:
        return StoreUnitOfWork(self._snapshot, self._writer, self._commit, name=name)

    def _coerce(self, schema_cls: Type[TSchema], data: CommandInput) -> TSchema:
        try:
            return coerce_command(schema_cls, data)
        except ValidationError as exc:
            self._logger.warning(
                f"Rejected {schema_cls.__name__}: {exc.message}",
                extra={"field_errors": exc.field_errors},
            )
            raise

    @staticmethod
    def _find_resident(residents: List[Resident], resident_id: str) -> int:
        for index, resident in enumerate(residents):
            if resident.id == resident_id:
                return index
        raise ResidentNotFoundError(resident_id)

    # ------------------------------------------------------------------ #
    # Read accessors
    # ------------------------------------------------------------------ #

    @property
    def residents(self) -> List[Resident]:
        return [r.model_copy(deep=True) for r in self._snapshot.residents]

    @property
    def rooms(self) -> List[Room]:
        return [r.model_copy(deep=True) for r in self._snapshot.rooms]

    @property
    def payments(self) -> List[Payment]:
        return [p.model_copy(deep=True) for p in self._snapshot.payments]

    @property
    def mess_fee(self) -> MessFeeConfig:
        return self._snapshot.mess_fee.model_copy(deep=True)

    def get_resident(self, resident_id: str) -> Resident:
        index = self._find_resident(self._snapshot.residents, resident_id)
        return self._snapshot.residents[index].model_copy(deep=True)

    def get_room(self, room_number: str) -> Room:
        room = OccupancyReconciler(self._snapshot.rooms).find_room(room_number)
        if room is None:
            raise RoomNotFoundError(room_number)
        return room.model_copy(deep=True)

    def over_capacity_rooms(self) -> List[Room]:
        """
        Rooms holding more residents than they have beds.

        Only drifted stored data can produce these; commands never
        overfill a room. Lower the occupancy or raise the capacity to
        clear them.
        """
        rooms = OccupancyReconciler(self._snapshot.rooms).over_capacity()
        return [room.model_copy(deep=True) for room in rooms]

    # ------------------------------------------------------------------ #
    # Resident commands
    # ------------------------------------------------------------------ #

    def add_resident(self, command: CommandInput) -> Resident:
        """
        Onboard a resident into the named room.

        A paid security deposit payment is recorded for today when the
        deposit is greater than zero.

        Raises:
            ValidationError: If a field is missing or invalid
            RoomNotFoundError: If the room does not exist
            RoomUnavailableError: If the room is under maintenance
            RoomFullError: If the room has no free bed
        """
        data = self._coerce(ResidentCreate, command)
        with self._unit_of_work("add_resident") as uow:
            snapshot = uow.snapshot
            resident = Resident.model_validate(
                {**data.model_dump(), "id": self._id_factory(), "status": ResidentStatus.ACTIVE}
            )
            OccupancyReconciler(snapshot.rooms).reconcile(resident.id, None, resident.room_number)
            snapshot.residents.append(resident)
            uow.touch(Collection.RESIDENTS, Collection.ROOMS)

            ledger = PaymentLedger(snapshot.payments, snapshot.residents, self._id_factory)
            if ledger.record_security_deposit(resident, self.today()) is not None:
                uow.touch(Collection.PAYMENTS)

        self._logger.info(
            f"Added resident {resident.id} to room {resident.room_number}",
            extra={"command": "add_resident", "resident_id": resident.id},
        )
        return resident.model_copy(deep=True)

    def update_resident(self, command: CommandInput) -> Resident:
        """
        Replace a resident record.

        A changed room number, or a flip between active and inactive,
        moves the resident between rooms through the reconciler.

        Raises:
            ValidationError: If a field is missing or invalid
            ResidentNotFoundError: If the resident id is unknown
            RoomNotFoundError: If the new room does not exist
            RoomUnavailableError: If the new room is under maintenance
            RoomFullError: If the new room has no free bed
        """
        data = self._coerce(ResidentUpdate, command)
        with self._unit_of_work("update_resident") as uow:
            snapshot = uow.snapshot
            index = self._find_resident(snapshot.residents, data.id)
            existing = snapshot.residents[index]
            updated = data.to_resident()

            previous_room = existing.room_number if existing.is_active else None
            new_room = updated.room_number if updated.is_active else None
            OccupancyReconciler(snapshot.rooms).reconcile(updated.id, previous_room, new_room)

            snapshot.residents[index] = updated
            uow.touch(Collection.RESIDENTS)
            if previous_room != new_room:
                uow.touch(Collection.ROOMS)

        if previous_room != new_room:
            self._logger.info(
                f"Resident {updated.id} moved from room {previous_room} to {new_room}",
                extra={"command": "update_resident", "resident_id": updated.id},
            )
        else:
            self._logger.info(
                f"Updated resident {updated.id}",
                extra={"command": "update_resident", "resident_id": updated.id},
            )
        return updated.model_copy(deep=True)

    def remove_resident(self, resident_id: str) -> Resident:
        """
        Deactivate a resident and free their bed.

        Removing an already inactive resident changes nothing.

        Raises:
            ResidentNotFoundError: If the resident id is unknown
        """
        with self._unit_of_work("remove_resident") as uow:
            snapshot = uow.snapshot
            resident = snapshot.residents[self._find_resident(snapshot.residents, resident_id)]
            if not resident.is_active:
                self._logger.debug(f"Resident {resident_id} already inactive")
                return resident.model_copy(deep=True)

            OccupancyReconciler(snapshot.rooms).reconcile(resident.id, resident.room_number, None)
            resident.status = ResidentStatus.INACTIVE
            uow.touch(Collection.RESIDENTS, Collection.ROOMS)

        self._logger.info(
            f"Deactivated resident {resident_id}, room {resident.room_number} released",
            extra={"command": "remove_resident", "resident_id": resident_id},
        )
        return resident.model_copy(deep=True)

    # ------------------------------------------------------------------ #
    # Payment commands
    # ------------------------------------------------------------------ #

    def add_payment(self, command: CommandInput) -> Payment:
        """
        Raises:
            ValidationError: If a field is missing or invalid
            ResidentNotFoundError: If the resident id is unknown
        """
        data = self._coerce(PaymentCreate, command)
        with self._unit_of_work("add_payment") as uow:
            snapshot = uow.snapshot
            payment = PaymentLedger(snapshot.payments, snapshot.residents, self._id_factory).record(data)
            uow.touch(Collection.PAYMENTS)
        return payment.model_copy(deep=True)

    def update_payment(self, command: CommandInput) -> Payment:
        """
        Raises:
            ValidationError: If a field is invalid
            PaymentNotFoundError: If the payment id is unknown
        """
        data = self._coerce(PaymentUpdate, command)
        with self._unit_of_work("update_payment") as uow:
            snapshot = uow.snapshot
            payment = PaymentLedger(snapshot.payments, snapshot.residents, self._id_factory).update(data)
            uow.touch(Collection.PAYMENTS)
        return payment.model_copy(deep=True)

    def set_payment_status(self, payment_id: str, status: Union[PaymentStatus, str]) -> Payment:
        """
        Raises:
            ValidationError: If ``status`` is not a payment status
            PaymentNotFoundError: If the payment id is unknown
        """
        try:
            status = PaymentStatus(status)
        except ValueError as exc:
            raise ValidationError.for_field("status", f"'{status}' is not a payment status") from exc

        with self._unit_of_work("set_payment_status") as uow:
            snapshot = uow.snapshot
            ledger = PaymentLedger(snapshot.payments, snapshot.residents, self._id_factory)
            if ledger.get(payment_id).status is not status:
                ledger.set_status(payment_id, status)
                uow.touch(Collection.PAYMENTS)
            payment = ledger.get(payment_id)
        return payment.model_copy(deep=True)

    # ------------------------------------------------------------------ #
    # Room and mess commands
    # ------------------------------------------------------------------ #

    def add_room(self, command: CommandInput) -> Room:
        """
        Raises:
            ValidationError: If a field is missing or invalid
            DuplicateRoomError: If the room number is already registered
        """
        data = self._coerce(RoomCreate, command)
        with self._unit_of_work("add_room") as uow:
            snapshot = uow.snapshot
            if OccupancyReconciler(snapshot.rooms).find_room(data.room_number) is not None:
                raise DuplicateRoomError(data.room_number)
            room = Room(
                id=self._id_factory(),
                room_number=data.room_number,
                capacity=data.capacity,
                occupied_by=[],
                status=data.status,
            )
            snapshot.rooms.append(room)
            uow.touch(Collection.ROOMS)

        self._logger.info(
            f"Added room {room.room_number} with {room.capacity} beds",
            extra={"command": "add_room"},
        )
        return room.model_copy(deep=True)

    def update_room(self, command: CommandInput) -> Room:
        """
        Change the capacity and/or status of a room.

        A room whose occupants fill the new capacity is always ``occupied``.
        When no status is given it is recomputed from occupancy.

        Raises:
            ValidationError: If a field is invalid
            RoomNotFoundError: If the room id is unknown
            CapacityViolationError: If the capacity would drop below occupancy
        """
        data = self._coerce(RoomUpdate, command)
        with self._unit_of_work("update_room") as uow:
            snapshot = uow.snapshot
            room = next((r for r in snapshot.rooms if r.id == data.id), None)
            if room is None:
                raise RoomNotFoundError(message=f"Room with id '{data.id}' not found")

            capacity = data.capacity if data.capacity is not None else room.capacity
            if capacity < room.occupancy:
                raise CapacityViolationError(room.room_number, capacity, room.occupancy)

            room.capacity = capacity
            if room.is_full:
                room.status = RoomStatus.OCCUPIED
            elif data.status is not None:
                room.status = data.status
            else:
                OccupancyReconciler.recompute_status(room)
            uow.touch(Collection.ROOMS)

        self._logger.info(
            f"Updated room {room.room_number}: capacity {room.capacity}, status {room.status.value}",
            extra={"command": "update_room"},
        )
        return room.model_copy(deep=True)

    def update_mess_fee(self, command: CommandInput) -> MessFeeConfig:
        data = self._coerce(MessFeeConfig, command)
        with self._unit_of_work("update_mess_fee") as uow:
            uow.snapshot.mess_fee = data.model_copy(deep=True)
            uow.touch(Collection.MESS_FEE)
        self._logger.info(
            f"Mess fee set to {data.monthly_rate} ({'active' if data.is_active else 'inactive'})",
            extra={"command": "update_mess_fee"},
        )
        return data.model_copy(deep=True)

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def pending_payments(self) -> List[Payment]:
        return [p.model_copy(deep=True) for p in revenue_queries.pending_payments(self._snapshot.payments)]

    def payments_for(self, resident_id: str) -> List[Payment]:
        return [
            p.model_copy(deep=True)
            for p in revenue_queries.payments_for(self._snapshot.payments, resident_id)
        ]

    def total_revenue(self) -> int:
        return revenue_queries.total_revenue(self._snapshot.payments)

    def current_month_revenue(self) -> int:
        return revenue_queries.current_month_revenue(self._snapshot.payments, self.today())

    def revenue_for_range(self, start: date, end: date) -> int:
        return revenue_queries.revenue_for_range(self._snapshot.payments, start, end)

    def available_rooms(self) -> List[Room]:
        return [r.model_copy(deep=True) for r in occupancy_queries.available_rooms(self._snapshot.rooms)]

    def pending_dues(self, limit: Optional[int] = None) -> List[PendingDue]:
        return occupancy_queries.pending_dues(
            self._snapshot.payments, self._snapshot.residents, limit=limit
        )

    def default_payment_amount(self, resident_id: Optional[str], payment_type: PaymentType) -> int:
        resident = None
        if resident_id:
            resident = self._snapshot.residents[
                self._find_resident(self._snapshot.residents, resident_id)
            ]
        return default_payment_amount(resident, payment_type, self._snapshot.mess_fee)

    # ------------------------------------------------------------------ #
    # Persistence status
    # ------------------------------------------------------------------ #

    @property
    def unsaved_collections(self) -> List[Collection]:
        """Collections whose last write failed and is waiting for a retry."""
        return self._writer.pending

    @property
    def last_persistence_error(self) -> Optional[PersistenceError]:
        return self._writer.last_error

    @property
    def has_unsaved_changes(self) -> bool:
        return bool(self._writer.pending)

    def flush(self) -> None:
        """
        Retry every pending write.

        Raises:
            PersistenceError: If any collection is still unsaved
        """
        self._writer.retry(self._snapshot)
        pending: Iterable[Collection] = self._writer.pending
        if pending:
            names = ", ".join(c.value for c in pending)
            raise PersistenceError(
                f"Collections still unsaved: {names}",
                collection=names,
                operation="flush",
            )
