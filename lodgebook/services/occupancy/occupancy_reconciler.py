# lodgebook/services/occupancy/occupancy_reconciler.py
"""
Occupancy reconciler.

Keeps ``Room.occupied_by`` and ``Room.status`` consistent with resident
room assignments. It is the only writer of ``occupied_by``.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from lodgebook.core.exceptions import (
    RoomFullError,
    RoomNotFoundError,
    RoomUnavailableError,
)
from lodgebook.schemas import Resident, Room, RoomStatus

logger = logging.getLogger(__name__)


class OccupancyReconciler:
    """
    Move a resident between rooms within the room list of one command.

    The room list is lent by the store for the duration of a unit of work
    and mutated in place.
    """

    def __init__(self, rooms: List[Room]) -> None:
        self.rooms = rooms

    def find_room(self, room_number: Optional[str]) -> Optional[Room]:
        if room_number is None:
            return None
        for room in self.rooms:
            if room.room_number == room_number:
                return room
        return None

    @staticmethod
    def recompute_status(room: Room) -> RoomStatus:
        """
        Derive the status after an occupancy change.

        A full room is ``occupied``; otherwise ``maintenance`` is kept and
        everything else becomes ``vacant``.
        """
        if room.occupancy >= room.capacity:
            room.status = RoomStatus.OCCUPIED
        elif room.status is not RoomStatus.MAINTENANCE:
            room.status = RoomStatus.VACANT
        return room.status

    def reconcile(
        self,
        resident_id: str,
        previous_room: Optional[str],
        new_room: Optional[str],
    ) -> None:
        """
        Detach ``resident_id`` from ``previous_room`` and attach it to ``new_room``.

        Either side may be ``None``: attach only, detach only. The target
        room is validated before the previous room is modified, so a
        rejected move leaves every room unchanged.

        Raises:
            RoomNotFoundError: If ``new_room`` does not exist
            RoomUnavailableError: If ``new_room`` is under maintenance
            RoomFullError: If ``new_room`` has no free bed
        """
        if previous_room == new_room:
            if new_room is not None:
                target = self.find_room(new_room)
                if target is None:
                    raise RoomNotFoundError(new_room)
            return

        target = None
        if new_room is not None:
            target = self.find_room(new_room)
            if target is None:
                raise RoomNotFoundError(new_room)
            if resident_id not in target.occupied_by:
                if target.is_under_maintenance:
                    raise RoomUnavailableError(new_room, resident_id=resident_id)
                if target.is_full:
                    raise RoomFullError(
                        new_room,
                        capacity=target.capacity,
                        occupancy=target.occupancy,
                        resident_id=resident_id,
                    )

        source = self.find_room(previous_room)
        if source is not None and resident_id in source.occupied_by:
            source.occupied_by = [rid for rid in source.occupied_by if rid != resident_id]
            self.recompute_status(source)
            logger.debug(f"Resident {resident_id} left room {source.room_number}")
        elif previous_room is not None:
            logger.warning(
                f"Resident {resident_id} was not listed in room {previous_room}; nothing to detach"
            )

        if target is not None and resident_id not in target.occupied_by:
            target.occupied_by = [*target.occupied_by, resident_id]
            self.recompute_status(target)
            logger.debug(f"Resident {resident_id} joined room {target.room_number}")

    def over_capacity(self) -> List[Room]:
        """Rooms holding more occupants than their capacity."""
        return [room for room in self.rooms if room.occupancy > room.capacity]

    def repair(self, residents: Sequence[Resident]) -> List[Room]:
        """
        Rebuild every occupant list from the active residents.

        Existing order is kept for residents already listed; missing ones
        are appended in resident order. Residents pointing at unknown
        rooms are logged and left unassigned. Rooms left over capacity are
        kept as they are; see ``over_capacity``.

        Returns:
            The rooms whose occupant list or status changed
        """
        expected: Dict[str, List[str]] = {room.room_number: [] for room in self.rooms}
        for resident in residents:
            if not resident.is_active:
                continue
            if resident.room_number not in expected:
                logger.warning(
                    f"Active resident {resident.id} references unknown room {resident.room_number}"
                )
                continue
            expected[resident.room_number].append(resident.id)

        changed: List[Room] = []
        for room in self.rooms:
            wanted = expected[room.room_number]
            kept = [rid for rid in room.occupied_by if rid in wanted]
            rebuilt = kept + [rid for rid in wanted if rid not in kept]
            before = (list(room.occupied_by), room.status)
            if rebuilt != room.occupied_by:
                logger.warning(
                    f"Room {room.room_number} occupants drifted: "
                    f"{room.occupied_by} -> {rebuilt}"
                )
                room.occupied_by = rebuilt
            if len(rebuilt) > room.capacity:
                logger.warning(
                    f"Room {room.room_number} holds {len(rebuilt)} residents "
                    f"over capacity {room.capacity}"
                )
            self.recompute_status(room)
            if (room.occupied_by, room.status) != before:
                changed.append(room)
        return changed
