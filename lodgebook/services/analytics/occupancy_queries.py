"""
Occupancy, residents and dues views.
"""

from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from lodgebook.schemas import Payment, Resident, ResidentStatus, Room
from lodgebook.schemas.analytics import OccupancySummary, PendingDue, RoomOccupancy
from lodgebook.utils.date_utils import day_in_month, month_key, months_between


def room_occupancy(rooms: Iterable[Room]) -> List[RoomOccupancy]:
    return [
        RoomOccupancy(
            room_number=room.room_number,
            capacity=room.capacity,
            occupied=room.occupancy,
            available=room.available_beds,
            status=room.status,
        )
        for room in rooms
    ]


def available_rooms(rooms: Iterable[Room]) -> List[Room]:
    """Rooms that can take another resident right now."""
    return [r for r in rooms if not r.is_full and not r.is_under_maintenance]


def occupancy_summary(residents: Iterable[Resident], rooms: Sequence[Room]) -> OccupancySummary:
    return OccupancySummary(
        total_rooms=len(rooms),
        active_residents=sum(1 for r in residents if r.is_active),
        total_capacity=sum(r.capacity for r in rooms),
        occupied_beds=sum(r.occupancy for r in rooms),
    )


def due_date_for(payment: Payment, resident: Resident) -> date:
    """
    When ``payment`` falls due.

    A payment for the month the resident joined is due on the joining
    date; later months fall due on the resident's due day.
    """
    if month_key(resident.joining_date) == payment.month:
        return resident.joining_date
    return day_in_month(payment.month, resident.payment_day)


def pending_dues(
    payments: Iterable[Payment],
    residents: Iterable[Resident],
    limit: Optional[int] = None,
) -> List[PendingDue]:
    """
    Outstanding payments joined with their resident, in ledger order.

    Payments whose resident is unknown are skipped.
    """
    by_id: Dict[str, Resident] = {r.id: r for r in residents}
    dues: List[PendingDue] = []
    for payment in payments:
        if not payment.status.is_outstanding:
            continue
        resident = by_id.get(payment.resident_id)
        if resident is None:
            continue
        dues.append(
            PendingDue(
                payment=payment,
                resident_name=resident.name,
                room_number=resident.room_number,
                due_date=due_date_for(payment, resident),
            )
        )
        if limit is not None and len(dues) >= limit:
            break
    return dues


def stay_duration_months(resident: Resident, today: date) -> int:
    """Calendar months since joining, counted at month boundaries."""
    return months_between(resident.joining_date, today)


def search_residents(
    residents: Iterable[Resident],
    term: Optional[str] = None,
    status: Optional[ResidentStatus] = ResidentStatus.ACTIVE,
    room_number: Optional[str] = None,
) -> List[Resident]:
    """
    Filter the resident list.

    ``term`` matches name or home address case-insensitively, or any part
    of the contact number. ``status=None`` keeps both active and inactive.
    """
    needle = (term or "").strip().lower()
    matches: List[Resident] = []
    for resident in residents:
        if status is not None and resident.status is not ResidentStatus(status):
            continue
        if room_number is not None and resident.room_number != room_number:
            continue
        if needle and not (
            needle in resident.name.lower()
            or needle in resident.contact_number
            or needle in resident.home_address.lower()
        ):
            continue
        matches.append(resident)
    return matches
