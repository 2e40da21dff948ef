from datetime import date

from lodgebook.schemas import PaymentStatus, ResidentStatus, RoomStatus
from lodgebook.services.analytics import (
    available_rooms,
    due_date_for,
    occupancy_summary,
    pending_dues,
    room_occupancy,
    search_residents,
    stay_duration_months,
)


def test_room_occupancy(make_room):
    rows = room_occupancy([make_room("101", 2, ["a"]), make_room("102", 3)])
    assert [(r.room_number, r.occupied, r.available) for r in rows] == [
        ("101", 1, 1),
        ("102", 0, 3),
    ]


def test_available_rooms_skip_full_and_maintenance(make_room):
    rooms = [
        make_room("101", 1, ["a"], status=RoomStatus.OCCUPIED),
        make_room("102", 2, status=RoomStatus.MAINTENANCE),
        make_room("103", 2, ["b"]),
    ]
    assert [r.room_number for r in available_rooms(rooms)] == ["103"]


def test_occupancy_summary(make_room, make_resident):
    residents = [
        make_resident("a"),
        make_resident("b"),
        make_resident("c", status=ResidentStatus.INACTIVE),
    ]
    rooms = [make_room("101", 2, ["a", "b"]), make_room("102", 2)]

    summary = occupancy_summary(residents, rooms)

    assert summary.active_residents == 2
    assert summary.total_capacity == 4
    assert summary.vacant_beds == 2
    assert summary.occupancy_rate == 50.0


def test_occupancy_rate_without_rooms():
    assert occupancy_summary([], []).occupancy_rate == 0.0


class TestPendingDues:
    def test_joining_month_is_due_on_joining_date(self, make_resident, make_payment):
        resident = make_resident("a", joining_date=date(2024, 5, 10), payment_day=5)
        payment = make_payment(5000, status=PaymentStatus.PENDING, month="2024-05", resident_id="a")
        assert due_date_for(payment, resident) == date(2024, 5, 10)

    def test_later_months_use_due_day(self, make_resident, make_payment):
        resident = make_resident("a", joining_date=date(2024, 1, 10), payment_day=5)
        payment = make_payment(5000, status=PaymentStatus.PENDING, month="2024-05", resident_id="a")
        assert due_date_for(payment, resident) == date(2024, 5, 5)

    def test_due_day_clamped_to_month_end(self, make_resident, make_payment):
        resident = make_resident("a", joining_date=date(2023, 12, 1), payment_day=31)
        payment = make_payment(5000, status=PaymentStatus.OVERDUE, month="2024-02", resident_id="a")
        assert due_date_for(payment, resident) == date(2024, 2, 29)

    def test_skips_paid_and_orphaned_payments(self, make_resident, make_payment):
        residents = [make_resident("a", name="Asha")]
        payments = [
            make_payment(1, status=PaymentStatus.PENDING, resident_id="a"),
            make_payment(2, resident_id="a"),
            make_payment(3, status=PaymentStatus.OVERDUE, resident_id="ghost"),
            make_payment(4, status=PaymentStatus.OVERDUE, resident_id="a"),
        ]

        dues = pending_dues(payments, residents)

        assert [d.payment.amount for d in dues] == [1, 4]
        assert dues[0].resident_name == "Asha"
        assert dues[0].room_number == "101"

    def test_limit(self, make_resident, make_payment):
        payments = [make_payment(i, status=PaymentStatus.PENDING, resident_id="a") for i in range(1, 8)]
        assert len(pending_dues(payments, [make_resident("a")], limit=5)) == 5


def test_stay_duration_counts_month_boundaries(make_resident):
    resident = make_resident(joining_date=date(2024, 1, 31))
    assert stay_duration_months(resident, date(2024, 2, 1)) == 1
    assert stay_duration_months(resident, date(2024, 1, 31)) == 0
    assert stay_duration_months(resident, date(2025, 1, 15)) == 12


class TestSearchResidents:
    def test_defaults_to_active_residents(self, make_resident):
        residents = [make_resident("a"), make_resident("b", status=ResidentStatus.INACTIVE)]
        assert [r.id for r in search_residents(residents)] == ["a"]
        assert [r.id for r in search_residents(residents, status=None)] == ["a", "b"]

    def test_term_matches_name_phone_or_address(self, make_resident):
        residents = [make_resident("a", name="Asha Rao"), make_resident("b", name="Vikram")]
        assert [r.id for r in search_residents(residents, "asha")] == ["a"]
        assert len(search_residents(residents, "98765")) == 2
        assert len(search_residents(residents, "mg road")) == 2

    def test_room_filter(self, make_resident):
        residents = [make_resident("a", "101"), make_resident("b", "102")]
        assert [r.id for r in search_residents(residents, room_number="102")] == ["b"]
