"""
Shared fixtures.

Stores are built with a fixed clock, sequential ids and an in-memory
gateway so every test is deterministic.
"""

from datetime import date
from typing import Optional

import pytest

from lodgebook.config.settings import Settings
from lodgebook.core.exceptions import PersistenceError
from lodgebook.repositories import InMemoryGateway
from lodgebook.schemas import (
    Payment,
    PaymentStatus,
    PaymentType,
    Resident,
    ResidentStatus,
    Room,
    RoomStatus,
)
from lodgebook.services.store import HostelStore

TODAY = date(2024, 5, 15)


class SequentialIds:
    """Id factory yielding id-1, id-2, ..."""

    def __init__(self, prefix: str = "id"):
        self.prefix = prefix
        self.count = 0

    def __call__(self) -> str:
        self.count += 1
        return f"{self.prefix}-{self.count}"


class FlakyGateway(InMemoryGateway):
    """In-memory gateway whose writes can be switched to fail."""

    def __init__(self):
        super().__init__()
        self.fail = False

    def save(self, key: str, payload: bytes) -> None:
        if self.fail:
            raise PersistenceError("disk full", collection=key, operation="save")
        super().save(key, payload)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def settings() -> Settings:
    return Settings(ENVIRONMENT="testing")


@pytest.fixture
def ids() -> SequentialIds:
    return SequentialIds()


@pytest.fixture
def gateway() -> FlakyGateway:
    return FlakyGateway()


@pytest.fixture
def store(gateway, settings, ids) -> HostelStore:
    return HostelStore(gateway, settings=settings, clock=lambda: TODAY, id_factory=ids).load()


@pytest.fixture
def resident_data():
    """Factory for an onboarding form payload (camelCase, as a UI sends it)."""

    def _make(**overrides) -> dict:
        data = {
            "name": "Asha Rao",
            "contactNumber": "9876543210",
            "homeAddress": "12 MG Road, Pune",
            "roomNumber": "101",
            "rentAmount": 5000,
            "paymentDate": 5,
            "securityDeposit": 10000,
            "joiningDate": "2024-05-01",
            "messSubscription": "subscribed",
        }
        data.update(overrides)
        return data

    return _make


@pytest.fixture
def make_resident():
    def _make(
        resident_id: str = "res-1",
        room_number: str = "101",
        status: ResidentStatus = ResidentStatus.ACTIVE,
        name: str = "Asha Rao",
        joining_date: date = date(2024, 1, 10),
        payment_day: int = 5,
        rent_amount: int = 5000,
        security_deposit: int = 10000,
    ) -> Resident:
        return Resident(
            id=resident_id,
            name=name,
            contact_number="9876543210",
            home_address="12 MG Road, Pune",
            room_number=room_number,
            rent_amount=rent_amount,
            payment_day=payment_day,
            security_deposit=security_deposit,
            joining_date=joining_date,
            status=status,
        )

    return _make


@pytest.fixture
def make_payment():
    counter = SequentialIds("pay")

    def _make(
        amount: int,
        payment_type: PaymentType = PaymentType.RENT,
        status: PaymentStatus = PaymentStatus.PAID,
        on: date = TODAY,
        month: Optional[str] = None,
        resident_id: str = "res-1",
        notes: Optional[str] = None,
    ) -> Payment:
        return Payment(
            id=counter(),
            resident_id=resident_id,
            amount=amount,
            date=on,
            payment_type=payment_type,
            month=month or f"{on.year:04d}-{on.month:02d}",
            status=status,
            notes=notes,
        )

    return _make


@pytest.fixture
def make_room():
    def _make(
        room_number: str = "101",
        capacity: int = 2,
        occupied_by=None,
        status: RoomStatus = RoomStatus.VACANT,
    ) -> Room:
        return Room(
            id=f"room-{room_number}",
            room_number=room_number,
            capacity=capacity,
            occupied_by=list(occupied_by or []),
            status=status,
        )

    return _make
