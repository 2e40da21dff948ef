# lodgebook/services/payment/payment_ledger.py
"""
Payment ledger.

Payments are appended, never removed. After creation only status,
amount, date and notes can be corrected.
"""
from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import Callable, List, Optional, Sequence

from lodgebook.core.exceptions import PaymentNotFoundError, ResidentNotFoundError
from lodgebook.schemas import (
    MessFeeConfig,
    Payment,
    PaymentCreate,
    PaymentStatus,
    PaymentType,
    PaymentUpdate,
    Resident,
)
from lodgebook.utils.date_utils import month_key

logger = logging.getLogger(__name__)

SECURITY_DEPOSIT_NOTE = "Security deposit"


def new_id() -> str:
    return str(uuid.uuid4())


def default_payment_amount(
    resident: Optional[Resident],
    payment_type: PaymentType,
    mess_fee: Optional[MessFeeConfig] = None,
) -> int:
    """
    Amount pre-filled for a new payment of ``payment_type``.

    Rent and security come from the resident, mess from the configured
    monthly rate; anything else starts at zero.
    """
    payment_type = PaymentType(payment_type)
    if payment_type is PaymentType.MESS:
        return mess_fee.monthly_rate if mess_fee is not None else 0
    if resident is None:
        return 0
    if payment_type is PaymentType.RENT:
        return resident.rent_amount
    if payment_type is PaymentType.SECURITY:
        return resident.security_deposit
    return 0


class PaymentLedger:
    """
    Append and correct payments within the lists of one command.

    Both lists are lent by the store; ``payments`` is mutated in place.
    """

    def __init__(
        self,
        payments: List[Payment],
        residents: Sequence[Resident],
        id_factory: Callable[[], str] = new_id,
    ) -> None:
        self.payments = payments
        self.residents = residents
        self._id_factory = id_factory

    def get(self, payment_id: str) -> Payment:
        for payment in self.payments:
            if payment.id == payment_id:
                return payment
        raise PaymentNotFoundError(payment_id)

    def record(self, command: PaymentCreate) -> Payment:
        """
        Append a payment for an existing resident.

        Raises:
            ResidentNotFoundError: If ``resident_id`` is unknown
        """
        if not any(r.id == command.resident_id for r in self.residents):
            raise ResidentNotFoundError(command.resident_id)

        payment = Payment(
            id=self._id_factory(),
            resident_id=command.resident_id,
            amount=command.amount,
            date=command.date,
            payment_type=command.payment_type,
            month=command.month or month_key(command.date),
            status=command.status,
            notes=command.notes,
        )
        self.payments.append(payment)
        logger.info(
            f"Recorded {payment.payment_type.value} payment {payment.id} of {payment.amount} "
            f"for resident {payment.resident_id} ({payment.status.value})"
        )
        return payment

    def record_security_deposit(self, resident: Resident, today: date) -> Optional[Payment]:
        """Record the paid deposit of a newly onboarded resident, if any."""
        if resident.security_deposit <= 0:
            return None
        return self.record(
            PaymentCreate(
                resident_id=resident.id,
                amount=resident.security_deposit,
                date=today,
                payment_type=PaymentType.SECURITY,
                month=month_key(today),
                status=PaymentStatus.PAID,
                notes=SECURITY_DEPOSIT_NOTE,
            )
        )

    def update(self, command: PaymentUpdate) -> Payment:
        """
        Apply the fields set on ``command`` to the stored payment.

        Raises:
            PaymentNotFoundError: If the payment id is unknown
        """
        payment = self.get(command.id)
        changes = command.model_dump(exclude_unset=True, exclude={"id"})
        for field_name, value in changes.items():
            if field_name == "notes":
                value = value or None
            elif value is None:
                continue
            setattr(payment, field_name, value)
        logger.info(f"Updated payment {payment.id}: {', '.join(sorted(changes)) or 'no changes'}")
        return payment

    def set_status(self, payment_id: str, status: PaymentStatus) -> Payment:
        payment = self.get(payment_id)
        status = PaymentStatus(status)
        if payment.status is not status:
            logger.info(f"Payment {payment_id} status {payment.status.value} -> {status.value}")
            payment.status = status
        return payment
