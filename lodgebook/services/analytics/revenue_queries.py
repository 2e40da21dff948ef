"""
Revenue and pending-payment queries.

Pure functions over a payment list. Revenue always means payments that
are ``paid`` and not ``security``: deposits are refundable and never
count as income.
"""

from datetime import date
from typing import Iterable, List

from lodgebook.schemas import Payment, PaymentStatus
from lodgebook.schemas.analytics import OutstandingSummary
from lodgebook.utils.date_utils import month_key


def pending_payments(payments: Iterable[Payment]) -> List[Payment]:
    """Payments still owed (pending or overdue), in ledger order."""
    return [p for p in payments if p.status.is_outstanding]


def payments_for(payments: Iterable[Payment], resident_id: str) -> List[Payment]:
    return [p for p in payments if p.resident_id == resident_id]


def total_revenue(payments: Iterable[Payment]) -> int:
    return sum(p.amount for p in payments if p.counts_as_revenue)


def month_revenue(payments: Iterable[Payment], month: str) -> int:
    """Revenue billed to ``month`` (a YYYY-MM key)."""
    return sum(p.amount for p in payments if p.counts_as_revenue and p.month == month)


def current_month_revenue(payments: Iterable[Payment], today: date) -> int:
    return month_revenue(payments, month_key(today))


def revenue_for_range(payments: Iterable[Payment], start: date, end: date) -> int:
    """Revenue of payments dated in the half-open range ``[start, end)``."""
    return sum(
        p.amount for p in payments
        if p.counts_as_revenue and start <= p.date < end
    )


def resident_total_paid(payments: Iterable[Payment], resident_id: str) -> int:
    """Everything a resident has paid, deposit included."""
    return sum(
        p.amount for p in payments
        if p.resident_id == resident_id and p.status is PaymentStatus.PAID
    )


def outstanding_summary(payments: Iterable[Payment]) -> OutstandingSummary:
    summary = OutstandingSummary()
    for payment in payments:
        if payment.status is PaymentStatus.PENDING:
            summary.pending_count += 1
            summary.pending_amount += payment.amount
        elif payment.status is PaymentStatus.OVERDUE:
            summary.overdue_count += 1
            summary.overdue_amount += payment.amount
    return summary
