"""
Report service.

Builds the revenue and distribution reports shown on the reports and
dashboard screens.

Notes:
- A report window runs from ``report_window_start(range, today)`` through
  today. Monthly rows are grouped by the payment's billing ``month``;
  distributions filter by the payment ``date``.
- Security deposits are excluded from revenue rows but shown in the
  type distribution.
"""

import logging
from datetime import date
from enum import Enum
from typing import Dict, Iterable, List

from lodgebook.schemas import Payment, PaymentStatus, PaymentType
from lodgebook.schemas.analytics import MonthlyRevenue
from lodgebook.utils.date_utils import iter_month_keys, subtract_months

logger = logging.getLogger(__name__)


class ReportRange(str, Enum):
    """Preset report windows."""
    THREE_MONTHS = "3m"
    SIX_MONTHS = "6m"
    ONE_YEAR = "1y"

    @property
    def months(self) -> int:
        return {"3m": 3, "6m": 6, "1y": 12}[self.value]


def report_window_start(report_range: ReportRange, today: date) -> date:
    return subtract_months(today, ReportRange(report_range).months)


def monthly_revenue_breakdown(
    payments: Iterable[Payment],
    start: date,
    today: date,
) -> List[MonthlyRevenue]:
    """
    One row per month from the month of ``start`` through the month of ``today``.

    Only paid payments count; deposits are left out entirely.
    """
    rows: Dict[str, MonthlyRevenue] = {
        key: MonthlyRevenue(month=key) for key in iter_month_keys(start, today)
    }
    for payment in payments:
        row = rows.get(payment.month)
        if row is None or payment.status is not PaymentStatus.PAID:
            continue
        if payment.payment_type is PaymentType.RENT:
            row.rent += payment.amount
        elif payment.payment_type is PaymentType.MESS:
            row.mess += payment.amount
        elif payment.payment_type is not PaymentType.SECURITY:
            row.other += payment.amount
    return list(rows.values())


def recent_monthly_revenue(
    payments: Iterable[Payment],
    today: date,
    months: int = 6,
) -> List[MonthlyRevenue]:
    """The dashboard chart: the last ``months`` months ending with the current one."""
    return monthly_revenue_breakdown(payments, subtract_months(today, months - 1), today)


def payment_type_distribution(
    payments: Iterable[Payment],
    since: date,
) -> Dict[PaymentType, int]:
    """Paid amount per type for payments dated on or after ``since``."""
    totals: Dict[PaymentType, int] = {t: 0 for t in PaymentType}
    for payment in payments:
        if payment.date >= since and payment.status is PaymentStatus.PAID:
            totals[payment.payment_type] += payment.amount
    return totals


def payment_status_distribution(
    payments: Iterable[Payment],
    since: date,
) -> Dict[PaymentStatus, int]:
    """
    Count per status.

    Paid payments count only when dated on or after ``since``; every
    unpaid payment counts regardless of its date.
    """
    counts: Dict[PaymentStatus, int] = {s: 0 for s in PaymentStatus}
    for payment in payments:
        if payment.date >= since or payment.status is not PaymentStatus.PAID:
            counts[payment.status] += 1
    return counts


def collected_since(payments: Iterable[Payment], since: date) -> int:
    return sum(p.amount for p in payments if p.counts_as_revenue and p.date >= since)


class ReportService:
    """
    Reports for one preset window.

    Example:
        >>> service = ReportService(store.payments, today=date(2024, 5, 15))
        >>> service.monthly_revenue(ReportRange.THREE_MONTHS)
    """

    def __init__(self, payments: Iterable[Payment], today: date) -> None:
        self.payments = list(payments)
        self.today = today

    def window_start(self, report_range: ReportRange) -> date:
        return report_window_start(report_range, self.today)

    def monthly_revenue(self, report_range: ReportRange) -> List[MonthlyRevenue]:
        return monthly_revenue_breakdown(self.payments, self.window_start(report_range), self.today)

    def type_distribution(self, report_range: ReportRange) -> Dict[PaymentType, int]:
        return payment_type_distribution(self.payments, self.window_start(report_range))

    def status_distribution(self, report_range: ReportRange) -> Dict[PaymentStatus, int]:
        return payment_status_distribution(self.payments, self.window_start(report_range))

    def summary(self, report_range: ReportRange) -> Dict[str, object]:
        report_range = ReportRange(report_range)
        start = self.window_start(report_range)
        rows = monthly_revenue_breakdown(self.payments, start, self.today)
        logger.debug(f"Built {report_range.value} report from {start} ({len(rows)} months)")
        return {
            "range": report_range.value,
            "start": start,
            "end": self.today,
            "collected": collected_since(self.payments, start),
            "monthly": rows,
            "by_type": payment_type_distribution(self.payments, start),
            "by_status": payment_status_distribution(self.payments, start),
        }
