"""
Payment listing and export service.

Filters and sorts the ledger for the payments screen and projects it to
CSV for download.
"""

import csv
import io
import logging
from datetime import date
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from pydantic import Field

from lodgebook.schemas import BaseSchema, Payment, PaymentStatus, PaymentType, Resident
from lodgebook.utils.date_utils import MONTH_KEY_PATTERN

logger = logging.getLogger(__name__)

UNKNOWN_RESIDENT = "Unknown"

CSV_COLUMNS = ["date", "resident", "amount", "type", "status", "month", "notes"]

_STATUS_ORDER = {
    PaymentStatus.PAID: 0,
    PaymentStatus.PENDING: 1,
    PaymentStatus.OVERDUE: 2,
}


class PaymentSortField(str, Enum):
    DATE = "date"
    AMOUNT = "amount"
    STATUS = "status"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class PaymentFilter(BaseSchema):
    """Criteria of the payments listing. Unset criteria match everything."""

    payment_type: Optional[PaymentType] = Field(default=None, alias="type")
    status: Optional[PaymentStatus] = Field(default=None)
    month: Optional[str] = Field(default=None, pattern=MONTH_KEY_PATTERN)
    search: Optional[str] = Field(default=None, description="Resident name or notes")
    sort_field: PaymentSortField = Field(default=PaymentSortField.DATE)
    sort_direction: SortDirection = Field(default=SortDirection.DESC)


def _sort_key(field: PaymentSortField):
    if field is PaymentSortField.AMOUNT:
        return lambda p: p.amount
    if field is PaymentSortField.STATUS:
        return lambda p: _STATUS_ORDER[p.status]
    return lambda p: p.date


def filter_payments(
    payments: Iterable[Payment],
    residents: Iterable[Resident],
    criteria: Optional[PaymentFilter] = None,
) -> List[Payment]:
    """
    Apply ``criteria`` and return the matching payments in sort order.

    Ties keep ledger order in either direction.
    """
    criteria = criteria or PaymentFilter()
    names = {r.id: r.name.lower() for r in residents}
    needle = (criteria.search or "").strip().lower()

    matches: List[Payment] = []
    for payment in payments:
        if criteria.payment_type is not None and payment.payment_type is not criteria.payment_type:
            continue
        if criteria.status is not None and payment.status is not criteria.status:
            continue
        if criteria.month is not None and payment.month != criteria.month:
            continue
        if needle:
            name = names.get(payment.resident_id, "")
            notes = (payment.notes or "").lower()
            if needle not in name and needle not in notes:
                continue
        matches.append(payment)

    return sorted(
        matches,
        key=_sort_key(criteria.sort_field),
        reverse=criteria.sort_direction is SortDirection.DESC,
    )


class PaymentExportService:
    """
    CSV export of the payment ledger.

    The header row is bare; every value is quoted and missing
    residents are shown as "Unknown".
    """

    def __init__(self, residents: Iterable[Resident]):
        self.resident_names: Dict[str, str] = {r.id: r.name for r in residents}

    def to_row(self, payment: Payment) -> Dict[str, Any]:
        return {
            "date": payment.date.isoformat(),
            "resident": self.resident_names.get(payment.resident_id, UNKNOWN_RESIDENT),
            "amount": payment.amount,
            "type": payment.payment_type.value,
            "status": payment.status.value,
            "month": payment.month,
            "notes": payment.notes or "",
        }

    def export_csv(
        self,
        payments: Iterable[Payment],
        today: date,
        since: Optional[date] = None,
    ) -> Dict[str, Any]:
        """
        Export payments dated on or after ``since`` (all when ``None``).

        Returns:
            Export result with the CSV text, file name and row count
        """
        selected = [p for p in payments if since is None or p.date >= since]

        output = io.StringIO()
        writer = csv.DictWriter(
            output,
            fieldnames=CSV_COLUMNS,
            quoting=csv.QUOTE_ALL,
            lineterminator="\n",
        )
        output.write(",".join(CSV_COLUMNS) + "\n")
        for payment in selected:
            writer.writerow(self.to_row(payment))

        csv_data = output.getvalue()
        output.close()

        filename = f"payments-export-{today.isoformat()}.csv"
        logger.info(f"Exported {len(selected)} payments to {filename}")
        return {
            "format": "CSV",
            "filename": filename,
            "data": csv_data,
            "size": len(csv_data),
            "count": len(selected),
        }
