from datetime import date

import pytest

from lodgebook.schemas import PaymentStatus, PaymentType
from lodgebook.services.export import (
    PaymentExportService,
    PaymentFilter,
    PaymentSortField,
    SortDirection,
    filter_payments,
)


@pytest.fixture
def residents(make_resident):
    return [make_resident("a", name="Asha Rao"), make_resident("b", name="Vikram Shah")]


@pytest.fixture
def payments(make_payment):
    return [
        make_payment(5000, on=date(2024, 4, 5), resident_id="a"),
        make_payment(2000, PaymentType.MESS, PaymentStatus.PENDING, on=date(2024, 5, 2), resident_id="b"),
        make_payment(300, PaymentType.OTHER, PaymentStatus.OVERDUE, on=date(2024, 3, 9),
                     resident_id="b", notes="Broken window"),
        make_payment(7000, on=date(2024, 5, 1), resident_id="ghost"),
    ]


class TestFilterPayments:
    def test_default_is_newest_first(self, payments, residents):
        result = filter_payments(payments, residents)
        assert [p.date for p in result] == [
            date(2024, 5, 2), date(2024, 5, 1), date(2024, 4, 5), date(2024, 3, 9),
        ]

    def test_filters_by_type_status_and_month(self, payments, residents):
        assert [p.amount for p in filter_payments(payments, residents, PaymentFilter(type="mess"))] == [2000]
        assert [p.amount for p in filter_payments(payments, residents, PaymentFilter(status="overdue"))] == [300]
        assert [p.amount for p in filter_payments(payments, residents, PaymentFilter(month="2024-05"))] == [
            2000, 7000,
        ]

    def test_search_matches_resident_name_or_notes(self, payments, residents):
        by_name = filter_payments(payments, residents, PaymentFilter(search="VIKRAM"))
        assert sorted(p.amount for p in by_name) == [300, 2000]
        by_notes = filter_payments(payments, residents, PaymentFilter(search="window"))
        assert [p.amount for p in by_notes] == [300]

    def test_sort_by_amount_ascending(self, payments, residents):
        criteria = PaymentFilter(sort_field=PaymentSortField.AMOUNT, sort_direction=SortDirection.ASC)
        assert [p.amount for p in filter_payments(payments, residents, criteria)] == [300, 2000, 5000, 7000]

    def test_sort_by_status_uses_paid_pending_overdue_order(self, payments, residents):
        criteria = PaymentFilter(sort_field="status", sort_direction="asc")
        statuses = [p.status for p in filter_payments(payments, residents, criteria)]
        assert statuses == [
            PaymentStatus.PAID, PaymentStatus.PAID, PaymentStatus.PENDING, PaymentStatus.OVERDUE,
        ]


class TestExportCsv:
    def test_csv_layout(self, payments, residents, today):
        result = PaymentExportService(residents).export_csv(payments[:1] + payments[2:3], today=today)

        assert result["filename"] == "payments-export-2024-05-15.csv"
        assert result["count"] == 2
        assert result["data"].splitlines() == [
            "date,resident,amount,type,status,month,notes",
            '"2024-04-05","Asha Rao","5000","rent","paid","2024-04",""',
            '"2024-03-09","Vikram Shah","300","other","overdue","2024-03","Broken window"',
        ]

    def test_unknown_resident(self, payments, residents, today):
        result = PaymentExportService(residents).export_csv(payments[3:], today=today)
        assert '"Unknown"' in result["data"].splitlines()[1]

    def test_since_filters_by_payment_date(self, payments, residents, today):
        result = PaymentExportService(residents).export_csv(payments, today=today, since=date(2024, 5, 1))
        assert result["count"] == 2

    def test_empty_export_has_header_only(self, residents, today):
        result = PaymentExportService(residents).export_csv([], today=today)
        assert result["data"] == "date,resident,amount,type,status,month,notes\n"
        assert result["count"] == 0
